"""In-memory email directory for testing."""

from jfa.domain.repository.email import EmailRepository
from jfa.domain.value import JellyfinUserId


class InMemoryEmailRepository(EmailRepository):
    """In-memory implementation of EmailRepository for testing."""

    def __init__(self) -> None:
        super().__init__()
        self._emails: dict[JellyfinUserId, str] = {}
        self.persist_count = 0

    async def load(self) -> None:
        pass

    async def persist(self) -> None:
        self.persist_count += 1

    def get(self, user_id: JellyfinUserId) -> str | None:
        return self._emails.get(user_id)

    def set(self, user_id: JellyfinUserId, address: str) -> None:
        self._emails[user_id] = address

    def all(self) -> dict[JellyfinUserId, str]:
        return dict(self._emails)
