"""JSON-file implementation of the email directory."""

from jfa.config import StorageSettings
from jfa.domain.repository import EmailRepository
from jfa.domain.value import JellyfinUserId
from jfa.persistence.error import PersistenceError
from jfa.persistence.jsonfile import JsonFile


class JsonEmailRepository(EmailRepository):
    """Email directory backed by ``emails.json`` (user ID to address)."""

    def __init__(self, settings: StorageSettings) -> None:
        super().__init__()
        self.file = JsonFile(settings.emails_path, settings.cache_seconds)
        self._emails: dict[JellyfinUserId, str] = {}

    async def load(self) -> None:
        if self.file.fresh:
            return
        data = await self.file.read(default={})
        self._emails = {
            JellyfinUserId(user_id): address
            for user_id, address in data.items()
            if isinstance(address, str)
        }

    async def persist(self) -> None:
        try:
            await self.file.write(dict(self._emails))
        except PersistenceError:
            await self.load()
            raise

    def get(self, user_id: JellyfinUserId) -> str | None:
        return self._emails.get(user_id)

    def set(self, user_id: JellyfinUserId, address: str) -> None:
        self._emails[user_id] = address

    def all(self) -> dict[JellyfinUserId, str]:
        return dict(self._emails)
