"""In-memory invite repository for testing."""

from jfa.domain.model.invite import Invite
from jfa.domain.repository.invite import InviteRepository
from jfa.domain.value import InviteCode
from jfa.persistence.error import PersistenceError


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing.

    Keeps a committed copy and a working view, so a failed persist behaves
    like a failed file write: the view falls back to the committed state.
    """

    def __init__(self) -> None:
        super().__init__()
        self._committed: dict[str, Invite] = {}
        self._invites: dict[str, Invite] = {}
        self.persist_count = 0
        self.fail_persist = False

    async def load(self) -> None:
        """Reset the view to the committed state."""
        self._invites = dict(self._committed)

    async def persist(self) -> None:
        """Commit the view, or fail if ``fail_persist`` is set."""
        if self.fail_persist:
            self._invites = dict(self._committed)
            raise PersistenceError("Simulated write failure")
        self._committed = dict(self._invites)
        self.persist_count += 1

    def get(self, code: InviteCode) -> Invite | None:
        return self._invites.get(str(code))

    def put(self, invite: Invite) -> None:
        self._invites[str(invite.code)] = invite

    def delete(self, code: InviteCode) -> bool:
        return self._invites.pop(str(code), None) is not None

    def all(self) -> list[Invite]:
        return list(self._invites.values())

    def seed(self, *invites: Invite) -> None:
        """Store invites directly, bypassing the persist counter."""
        for invite in invites:
            self._committed[str(invite.code)] = invite
        self._invites = dict(self._committed)
