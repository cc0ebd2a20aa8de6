"""Invite store interface."""

import asyncio
from abc import ABC, abstractmethod

from jfa.domain.model.invite import Invite
from jfa.domain.value import InviteCode


class InviteRepository(ABC):
    """Store owning every live Invite record.

    The store is shared by all requests. Callers wrap each
    load-check-mutate-persist sequence in ``lock``::

        async with repo.lock:
            await repo.load()
            ...
            await repo.persist()

    ``persist()`` is the only durable commit point; a mutation that is not
    followed by a successful persist is lost on the next ``load()``.
    """

    def __init__(self) -> None:
        self.lock = asyncio.Lock()

    @abstractmethod
    async def load(self) -> None:
        """Refresh the in-memory view from durable storage.

        May be skipped when the view is known to be current.
        """
        pass

    @abstractmethod
    async def persist(self) -> None:
        """Atomically write the whole collection.

        Raises:
            PersistenceError: If the write failed; the durable state is
                unchanged and the in-memory view is reloaded from it
        """
        pass

    @abstractmethod
    def get(self, code: InviteCode) -> Invite | None:
        """Return the invite with this code, if any."""
        pass

    @abstractmethod
    def put(self, invite: Invite) -> None:
        """Insert or replace an invite (in memory until persisted)."""
        pass

    @abstractmethod
    def delete(self, code: InviteCode) -> bool:
        """Remove an invite. Returns False if it was not there."""
        pass

    @abstractmethod
    def all(self) -> list[Invite]:
        """Snapshot of every invite in the in-memory view."""
        pass
