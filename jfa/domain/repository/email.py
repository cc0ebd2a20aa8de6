"""Email directory interface."""

import asyncio
from abc import ABC, abstractmethod

from jfa.domain.value import JellyfinUserId


class EmailRepository(ABC):
    """Mapping from Jellyfin user ID to contact address.

    Persisted independently of invites; same locking contract as
    ``InviteRepository``.
    """

    def __init__(self) -> None:
        self.lock = asyncio.Lock()

    @abstractmethod
    async def load(self) -> None:
        pass

    @abstractmethod
    async def persist(self) -> None:
        pass

    @abstractmethod
    def get(self, user_id: JellyfinUserId) -> str | None:
        pass

    @abstractmethod
    def set(self, user_id: JellyfinUserId, address: str) -> None:
        pass

    @abstractmethod
    def all(self) -> dict[JellyfinUserId, str]:
        pass
