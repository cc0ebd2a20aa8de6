"""Ports for the account services jfa drives.

Implementations live in ``jfa.adapter``. Every call returns an
``UpstreamResponse`` instead of raising, so callers can tell a transport
error (``error`` set, ``status`` 0) from a non-success HTTP status and
decide per call whether to abort, log, or collect.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from jfa.domain.value import JellyfinUserId


class UpstreamResponse(BaseModel):
    """Outcome of one call to Jellyfin or Ombi."""

    status: int = 0
    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status in (200, 204) and self.error is None

    def describe(self) -> str:
        """Short "<status>: <error>" summary for error maps."""
        return f"{self.status}: {self.error}"


class JellyfinClient(ABC):
    """Account provisioning on the Jellyfin server."""

    @abstractmethod
    async def new_user(self, username: str, password: str) -> UpstreamResponse:
        """Create an account. ``data`` is the raw user record."""
        pass

    @abstractmethod
    async def delete_user(self, user_id: JellyfinUserId) -> UpstreamResponse:
        pass

    @abstractmethod
    async def user_by_name(self, username: str) -> UpstreamResponse:
        """Look up an account by name. ``data`` is None if absent."""
        pass

    @abstractmethod
    async def user_by_id(self, user_id: JellyfinUserId) -> UpstreamResponse:
        pass

    @abstractmethod
    async def get_users(self) -> UpstreamResponse:
        """List accounts. ``data`` is a list of raw user records."""
        pass

    @abstractmethod
    async def set_policy(
        self, user_id: JellyfinUserId, policy: dict[str, Any]
    ) -> UpstreamResponse:
        pass

    @abstractmethod
    async def set_configuration(
        self, user_id: JellyfinUserId, configuration: dict[str, Any]
    ) -> UpstreamResponse:
        pass

    @abstractmethod
    async def get_display_preferences(
        self, user_id: JellyfinUserId
    ) -> UpstreamResponse:
        pass

    @abstractmethod
    async def set_display_preferences(
        self, user_id: JellyfinUserId, displayprefs: dict[str, Any]
    ) -> UpstreamResponse:
        pass

    def invalidate_cache(self) -> None:
        """Force the next user listing to hit the server."""
        pass


class OmbiClient(ABC):
    """Secondary account creation on an Ombi request server."""

    @abstractmethod
    async def new_user(
        self, username: str, password: str, email: str, template: dict[str, Any]
    ) -> UpstreamResponse:
        """Create an Ombi user. On failure ``data`` lists Ombi's own errors."""
        pass

    @abstractmethod
    async def get_users(self) -> UpstreamResponse:
        pass

    @abstractmethod
    async def template_by_id(self, user_id: str) -> UpstreamResponse:
        """Fetch a user to use as the template for new Ombi accounts."""
        pass
