"""Jellyfin account as seen through the provisioning API."""

from datetime import datetime
from typing import Any

from pydantic import Field

from jfa.domain.model.common import DomainModel
from jfa.domain.value import JellyfinUserId
from jfa.util.timeutil import parse_datetime


class JellyfinUser(DomainModel):
    """Subset of a Jellyfin user record we care about."""

    id: JellyfinUserId
    name: str
    last_activity: datetime | None = None
    policy: dict[str, Any] = Field(default_factory=dict)
    configuration: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_admin(self) -> bool:
        return bool(self.policy.get("IsAdministrator", False))

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "JellyfinUser":
        """Build from a raw Jellyfin ``/Users`` record."""
        last_activity = data.get("LastActivityDate")
        return cls(
            id=JellyfinUserId(data["Id"]),
            name=data["Name"],
            last_activity=parse_datetime(last_activity) if last_activity else None,
            policy=data.get("Policy") or {},
            configuration=data.get("Configuration") or {},
        )
