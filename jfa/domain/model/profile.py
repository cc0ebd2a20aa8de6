"""Provisioning templates applied to new Jellyfin accounts."""

from typing import Any

from pydantic import Field

from jfa.domain.model.common import DomainModel


class UserTemplate(DomainModel):
    """Policy and homescreen settings copied onto an account.

    ``configuration`` and ``displayprefs`` together form the homescreen;
    one without the other is never applied.
    """

    policy: dict[str, Any] = Field(default_factory=dict)
    configuration: dict[str, Any] = Field(default_factory=dict)
    displayprefs: dict[str, Any] = Field(default_factory=dict)

    @property
    def has_policy(self) -> bool:
        return bool(self.policy)

    @property
    def has_homescreen(self) -> bool:
        return bool(self.configuration) and bool(self.displayprefs)


class Profile(UserTemplate):
    """Named template an invite can carry."""

    name: str
