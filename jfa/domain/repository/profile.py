"""Profile and template store interfaces."""

from abc import ABC, abstractmethod
from typing import Any

from jfa.domain.model.profile import Profile, UserTemplate


class ProfileRepository(ABC):
    """Named provisioning profiles an invite can refer to."""

    @abstractmethod
    async def load(self) -> None:
        """Refresh profiles from storage."""
        pass

    @abstractmethod
    def get(self, name: str) -> Profile | None:
        pass

    @abstractmethod
    def names(self) -> list[str]:
        pass

    def exists(self, name: str) -> bool:
        """Check whether a profile with this name exists."""
        return self.get(name) is not None


class TemplateRepository(ABC):
    """Global defaults for admin-created accounts and the Ombi user template."""

    @abstractmethod
    async def load_user_template(self) -> UserTemplate:
        pass

    @abstractmethod
    async def store_policy(self, policy: dict[str, Any]) -> None:
        pass

    @abstractmethod
    async def store_homescreen(
        self, configuration: dict[str, Any], displayprefs: dict[str, Any]
    ) -> None:
        pass

    @abstractmethod
    async def load_ombi_template(self) -> dict[str, Any]:
        pass

    @abstractmethod
    async def store_ombi_template(self, template: dict[str, Any]) -> None:
        pass
