"""In-memory profile and template stores for testing."""

from typing import Any

from jfa.domain.model.profile import Profile, UserTemplate
from jfa.domain.repository.profile import ProfileRepository, TemplateRepository


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self, *profiles: Profile) -> None:
        self._profiles: dict[str, Profile] = {p.name: p for p in profiles}

    async def load(self) -> None:
        pass

    def get(self, name: str) -> Profile | None:
        return self._profiles.get(name)

    def names(self) -> list[str]:
        return list(self._profiles)

    def add(self, profile: Profile) -> None:
        self._profiles[profile.name] = profile


class InMemoryTemplateRepository(TemplateRepository):
    """In-memory implementation of TemplateRepository for testing."""

    def __init__(self) -> None:
        self.template = UserTemplate()
        self.ombi_template: dict[str, Any] = {}

    async def load_user_template(self) -> UserTemplate:
        return self.template

    async def store_policy(self, policy: dict[str, Any]) -> None:
        self.template = self.template.model_copy(update={"policy": policy})

    async def store_homescreen(
        self, configuration: dict[str, Any], displayprefs: dict[str, Any]
    ) -> None:
        self.template = self.template.model_copy(
            update={"configuration": configuration, "displayprefs": displayprefs}
        )

    async def load_ombi_template(self) -> dict[str, Any]:
        return self.ombi_template

    async def store_ombi_template(self, template: dict[str, Any]) -> None:
        self.ombi_template = template
