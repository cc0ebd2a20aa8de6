"""JSON-file implementations of the profile and template stores."""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from jfa.config import StorageSettings
from jfa.domain.model import Profile, UserTemplate
from jfa.domain.repository import ProfileRepository, TemplateRepository
from jfa.persistence.error import PersistenceError
from jfa.persistence.jsonfile import JsonFile
from jfa.persistence.mappers import dict_to_profile


class JsonProfileRepository(ProfileRepository):
    """Profiles backed by ``user_profiles.json``.

    Profiles are maintained outside jfa-api; this store only reads them.
    """

    def __init__(self, settings: StorageSettings) -> None:
        self.file = JsonFile(
            settings.data_dir / settings.profiles_file, settings.cache_seconds
        )
        self._profiles: dict[str, Profile] = {}

    async def load(self) -> None:
        if self.file.fresh:
            return
        data = await self.file.read(default={})
        try:
            self._profiles = {
                name: dict_to_profile(name, record) for name, record in data.items()
            }
        except (AttributeError, PydanticValidationError) as e:
            raise PersistenceError(f"Invalid profile file: {e}") from e

    def get(self, name: str) -> Profile | None:
        return self._profiles.get(name)

    def names(self) -> list[str]:
        return list(self._profiles)


class JsonTemplateRepository(TemplateRepository):
    """Global templates, one JSON file per part."""

    def __init__(self, settings: StorageSettings) -> None:
        def file(name: str) -> JsonFile:
            return JsonFile(settings.data_dir / name, settings.cache_seconds)

        self.policy_file = file(settings.policy_file)
        self.configuration_file = file(settings.configuration_file)
        self.displayprefs_file = file(settings.displayprefs_file)
        self.ombi_file = file(settings.ombi_template_file)

    async def load_user_template(self) -> UserTemplate:
        return UserTemplate(
            policy=await self.policy_file.read(default={}),
            configuration=await self.configuration_file.read(default={}),
            displayprefs=await self.displayprefs_file.read(default={}),
        )

    async def store_policy(self, policy: dict[str, Any]) -> None:
        await self.policy_file.write(policy)

    async def store_homescreen(
        self, configuration: dict[str, Any], displayprefs: dict[str, Any]
    ) -> None:
        await self.configuration_file.write(configuration)
        await self.displayprefs_file.write(displayprefs)

    async def load_ombi_template(self) -> dict[str, Any]:
        return await self.ombi_file.read(default={})

    async def store_ombi_template(self, template: dict[str, Any]) -> None:
        await self.ombi_file.write(template)
