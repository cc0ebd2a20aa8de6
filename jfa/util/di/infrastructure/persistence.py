"""Persistence infrastructure providers."""

from dishka import Scope, provide

from jfa.config import StorageSettings
from jfa.domain.repository import (
    EmailRepository,
    InviteRepository,
    ProfileRepository,
    TemplateRepository,
)
from jfa.persistence.repository import (
    JsonEmailRepository,
    JsonInviteRepository,
    JsonProfileRepository,
    JsonTemplateRepository,
)
from jfa.util.di.base import ProviderBase


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using JSON files.

    Stores are APP-scoped: each owns the lock guarding its file.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide
    def get_invite_repository(self, settings: StorageSettings) -> InviteRepository:
        """Provide invite store."""
        return JsonInviteRepository(settings)

    @provide
    def get_email_repository(self, settings: StorageSettings) -> EmailRepository:
        """Provide email directory."""
        return JsonEmailRepository(settings)

    @provide
    def get_profile_repository(self, settings: StorageSettings) -> ProfileRepository:
        """Provide profile store."""
        return JsonProfileRepository(settings)

    @provide
    def get_template_repository(self, settings: StorageSettings) -> TemplateRepository:
        """Provide template store."""
        return JsonTemplateRepository(settings)
