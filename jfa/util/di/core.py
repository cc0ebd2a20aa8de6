"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from jfa.config import (
    EmailSettings,
    InviteSettings,
    JellyfinSettings,
    NotificationSettings,
    OmbiSettings,
    PasswordValidationSettings,
    Settings,
    StorageSettings,
)
from jfa.util.di.base import ProviderBase
from jfa.util.timeutil import DateFormatter


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_jellyfin_settings(self, settings: Settings) -> JellyfinSettings:
        return settings.jellyfin

    @provide
    def provide_email_settings(self, settings: Settings) -> EmailSettings:
        return settings.email

    @provide
    def provide_notification_settings(self, settings: Settings) -> NotificationSettings:
        return settings.notifications

    @provide
    def provide_ombi_settings(self, settings: Settings) -> OmbiSettings:
        return settings.ombi

    @provide
    def provide_invite_settings(self, settings: Settings) -> InviteSettings:
        return settings.invites

    @provide
    def provide_storage_settings(self, settings: Settings) -> StorageSettings:
        return settings.storage

    @provide
    def provide_password_validation_settings(
        self, settings: Settings
    ) -> PasswordValidationSettings:
        return settings.password_validation

    @provide
    def provide_date_formatter(self, settings: EmailSettings) -> DateFormatter:
        """Provide the formatter used for every displayed date."""
        return DateFormatter.from_settings(settings)
