"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class JellyfinSettings(BaseModel):
    """Jellyfin server connection."""

    server: str = "http://localhost:8096"
    public_server: str | None = None
    api_key: str = "CHANGE_ME_IN_PRODUCTION"

    # Identify ourselves in the MediaBrowser authorization header
    client: str = "jfa-api"
    version: str = "0.1.0"
    device: str = "jfa-api"
    device_id: str = "jfa-api-server"

    timeout_seconds: float = 10.0

    # How long the user list is cached before being re-fetched
    cache_seconds: int = 20


class EmailSettings(BaseModel):
    """Outbound email and date display configuration."""

    # strftime pattern used for every human-readable date
    date_format: str = "%d/%m/%y"
    # When False, times are shown as 03:04 PM instead of 15:04
    use_24h: bool = True

    method: Literal["smtp", "mailgun", "none"] = "none"
    sender: str = "jfa@example.com"
    sender_name: str = "jfa-api"

    # Public URL of the sign-up page, used to build invite links
    jfa_url: str = "http://localhost:8000"

    smtp_server: str = "localhost"
    smtp_port: int = 465
    smtp_encryption: Literal["ssl_tls", "starttls", "none"] = "ssl_tls"
    smtp_username: str | None = None
    smtp_password: str | None = None

    mailgun_api_url: str = "https://api.mailgun.net/v3/example.com/messages"
    mailgun_api_key: str | None = None

    timeout_seconds: float = 15.0


class NotificationSettings(BaseModel):
    """Admin notifications on invite expiry and account creation."""

    enabled: bool = False


class PasswordResetSettings(BaseModel):
    """Password reset support.

    When enabled, the email address given at sign-up is kept in the
    email directory so it can be used later.
    """

    enabled: bool = False


class InviteEmailSettings(BaseModel):
    """Sending invite codes by email."""

    enabled: bool = False


class OmbiSettings(BaseModel):
    """Ombi request service integration."""

    enabled: bool = False
    server: str = "http://localhost:5000"
    api_key: str = "CHANGE_ME_IN_PRODUCTION"
    timeout_seconds: float = 10.0


class UISettings(BaseModel):
    """Admin UI behaviour."""

    # When True, admins log in with their Jellyfin account and their
    # notification address is looked up in the email directory.
    # When False, the single admin address below is used.
    jellyfin_login: bool = False
    email: str = ""


class PasswordValidationSettings(BaseModel):
    """Password requirements for new accounts."""

    enabled: bool = True
    min_length: int = 8
    upper: int = 1
    lower: int = 0
    number: int = 1
    special: int = 0


class InviteSettings(BaseModel):
    """Invite housekeeping."""

    # Name of the profile used when an invite names one that no longer exists
    default_profile: str = "Default"

    # Background expiry sweep interval; 0 disables the periodic sweep
    # (expired invites are still purged whenever invites are listed)
    sweep_interval_seconds: int = 0


class StorageSettings(BaseModel):
    """Location of the JSON data files."""

    data_dir: Path = Path("data")

    invites_file: str = "invites.json"
    emails_file: str = "emails.json"
    profiles_file: str = "user_profiles.json"
    policy_file: str = "user_template.json"
    configuration_file: str = "user_configuration.json"
    displayprefs_file: str = "user_displayprefs.json"
    ombi_template_file: str = "ombi_template.json"

    # A file read within this window is not read again unless it was written
    cache_seconds: float = 1.0

    @computed_field
    @property
    def invites_path(self) -> Path:
        """Path of the invite store."""
        return self.data_dir / self.invites_file

    @computed_field
    @property
    def emails_path(self) -> Path:
        """Path of the email directory."""
        return self.data_dir / self.emails_file


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # If None, sends only when a token is present
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Every section can be overridden from the environment using the
    ``__`` delimiter, e.g.::

        JELLYFIN__SERVER=http://jellyfin:8096
        NOTIFICATIONS__ENABLED=true
        EMAIL__METHOD=smtp
        STORAGE__DATA_DIR=/var/lib/jfa
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    host: str = "0.0.0.0"
    port: int = 8056

    jellyfin: JellyfinSettings = JellyfinSettings()
    email: EmailSettings = EmailSettings()
    notifications: NotificationSettings = NotificationSettings()
    password_resets: PasswordResetSettings = PasswordResetSettings()
    invite_emails: InviteEmailSettings = InviteEmailSettings()
    ombi: OmbiSettings = OmbiSettings()
    ui: UISettings = UISettings()
    password_validation: PasswordValidationSettings = PasswordValidationSettings()
    invites: InviteSettings = InviteSettings()
    storage: StorageSettings = StorageSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
