"""Domain services."""

from .account_service import AccountService
from .base import Service
from .invite_service import GenerateInviteOptions, InviteService, InviteSummary
from .notification_service import MailError, Mailer, NotificationDispatcher
from .password_validator import PasswordValidator
from .provisioning_service import ApplySettingsErrors, ProvisioningService
from .upstream import JellyfinClient, OmbiClient, UpstreamResponse

__all__ = [
    "AccountService",
    "ApplySettingsErrors",
    "GenerateInviteOptions",
    "InviteService",
    "InviteSummary",
    "JellyfinClient",
    "MailError",
    "Mailer",
    "NotificationDispatcher",
    "OmbiClient",
    "PasswordValidator",
    "ProvisioningService",
    "Service",
    "UpstreamResponse",
]
