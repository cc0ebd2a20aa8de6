"""Domain layer DI providers."""

from dishka import Scope, provide

from jfa.config import (
    InviteSettings,
    NotificationSettings,
    PasswordValidationSettings,
    Settings,
)
from jfa.domain.repository import (
    EmailRepository,
    InviteRepository,
    ProfileRepository,
    TemplateRepository,
)
from jfa.domain.service import (
    AccountService,
    InviteService,
    JellyfinClient,
    Mailer,
    NotificationDispatcher,
    OmbiClient,
    PasswordValidator,
    ProvisioningService,
)
from jfa.util.di.base import ProviderBase
from jfa.util.timeutil import DateFormatter


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services are REQUEST-scoped; the stores and the dispatcher they share
    are APP-scoped, so every request sees the same locks and in-flight
    notifications.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_notification_dispatcher(
        self, mailer: Mailer, settings: NotificationSettings
    ) -> NotificationDispatcher:
        """Provide the process-wide notification dispatcher."""
        return NotificationDispatcher(mailer=mailer, settings=settings)

    @provide(scope=Scope.APP)
    def get_password_validator(
        self, settings: PasswordValidationSettings
    ) -> PasswordValidator:
        """Provide password validator."""
        return PasswordValidator(settings=settings)

    @provide
    def get_invite_service(
        self,
        invite_repository: InviteRepository,
        profile_repository: ProfileRepository,
        dispatcher: NotificationDispatcher,
        formatter: DateFormatter,
        settings: Settings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_repository=invite_repository,
            profile_repository=profile_repository,
            dispatcher=dispatcher,
            formatter=formatter,
            settings=settings,
        )

    @provide
    def get_provisioning_service(
        self,
        jellyfin: JellyfinClient,
        profile_repository: ProfileRepository,
        settings: InviteSettings,
    ) -> ProvisioningService:
        """Provide provisioning domain service."""
        return ProvisioningService(
            jellyfin=jellyfin,
            profile_repository=profile_repository,
            settings=settings,
        )

    @provide
    def get_account_service(
        self,
        jellyfin: JellyfinClient,
        ombi: OmbiClient,
        email_repository: EmailRepository,
        template_repository: TemplateRepository,
        dispatcher: NotificationDispatcher,
        settings: Settings,
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(
            jellyfin=jellyfin,
            ombi=ombi,
            email_repository=email_repository,
            template_repository=template_repository,
            dispatcher=dispatcher,
            settings=settings,
        )
