"""Application layer DI providers."""

from dishka import Scope, provide

from jfa.application.usecase.invite import (
    DeleteInviteUseCase,
    GenerateInviteUseCase,
    GetInvitesUseCase,
    SetInviteNotifyUseCase,
    SetInviteProfileUseCase,
)
from jfa.application.usecase.ombi import GetOmbiUsersUseCase, SetOmbiDefaultsUseCase
from jfa.application.usecase.settings import ApplySettingsUseCase, SetDefaultsUseCase
from jfa.application.usecase.user import (
    DeleteUsersUseCase,
    GetUsersUseCase,
    ModifyEmailsUseCase,
    NewUserAdminUseCase,
    NewUserUseCase,
)
from jfa.config import Settings
from jfa.domain.repository import ProfileRepository, TemplateRepository
from jfa.domain.service import (
    AccountService,
    InviteService,
    PasswordValidator,
    ProvisioningService,
)
from jfa.util.di.base import ProviderBase
from jfa.util.timeutil import DateFormatter


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Invite use cases
    @provide
    def get_generate_invite_use_case(
        self, invite_service: InviteService
    ) -> GenerateInviteUseCase:
        """Provide generate invite use case."""
        return GenerateInviteUseCase(invite_service=invite_service)

    @provide
    def get_get_invites_use_case(
        self,
        invite_service: InviteService,
        account_service: AccountService,
        profile_repository: ProfileRepository,
    ) -> GetInvitesUseCase:
        """Provide get invites use case."""
        return GetInvitesUseCase(
            invite_service=invite_service,
            account_service=account_service,
            profile_repository=profile_repository,
        )

    @provide
    def get_delete_invite_use_case(
        self, invite_service: InviteService
    ) -> DeleteInviteUseCase:
        """Provide delete invite use case."""
        return DeleteInviteUseCase(invite_service=invite_service)

    @provide
    def get_set_invite_profile_use_case(
        self, invite_service: InviteService
    ) -> SetInviteProfileUseCase:
        """Provide set invite profile use case."""
        return SetInviteProfileUseCase(invite_service=invite_service)

    @provide
    def get_set_invite_notify_use_case(
        self, invite_service: InviteService, account_service: AccountService
    ) -> SetInviteNotifyUseCase:
        """Provide set invite notify use case."""
        return SetInviteNotifyUseCase(
            invite_service=invite_service, account_service=account_service
        )

    # User use cases
    @provide
    def get_new_user_use_case(
        self,
        invite_service: InviteService,
        account_service: AccountService,
        provisioning_service: ProvisioningService,
        password_validator: PasswordValidator,
        settings: Settings,
    ) -> NewUserUseCase:
        """Provide new user use case."""
        return NewUserUseCase(
            invite_service=invite_service,
            account_service=account_service,
            provisioning_service=provisioning_service,
            password_validator=password_validator,
            settings=settings,
        )

    @provide
    def get_new_user_admin_use_case(
        self,
        account_service: AccountService,
        provisioning_service: ProvisioningService,
        template_repository: TemplateRepository,
        settings: Settings,
    ) -> NewUserAdminUseCase:
        """Provide admin new user use case."""
        return NewUserAdminUseCase(
            account_service=account_service,
            provisioning_service=provisioning_service,
            template_repository=template_repository,
            settings=settings,
        )

    @provide
    def get_delete_users_use_case(
        self, account_service: AccountService
    ) -> DeleteUsersUseCase:
        """Provide delete users use case."""
        return DeleteUsersUseCase(account_service=account_service)

    @provide
    def get_get_users_use_case(
        self, account_service: AccountService, formatter: DateFormatter
    ) -> GetUsersUseCase:
        """Provide get users use case."""
        return GetUsersUseCase(account_service=account_service, formatter=formatter)

    @provide
    def get_modify_emails_use_case(
        self, account_service: AccountService
    ) -> ModifyEmailsUseCase:
        """Provide modify emails use case."""
        return ModifyEmailsUseCase(account_service=account_service)

    # Settings use cases
    @provide
    def get_set_defaults_use_case(
        self, account_service: AccountService, template_repository: TemplateRepository
    ) -> SetDefaultsUseCase:
        """Provide set defaults use case."""
        return SetDefaultsUseCase(
            account_service=account_service, template_repository=template_repository
        )

    @provide
    def get_apply_settings_use_case(
        self,
        account_service: AccountService,
        provisioning_service: ProvisioningService,
        template_repository: TemplateRepository,
    ) -> ApplySettingsUseCase:
        """Provide apply settings use case."""
        return ApplySettingsUseCase(
            account_service=account_service,
            provisioning_service=provisioning_service,
            template_repository=template_repository,
        )

    # Ombi use cases
    @provide
    def get_get_ombi_users_use_case(
        self, account_service: AccountService
    ) -> GetOmbiUsersUseCase:
        """Provide get Ombi users use case."""
        return GetOmbiUsersUseCase(account_service=account_service)

    @provide
    def get_set_ombi_defaults_use_case(
        self, account_service: AccountService
    ) -> SetOmbiDefaultsUseCase:
        """Provide set Ombi defaults use case."""
        return SetOmbiDefaultsUseCase(account_service=account_service)
