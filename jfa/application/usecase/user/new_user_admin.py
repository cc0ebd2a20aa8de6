"""Admin-created user use case."""

import logfire
from pydantic import BaseModel, Field

from jfa.application.usecase.base import BaseUseCase
from jfa.config import Settings
from jfa.domain.repository import TemplateRepository
from jfa.domain.service import AccountService, ProvisioningService


class NewUserAdminRequest(BaseModel):
    """Admin new user request."""

    username: str = Field(min_length=1)
    password: str
    email: str = ""


class NewUserAdminResponse(BaseModel):
    """Admin new user response."""

    success: bool = True
    user_id: str
    provisioning_errors: dict[str, str] = Field(default_factory=dict)


class NewUserAdminUseCase(BaseUseCase):
    """Use case for an admin creating an account directly.

    No invite is involved; the stored global template is applied instead
    of an invite profile, and the password is not checked.
    """

    def __init__(
        self,
        account_service: AccountService,
        provisioning_service: ProvisioningService,
        template_repository: TemplateRepository,
        settings: Settings,
    ) -> None:
        self.account_service = account_service
        self.provisioning_service = provisioning_service
        self.template_repository = template_repository
        self.settings = settings

    async def execute(self, request: NewUserAdminRequest) -> NewUserAdminResponse:
        with logfire.span("new_user_admin", username=request.username):
            user_id = await self.account_service.create(request.username, request.password)
            template = await self.template_repository.load_user_template()
            errors = await self.provisioning_service.apply_template(user_id, template)
            if self.settings.password_resets.enabled:
                await self.account_service.store_email(user_id, request.email)
            await self.account_service.create_ombi_user(
                request.username, request.password, request.email
            )
            return NewUserAdminResponse(user_id=user_id, provisioning_errors=errors)
