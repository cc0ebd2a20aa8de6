"""New user (invite redemption) use case."""

import logfire
from pydantic import BaseModel, Field

from jfa.application.usecase.base import BaseUseCase
from jfa.config import Settings
from jfa.domain.error import NotFoundError
from jfa.domain.service import (
    AccountService,
    InviteService,
    PasswordValidator,
    ProvisioningService,
)


class NewUserRequest(BaseModel):
    """New user request."""

    username: str = Field(min_length=1)
    password: str
    email: str = ""
    code: str


class NewUserResponse(BaseModel):
    """New user response.

    ``validation`` reports every active password criterion; when one is
    not met ``success`` is False and nothing was created.
    """

    success: bool
    validation: dict[str, bool] = Field(default_factory=dict)
    user_id: str | None = None
    provisioning_errors: dict[str, str] = Field(default_factory=dict)


class NewUserUseCase(BaseUseCase):
    """Use case for signing up with an invite code."""

    def __init__(
        self,
        invite_service: InviteService,
        account_service: AccountService,
        provisioning_service: ProvisioningService,
        password_validator: PasswordValidator,
        settings: Settings,
    ) -> None:
        """Initialize new user use case.

        Args:
            invite_service: Invite service
            account_service: Account service
            provisioning_service: Provisioning service
            password_validator: Password requirements
            settings: Application settings
        """
        self.invite_service = invite_service
        self.account_service = account_service
        self.provisioning_service = provisioning_service
        self.password_validator = password_validator
        self.settings = settings

    async def execute(self, request: NewUserRequest) -> NewUserResponse:
        """Execute sign-up flow.

        1. Check the code is live (without using it)
        2. Check the password
        3. Create the Jellyfin account
        4. Use the invite and notify its creation subscribers
        5. Apply the invite's profile
        6. Store the address (password resets) and mirror on Ombi

        A failure after step 3 is logged but does not undo the account.

        Raises:
            NotFoundError: If the code is unknown or expired
            ValidationError: If the username is taken
            UpstreamError: If Jellyfin refused to create the account
        """
        with logfire.span("new_user", code=request.code, username=request.username):
            logfire.debug("{code}: New user attempt", code=request.code)
            if not await self.invite_service.validate_and_consume(request.code):
                logfire.info("{code}: New user failed: invalid code", code=request.code)
                raise NotFoundError("Invite", request.code)

            validation = self.password_validator.validate(request.password)
            if not all(validation.values()):
                logfire.info("{code}: New user failed: invalid password", code=request.code)
                return NewUserResponse(success=False, validation=validation)

            user_id = await self.account_service.create(request.username, request.password)

            invite = await self.invite_service.redeem(
                request.code, request.username, request.email
            )
            errors: dict[str, str] = {}
            if invite is None:
                logfire.error(
                    "{code}: Invite expired while {username} was being created",
                    code=request.code,
                    username=request.username,
                )
            else:
                errors = await self.provisioning_service.apply_profile(
                    user_id, invite.profile
                )

            if self.settings.password_resets.enabled:
                await self.account_service.store_email(user_id, request.email)
            await self.account_service.create_ombi_user(
                request.username, request.password, request.email
            )

            return NewUserResponse(
                success=True,
                validation=validation,
                user_id=user_id,
                provisioning_errors=errors,
            )
