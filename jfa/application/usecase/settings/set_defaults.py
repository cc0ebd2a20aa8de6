"""Set defaults use case."""

import logfire
from pydantic import BaseModel

from jfa.application.usecase.base import BaseUseCase
from jfa.domain.repository import TemplateRepository
from jfa.domain.service import AccountService


class SetDefaultsRequest(BaseModel):
    """Set defaults request."""

    id: str  # Jellyfin user to copy settings from
    homescreen: bool = False


class SetDefaultsResponse(BaseModel):
    """Set defaults response."""

    success: bool = True


class SetDefaultsUseCase(BaseUseCase):
    """Use case for storing an account's settings as the global template."""

    def __init__(
        self, account_service: AccountService, template_repository: TemplateRepository
    ) -> None:
        self.account_service = account_service
        self.template_repository = template_repository

    async def execute(self, request: SetDefaultsRequest) -> SetDefaultsResponse:
        """Copy policy (and optionally homescreen) from a user.

        Raises:
            UpstreamError: If the user or their display preferences could
                not be fetched; nothing is stored for a failed homescreen
                fetch beyond the policy
        """
        user = await self.account_service.get_user(request.id)
        logfire.info('Getting user defaults from "{name}"', name=user.name)
        await self.template_repository.store_policy(user.policy)
        logfire.debug("User policy template stored")
        if request.homescreen:
            displayprefs = await self.account_service.get_display_preferences(request.id)
            await self.template_repository.store_homescreen(
                user.configuration, displayprefs
            )
            logfire.debug("Homescreen template stored")
        return SetDefaultsResponse()
