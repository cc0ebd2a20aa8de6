"""Get invites use case."""

from pydantic import BaseModel

from jfa.application.usecase.base import BaseUseCase
from jfa.domain.repository import ProfileRepository
from jfa.domain.service import AccountService, InviteService, InviteSummary


class GetInvitesRequest(BaseModel):
    """Get invites request."""

    caller_user_id: str | None = None  # Jellyfin ID of the requesting admin


class GetInvitesResponse(BaseModel):
    """Get invites response."""

    invites: list[InviteSummary]
    profiles: list[str]


class GetInvitesUseCase(BaseUseCase):
    """Use case for the admin invite listing."""

    def __init__(
        self,
        invite_service: InviteService,
        account_service: AccountService,
        profile_repository: ProfileRepository,
    ) -> None:
        """Initialize get invites use case.

        Args:
            invite_service: Invite service
            account_service: Account service (caller's notification address)
            profile_repository: Profile store
        """
        self.invite_service = invite_service
        self.account_service = account_service
        self.profile_repository = profile_repository

    async def execute(self, request: GetInvitesRequest) -> GetInvitesResponse:
        address = await self.account_service.notification_address(
            request.caller_user_id
        )
        invites = await self.invite_service.list_invites(caller_address=address)
        await self.profile_repository.load()
        return GetInvitesResponse(
            invites=invites, profiles=self.profile_repository.names()
        )
