"""Set invite profile use case."""

from pydantic import BaseModel

from jfa.application.usecase.base import BaseUseCase
from jfa.domain.service import InviteService


class SetInviteProfileRequest(BaseModel):
    """Set invite profile request."""

    invite: str
    profile: str = ""  # Empty means "apply no profile"


class SetInviteProfileResponse(BaseModel):
    """Set invite profile response."""

    success: bool = True


class SetInviteProfileUseCase(BaseUseCase):
    """Use case for changing the profile an invite applies."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(
        self, request: SetInviteProfileRequest
    ) -> SetInviteProfileResponse:
        await self.invite_service.set_profile(request.invite, request.profile)
        return SetInviteProfileResponse()
