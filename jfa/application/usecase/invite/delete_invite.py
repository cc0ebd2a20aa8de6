"""Delete invite use case."""

from pydantic import BaseModel

from jfa.application.usecase.base import BaseUseCase
from jfa.domain.service import InviteService


class DeleteInviteRequest(BaseModel):
    """Delete invite request."""

    code: str


class DeleteInviteResponse(BaseModel):
    """Delete invite response."""

    success: bool = True


class DeleteInviteUseCase(BaseUseCase):
    """Use case for removing an invite."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: DeleteInviteRequest) -> DeleteInviteResponse:
        """Delete the invite.

        Raises:
            NotFoundError: If the code does not exist
        """
        await self.invite_service.delete(request.code)
        return DeleteInviteResponse()
