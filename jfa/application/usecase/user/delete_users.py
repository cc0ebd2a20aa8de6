"""Delete users use case."""

from pydantic import BaseModel, Field

from jfa.application.usecase.base import BaseUseCase
from jfa.domain.error import PartialBatchFailure
from jfa.domain.service import AccountService


class DeleteUsersRequest(BaseModel):
    """Delete users request."""

    users: list[str] = Field(min_length=1)
    notify: bool = False
    reason: str = ""


class DeleteUsersResponse(BaseModel):
    """Delete users response."""

    success: bool = True


class DeleteUsersUseCase(BaseUseCase):
    """Use case for deleting several accounts."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: DeleteUsersRequest) -> DeleteUsersResponse:
        """Delete every listed account.

        Raises:
            PartialBatchFailure: If any deletion failed; the others stand
        """
        errors = await self.account_service.delete_users(
            request.users, notify=request.notify, reason=request.reason
        )
        if errors:
            raise PartialBatchFailure(errors, total=len(request.users))
        return DeleteUsersResponse()
