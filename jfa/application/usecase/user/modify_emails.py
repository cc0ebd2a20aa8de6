"""Modify emails use case."""

from pydantic import BaseModel

from jfa.application.usecase.base import BaseUseCase
from jfa.domain.service import AccountService


class ModifyEmailsRequest(BaseModel):
    """Modify emails request: user ID to new address."""

    emails: dict[str, str]


class ModifyEmailsResponse(BaseModel):
    """Modify emails response."""

    success: bool = True
    updated: int


class ModifyEmailsUseCase(BaseUseCase):
    """Use case for editing the email directory."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: ModifyEmailsRequest) -> ModifyEmailsResponse:
        updated = await self.account_service.set_emails(request.emails)
        return ModifyEmailsResponse(updated=updated)
