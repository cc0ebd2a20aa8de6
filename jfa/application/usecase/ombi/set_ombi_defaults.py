"""Set Ombi defaults use case."""

from pydantic import BaseModel

from jfa.application.usecase.base import BaseUseCase
from jfa.domain.service import AccountService


class SetOmbiDefaultsRequest(BaseModel):
    """Set Ombi defaults request."""

    id: str
    name: str | None = None


class SetOmbiDefaultsResponse(BaseModel):
    """Set Ombi defaults response."""

    success: bool = True


class SetOmbiDefaultsUseCase(BaseUseCase):
    """Use case for picking the Ombi user new Ombi accounts are modelled on."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: SetOmbiDefaultsRequest) -> SetOmbiDefaultsResponse:
        await self.account_service.store_ombi_template(request.id)
        return SetOmbiDefaultsResponse()
