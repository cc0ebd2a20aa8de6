"""Get Ombi users use case."""

from pydantic import BaseModel

from jfa.application.usecase.base import BaseUseCase
from jfa.domain.service import AccountService


class OmbiUserItem(BaseModel):
    """Ombi user item in response."""

    id: str
    name: str


class GetOmbiUsersResponse(BaseModel):
    """Get Ombi users response."""

    users: list[OmbiUserItem]


class GetOmbiUsersUseCase(BaseUseCase):
    """Use case for listing Ombi users (template candidates)."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: None = None) -> GetOmbiUsersResponse:
        users = await self.account_service.list_ombi_users()
        return GetOmbiUsersResponse(users=[OmbiUserItem(**user) for user in users])
