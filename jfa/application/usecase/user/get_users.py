"""Get users use case."""

from pydantic import BaseModel

from jfa.application.usecase.base import BaseUseCase
from jfa.domain.service import AccountService
from jfa.util.timeutil import DateFormatter


class UserItem(BaseModel):
    """User item in response."""

    id: str
    name: str
    email: str | None = None
    last_active: str
    admin: bool


class GetUsersResponse(BaseModel):
    """Get users response."""

    users: list[UserItem]


class GetUsersUseCase(BaseUseCase):
    """Use case for listing Jellyfin accounts."""

    def __init__(self, account_service: AccountService, formatter: DateFormatter) -> None:
        self.account_service = account_service
        self.formatter = formatter

    async def execute(self, request: None = None) -> GetUsersResponse:
        users = await self.account_service.list_users()
        return GetUsersResponse(
            users=[
                UserItem(
                    id=user.id,
                    name=user.name,
                    email=email,
                    last_active=(
                        self.formatter.format(user.last_activity)
                        if user.last_activity
                        else "n/a"
                    ),
                    admin=user.is_admin,
                )
                for user, email in users
            ]
        )
