"""User use cases."""

from jfa.application.usecase.user.delete_users import (
    DeleteUsersRequest,
    DeleteUsersResponse,
    DeleteUsersUseCase,
)
from jfa.application.usecase.user.get_users import (
    GetUsersResponse,
    GetUsersUseCase,
    UserItem,
)
from jfa.application.usecase.user.modify_emails import (
    ModifyEmailsRequest,
    ModifyEmailsResponse,
    ModifyEmailsUseCase,
)
from jfa.application.usecase.user.new_user import (
    NewUserRequest,
    NewUserResponse,
    NewUserUseCase,
)
from jfa.application.usecase.user.new_user_admin import (
    NewUserAdminRequest,
    NewUserAdminResponse,
    NewUserAdminUseCase,
)

__all__ = [
    "DeleteUsersRequest",
    "DeleteUsersResponse",
    "DeleteUsersUseCase",
    "GetUsersResponse",
    "GetUsersUseCase",
    "ModifyEmailsRequest",
    "ModifyEmailsResponse",
    "ModifyEmailsUseCase",
    "NewUserAdminRequest",
    "NewUserAdminResponse",
    "NewUserAdminUseCase",
    "NewUserRequest",
    "NewUserResponse",
    "NewUserUseCase",
    "UserItem",
]
