"""Ombi use cases."""

from jfa.application.usecase.ombi.get_ombi_users import (
    GetOmbiUsersResponse,
    GetOmbiUsersUseCase,
    OmbiUserItem,
)
from jfa.application.usecase.ombi.set_ombi_defaults import (
    SetOmbiDefaultsRequest,
    SetOmbiDefaultsResponse,
    SetOmbiDefaultsUseCase,
)

__all__ = [
    "GetOmbiUsersResponse",
    "GetOmbiUsersUseCase",
    "OmbiUserItem",
    "SetOmbiDefaultsRequest",
    "SetOmbiDefaultsResponse",
    "SetOmbiDefaultsUseCase",
]
