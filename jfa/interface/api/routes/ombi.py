"""Ombi routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from jfa.application.usecase.ombi import (
    GetOmbiUsersResponse,
    GetOmbiUsersUseCase,
    SetOmbiDefaultsRequest,
    SetOmbiDefaultsResponse,
    SetOmbiDefaultsUseCase,
)

router = APIRouter(prefix="/ombi", tags=["ombi"], route_class=DishkaRoute)


@router.get("/users", response_model=GetOmbiUsersResponse)
async def get_ombi_users(
    get_ombi_users_use_case: FromDishka[GetOmbiUsersUseCase],
) -> GetOmbiUsersResponse:
    """List Ombi users that can serve as the account template."""
    return await get_ombi_users_use_case.execute()


@router.post("/defaults", response_model=SetOmbiDefaultsResponse)
async def set_ombi_defaults(
    request: SetOmbiDefaultsRequest,
    set_ombi_defaults_use_case: FromDishka[SetOmbiDefaultsUseCase],
) -> SetOmbiDefaultsResponse:
    """Use an Ombi user as the template for new Ombi accounts."""
    return await set_ombi_defaults_use_case.execute(request)
