"""User routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from jfa.application.usecase.settings import (
    ApplySettingsRequest,
    ApplySettingsResponse,
    ApplySettingsUseCase,
    SetDefaultsRequest,
    SetDefaultsResponse,
    SetDefaultsUseCase,
)
from jfa.application.usecase.user import (
    DeleteUsersRequest,
    DeleteUsersResponse,
    DeleteUsersUseCase,
    GetUsersResponse,
    GetUsersUseCase,
    ModifyEmailsRequest,
    ModifyEmailsResponse,
    ModifyEmailsUseCase,
    NewUserAdminRequest,
    NewUserAdminResponse,
    NewUserAdminUseCase,
    NewUserRequest,
    NewUserResponse,
    NewUserUseCase,
)
from jfa.domain.error import (
    NotFoundError,
    PartialBatchFailure,
    UpstreamError,
    ValidationError,
)
from jfa.interface.error import http_error

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.post("/new", response_model=NewUserResponse)
async def new_user(
    request: NewUserRequest,
    new_user_use_case: FromDishka[NewUserUseCase],
) -> NewUserResponse:
    """Sign up with an invite code.

    A password that misses a requirement is answered with 200 and
    ``success: false`` alongside the per-criterion result.

    Raises:
        HTTPException: 401 for an invalid code, 400 for a taken
            username, 502 if Jellyfin refused the account
    """
    try:
        return await new_user_use_case.execute(request)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid invite code"
        )
    except (ValidationError, UpstreamError) as e:
        raise http_error(e)


@router.post("", response_model=NewUserAdminResponse)
async def new_user_admin(
    request: NewUserAdminRequest,
    new_user_admin_use_case: FromDishka[NewUserAdminUseCase],
) -> NewUserAdminResponse:
    """Create an account directly, applying the global template."""
    try:
        return await new_user_admin_use_case.execute(request)
    except (ValidationError, UpstreamError) as e:
        raise http_error(e)


@router.get("", response_model=GetUsersResponse)
async def get_users(
    get_users_use_case: FromDishka[GetUsersUseCase],
) -> GetUsersResponse:
    """List Jellyfin accounts with their stored addresses."""
    return await get_users_use_case.execute()


@router.delete("", response_model=DeleteUsersResponse)
async def delete_users(
    request: DeleteUsersRequest,
    delete_users_use_case: FromDishka[DeleteUsersUseCase],
):
    """Delete accounts, optionally emailing each user the reason.

    Returns 500 with the per-user error map when some deletions failed,
    or 500 "Failed" when all of them did.
    """
    try:
        return await delete_users_use_case.execute(request)
    except PartialBatchFailure as e:
        if e.all_failed:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed"
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=e.errors
        )


@router.post("/emails", response_model=ModifyEmailsResponse)
async def modify_emails(
    emails: dict[str, str],
    modify_emails_use_case: FromDishka[ModifyEmailsUseCase],
) -> ModifyEmailsResponse:
    """Set contact addresses, keyed by Jellyfin user ID."""
    return await modify_emails_use_case.execute(ModifyEmailsRequest(emails=emails))


@router.post("/defaults", response_model=SetDefaultsResponse)
async def set_defaults(
    request: SetDefaultsRequest,
    set_defaults_use_case: FromDishka[SetDefaultsUseCase],
) -> SetDefaultsResponse:
    """Store a user's settings as the template for admin-created accounts."""
    try:
        return await set_defaults_use_case.execute(request)
    except UpstreamError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Couldn't get user: {e}",
        )


@router.post("/settings", response_model=ApplySettingsResponse)
async def apply_settings(
    request: ApplySettingsRequest,
    apply_settings_use_case: FromDishka[ApplySettingsUseCase],
):
    """Copy the template's or a user's settings onto several accounts.

    Answers 500 (with the same body) when every target failed a step.
    """
    try:
        response = await apply_settings_use_case.execute(request)
    except ValidationError as e:
        raise http_error(e)
    if response.all_failed:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response.model_dump(),
        )
    return response
