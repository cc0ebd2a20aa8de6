"""Invite routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status

from jfa.application.usecase.invite import (
    DeleteInviteRequest,
    DeleteInviteResponse,
    DeleteInviteUseCase,
    GenerateInviteRequest,
    GenerateInviteResponse,
    GenerateInviteUseCase,
    GetInvitesRequest,
    GetInvitesResponse,
    GetInvitesUseCase,
    SetInviteNotifyRequest,
    SetInviteNotifyResponse,
    SetInviteNotifyUseCase,
    SetInviteProfileRequest,
    SetInviteProfileResponse,
    SetInviteProfileUseCase,
)
from jfa.domain.error import NotFoundError, ValidationError
from jfa.domain.value import NotifyPreferences
from jfa.interface.error import http_error

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


@router.post("", response_model=GenerateInviteResponse)
async def generate_invite(
    request: GenerateInviteRequest,
    generate_invite_use_case: FromDishka[GenerateInviteUseCase],
) -> GenerateInviteResponse:
    """Create an invite.

    Raises:
        HTTPException: 404 if the profile fallback is missing
    """
    try:
        return await generate_invite_use_case.execute(request)
    except NotFoundError as e:
        raise http_error(e)


@router.get("", response_model=GetInvitesResponse)
async def get_invites(
    get_invites_use_case: FromDishka[GetInvitesUseCase],
    x_jellyfin_user_id: str | None = Header(default=None),
) -> GetInvitesResponse:
    """List live invites and the available profiles.

    Args:
        get_invites_use_case: Get invites use case from DI
        x_jellyfin_user_id: Jellyfin ID of the calling admin

    Returns:
        Invites ordered by creation, with the caller's notify flags
    """
    return await get_invites_use_case.execute(
        GetInvitesRequest(caller_user_id=x_jellyfin_user_id)
    )


@router.delete("/{code}", response_model=DeleteInviteResponse)
async def delete_invite(
    code: str,
    delete_invite_use_case: FromDishka[DeleteInviteUseCase],
) -> DeleteInviteResponse:
    """Delete an invite.

    Raises:
        HTTPException: 404 if the code does not exist
    """
    try:
        return await delete_invite_use_case.execute(DeleteInviteRequest(code=code))
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Code doesn't exist"
        )


@router.post("/profile", response_model=SetInviteProfileResponse)
async def set_invite_profile(
    request: SetInviteProfileRequest,
    set_invite_profile_use_case: FromDishka[SetInviteProfileUseCase],
) -> SetInviteProfileResponse:
    """Change which profile an invite applies.

    Raises:
        HTTPException: 404 if the invite or profile does not exist
    """
    try:
        return await set_invite_profile_use_case.execute(request)
    except NotFoundError as e:
        raise http_error(e)


@router.post("/notify", response_model=SetInviteNotifyResponse)
async def set_invite_notify(
    preferences: dict[str, NotifyPreferences],
    set_invite_notify_use_case: FromDishka[SetInviteNotifyUseCase],
    x_jellyfin_user_id: str | None = Header(default=None),
) -> SetInviteNotifyResponse:
    """Subscribe the caller to invite events.

    The body maps invite code to ``{"notify-expiry": bool,
    "notify-creation": bool}``; either key may be left out.

    Raises:
        HTTPException: 400 for an unknown code or a caller with no address
    """
    try:
        return await set_invite_notify_use_case.execute(
            SetInviteNotifyRequest(
                preferences=preferences, caller_user_id=x_jellyfin_user_id
            )
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid invite code"
        )
    except ValidationError as e:
        raise http_error(e)
