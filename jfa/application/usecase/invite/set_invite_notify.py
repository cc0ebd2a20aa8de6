"""Set invite notification preferences use case."""

import logfire
from pydantic import BaseModel

from jfa.application.usecase.base import BaseUseCase
from jfa.domain.error import ValidationError
from jfa.domain.service import AccountService, InviteService
from jfa.domain.value import NotifyPreferences


class SetInviteNotifyRequest(BaseModel):
    """Set invite notify request.

    ``preferences`` maps invite code to the flags to change; flags left out
    keep their stored value.
    """

    preferences: dict[str, NotifyPreferences]
    caller_user_id: str | None = None


class SetInviteNotifyResponse(BaseModel):
    """Set invite notify response."""

    success: bool = True
    changed: list[str]


class SetInviteNotifyUseCase(BaseUseCase):
    """Use case for subscribing the caller to invite events."""

    def __init__(
        self, invite_service: InviteService, account_service: AccountService
    ) -> None:
        self.invite_service = invite_service
        self.account_service = account_service

    async def execute(self, request: SetInviteNotifyRequest) -> SetInviteNotifyResponse:
        """Apply the caller's preferences, invite by invite.

        Raises:
            ValidationError: If the caller has no notification address
            NotFoundError: If a code does not exist; invites before it in
                the request keep their change
        """
        address = await self.account_service.notification_address(
            request.caller_user_id
        )
        if not address:
            logfire.error("Couldn't find email address. Make sure it's set")
            logfire.debug("User ID {user_id}", user_id=request.caller_user_id)
            raise ValidationError("Missing user email")

        changed = []
        for code, preferences in request.preferences.items():
            if await self.invite_service.set_notify_preferences(
                code, address, preferences
            ):
                changed.append(code)
        return SetInviteNotifyResponse(changed=changed)
