"""Invite use cases."""

from jfa.application.usecase.invite.delete_invite import (
    DeleteInviteRequest,
    DeleteInviteResponse,
    DeleteInviteUseCase,
)
from jfa.application.usecase.invite.generate_invite import (
    GenerateInviteRequest,
    GenerateInviteResponse,
    GenerateInviteUseCase,
)
from jfa.application.usecase.invite.get_invites import (
    GetInvitesRequest,
    GetInvitesResponse,
    GetInvitesUseCase,
)
from jfa.application.usecase.invite.set_invite_notify import (
    SetInviteNotifyRequest,
    SetInviteNotifyResponse,
    SetInviteNotifyUseCase,
)
from jfa.application.usecase.invite.set_invite_profile import (
    SetInviteProfileRequest,
    SetInviteProfileResponse,
    SetInviteProfileUseCase,
)

__all__ = [
    "DeleteInviteRequest",
    "DeleteInviteResponse",
    "DeleteInviteUseCase",
    "GenerateInviteRequest",
    "GenerateInviteResponse",
    "GenerateInviteUseCase",
    "GetInvitesRequest",
    "GetInvitesResponse",
    "GetInvitesUseCase",
    "SetInviteNotifyRequest",
    "SetInviteNotifyResponse",
    "SetInviteNotifyUseCase",
    "SetInviteProfileRequest",
    "SetInviteProfileResponse",
    "SetInviteProfileUseCase",
]
