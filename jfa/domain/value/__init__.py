"""Domain value objects for jfa."""

from jfa.domain.value.identifiers import EmailAddress, JellyfinUserId, OmbiUserId
from jfa.domain.value.types import (
    InviteCode,
    Limited,
    Message,
    NotifyEvent,
    NotifyPreferences,
    RemainingUses,
    Unlimited,
    UsedBy,
    generate_invite_code,
)

__all__ = [
    # Identifiers
    "EmailAddress",
    "JellyfinUserId",
    "OmbiUserId",
    # Types
    "InviteCode",
    "Limited",
    "Message",
    "NotifyEvent",
    "NotifyPreferences",
    "RemainingUses",
    "Unlimited",
    "UsedBy",
    "generate_invite_code",
]
