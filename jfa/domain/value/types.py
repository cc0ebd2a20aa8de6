"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
"""

import secrets
from enum import Enum
from typing import Annotated, Literal

from pydantic import Field, field_validator

from jfa.domain.value.common import RootValueObject, ValueObject

# Short-uuid alphabet: no 0/1/I/O/l, so codes survive being read aloud
CODE_ALPHABET = "23456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
CODE_LENGTH = 22


class InviteCode(RootValueObject[str]):
    """Human-typeable invite code.

    Codes never start with a digit.
    """

    @field_validator("root")
    @classmethod
    def validate_code_format(cls, v: str) -> str:
        """Validate code is non-empty and does not start with a digit."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Invite code must be 1-255 characters")
        if v[0].isdigit():
            raise ValueError("Invite code must not start with a digit")
        return v


def generate_invite_code() -> InviteCode:
    """Generate a fresh invite code, redrawing while it starts with a digit."""
    while True:
        code = "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))
        if not code[0].isdigit():
            return InviteCode(code)


class Limited(ValueObject):
    """Invite usable ``count`` more times."""

    kind: Literal["limited"] = "limited"
    count: int = Field(ge=1)


class Unlimited(ValueObject):
    """Invite usable any number of times until it expires.

    ``flagged`` is False for invites made with a zero allowance and no
    "no limit" flag; they never run out but are not listed as unlimited.
    """

    kind: Literal["unlimited"] = "unlimited"
    flagged: bool = True


RemainingUses = Annotated[Limited | Unlimited, Field(discriminator="kind")]


class NotifyEvent(str, Enum):
    """Invite lifecycle events an address can subscribe to."""

    EXPIRY = "notify-expiry"
    CREATION = "notify-creation"


class NotifyPreferences(ValueObject):
    """Which invite events one address wants to hear about.

    ``None`` means "never set", which is distinct from an explicit False
    and is left out of the stored JSON.
    """

    notify_expiry: bool | None = Field(default=None, alias="notify-expiry")
    notify_creation: bool | None = Field(default=None, alias="notify-creation")

    def wants(self, event: NotifyEvent) -> bool:
        """True if the address asked for this event."""
        if event == NotifyEvent.EXPIRY:
            return bool(self.notify_expiry)
        return bool(self.notify_creation)

    def merged(self, update: "NotifyPreferences") -> "NotifyPreferences":
        """Overlay the keys explicitly set in ``update``."""
        return self.model_copy(update=update.model_dump(exclude_none=True))


class UsedBy(ValueObject):
    """One successful redemption: who, and when (already formatted)."""

    username: str
    timestamp: str


class Message(ValueObject):
    """An email ready to send."""

    subject: str
    text: str
    html: str | None = None
