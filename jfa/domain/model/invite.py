"""Invite entity.

Invites gate account creation on the Jellyfin server. Each invite has an
absolute expiry instant and a use allowance; it disappears from the store
when it expires, is deleted, or runs out of uses.
"""

from datetime import datetime

from pydantic import Field, field_validator

from jfa.domain.model.common import DomainModel
from jfa.domain.value import (
    InviteCode,
    Limited,
    NotifyEvent,
    NotifyPreferences,
    RemainingUses,
    Unlimited,
    UsedBy,
)
from jfa.util.timeutil import ensure_aware


class Invite(DomainModel):
    """Invite entity.

    Business rules:
    - ``valid_till`` is absolute; an invite is expired once now > valid_till
    - ``Limited(1)`` is deleted by its next consumption, larger counts
      are decremented, ``Unlimited`` is never touched
    - ``used_by`` is append-only while the invite lives
    - ``profile`` empty means "apply no profile on redemption"
    """

    code: InviteCode
    created: datetime
    valid_till: datetime
    uses: RemainingUses = Limited(count=1)
    email: str = ""  # Where the invite was sent, or a send-failure note
    profile: str = ""
    used_by: tuple[UsedBy, ...] = ()
    notify: dict[str, NotifyPreferences] = Field(default_factory=dict)

    @field_validator("created", "valid_till")
    @classmethod
    def make_aware(cls, v: datetime) -> datetime:
        """Keep every instant time-zone aware so comparisons are consistent."""
        return ensure_aware(v)

    @property
    def no_limit(self) -> bool:
        """True for invites created with the "no limit" flag."""
        return isinstance(self.uses, Unlimited) and self.uses.flagged

    def is_expired(self, now: datetime) -> bool:
        """Check whether the invite has passed its expiry instant."""
        return ensure_aware(now) > self.valid_till

    def consume(self, username: str, timestamp: str) -> "Invite | None":
        """Record one redemption.

        Args:
            username: Account created with this invite
            timestamp: Formatted redemption time

        Returns:
            The updated invite, or None if this use exhausted it
        """
        used_by = (*self.used_by, UsedBy(username=username, timestamp=timestamp))
        if isinstance(self.uses, Unlimited):
            return self.model_copy(update={"used_by": used_by})
        if self.uses.count <= 1:
            return None
        return self.model_copy(
            update={"uses": Limited(count=self.uses.count - 1), "used_by": used_by}
        )

    def subscribers(self, event: NotifyEvent) -> list[str]:
        """Addresses that asked to hear about ``event``."""
        return [
            address
            for address, preferences in self.notify.items()
            if preferences.wants(event)
        ]

    def preferences_for(self, address: str) -> NotifyPreferences:
        """Notification preferences of one address (empty if never set)."""
        return self.notify.get(address, NotifyPreferences())
