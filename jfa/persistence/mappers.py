"""Mappers between the JSON data files and domain models.

The invite file layout is shared with earlier jfa releases::

    {
        "<code>": {
            "created": "2020-08-17T12:00:00+01:00",
            "valid_till": "2020-08-18T12:00:00+01:00",
            "remaining-uses": 3,
            "no-limit": false,
            "used-by": [["alice", "17/08/20 12:30"]],
            "email": "",
            "profile": "Default",
            "notify": {"admin@example.com": {"notify-expiry": true}}
        }
    }

A record with ``remaining-uses: 0`` and no ``no-limit`` flag is never used
up either; it reads back as ``Unlimited(flagged=False)`` and is written back
the same way.
"""

from typing import Any, Dict

from jfa.domain.model import Invite, Profile
from jfa.domain.value import (
    InviteCode,
    Limited,
    NotifyPreferences,
    RemainingUses,
    Unlimited,
    UsedBy,
)
from jfa.util.timeutil import parse_datetime


def dict_to_remaining_uses(data: Dict[str, Any]) -> RemainingUses:
    """Read the use allowance from its two legacy fields."""
    count = int(data.get("remaining-uses") or 0)
    if data.get("no-limit"):
        return Unlimited()
    if count <= 0:
        return Unlimited(flagged=False)
    return Limited(count=count)


def remaining_uses_to_dict(uses: RemainingUses) -> Dict[str, Any]:
    """Write the use allowance as its two legacy fields."""
    if isinstance(uses, Unlimited):
        return {"remaining-uses": 0, "no-limit": uses.flagged}
    return {"remaining-uses": uses.count, "no-limit": False}


def dict_to_invite(code: str, data: Dict[str, Any]) -> Invite:
    """Convert one stored invite record to an Invite.

    Args:
        code: Key of the record
        data: Stored record

    Returns:
        Invite domain model

    Raises:
        ValueError: If a timestamp cannot be parsed
    """
    created = parse_datetime(data["created"])
    valid_till = parse_datetime(data["valid_till"])
    if created is None or valid_till is None:
        raise ValueError(f"Invalid timestamp on invite {code}")
    return Invite(
        code=InviteCode(code),
        created=created,
        valid_till=valid_till,
        uses=dict_to_remaining_uses(data),
        email=data.get("email") or "",
        profile=data.get("profile") or "",
        used_by=tuple(
            UsedBy(username=entry[0], timestamp=entry[1])
            for entry in data.get("used-by") or []
        ),
        notify={
            address: NotifyPreferences.model_validate(preferences or {})
            for address, preferences in (data.get("notify") or {}).items()
        },
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert an Invite to its stored record (without the code key)."""
    return {
        "created": invite.created.isoformat(),
        "valid_till": invite.valid_till.isoformat(),
        **remaining_uses_to_dict(invite.uses),
        "used-by": [[entry.username, entry.timestamp] for entry in invite.used_by],
        "email": invite.email,
        "profile": invite.profile,
        "notify": {
            address: preferences.model_dump(by_alias=True, exclude_none=True)
            for address, preferences in invite.notify.items()
        },
    }


def dict_to_profile(name: str, data: Dict[str, Any]) -> Profile:
    """Convert one stored profile record to a Profile."""
    return Profile(
        name=name,
        policy=data.get("policy") or {},
        configuration=data.get("configuration") or {},
        displayprefs=data.get("displayprefs") or {},
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    return {
        "policy": profile.policy,
        "configuration": profile.configuration,
        "displayprefs": profile.displayprefs,
    }
