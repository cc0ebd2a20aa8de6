"""Domain model entities for jfa."""

from jfa.domain.model.invite import Invite
from jfa.domain.model.profile import Profile, UserTemplate
from jfa.domain.model.user import JellyfinUser

__all__ = [
    "Invite",
    "JellyfinUser",
    "Profile",
    "UserTemplate",
]
