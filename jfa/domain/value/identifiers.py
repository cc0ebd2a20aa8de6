"""Typed identifiers.

Jellyfin and Ombi hand out opaque string IDs; NewType keeps them apart.
"""

from typing import NewType

JellyfinUserId = NewType("JellyfinUserId", str)
OmbiUserId = NewType("OmbiUserId", str)
EmailAddress = NewType("EmailAddress", str)
