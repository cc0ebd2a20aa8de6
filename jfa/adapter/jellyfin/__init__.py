"""Jellyfin adapter."""

from .client import MockJellyfinClient, RealJellyfinClient

__all__ = ["RealJellyfinClient", "MockJellyfinClient"]
