"""Ombi adapter."""

from .client import MockOmbiClient, RealOmbiClient

__all__ = ["RealOmbiClient", "MockOmbiClient"]
