"""Jellyfin infrastructure providers."""

from dishka import Scope, provide

from jfa.adapter.jellyfin import RealJellyfinClient
from jfa.config import JellyfinSettings
from jfa.domain.service import JellyfinClient
from jfa.util.di.base import ProviderBase
from jfa.util.error import ConfigurationError


class JellyfinProvider(ProviderBase):
    """Jellyfin component base."""

    __mock_component__ = "jellyfin"


class ProdJellyfinProvider(JellyfinProvider):
    """Production Jellyfin provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_jellyfin_client(self, settings: JellyfinSettings) -> JellyfinClient:
        """Provide Jellyfin client.

        Raises:
            ConfigurationError: If no API key is configured
        """
        if not settings.api_key:
            raise ConfigurationError("Jellyfin API key must be configured")
        return RealJellyfinClient(settings)
