"""Ombi infrastructure providers."""

from dishka import Scope, provide

from jfa.adapter.ombi import RealOmbiClient
from jfa.config import OmbiSettings
from jfa.domain.service import OmbiClient
from jfa.util.di.base import ProviderBase


class OmbiProvider(ProviderBase):
    """Ombi component base."""

    __mock_component__ = "ombi"


class ProdOmbiProvider(OmbiProvider):
    """Production Ombi provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_ombi_client(self, settings: OmbiSettings) -> OmbiClient:
        """Provide Ombi client."""
        return RealOmbiClient(settings)
