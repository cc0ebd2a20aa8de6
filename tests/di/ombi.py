"""Mock Ombi providers for testing."""

from dishka import Scope, provide

from jfa.adapter.ombi import MockOmbiClient
from jfa.domain.service import OmbiClient
from jfa.util.di.infrastructure.ombi import OmbiProvider


class MockOmbiProvider(OmbiProvider):
    """Mock Ombi provider keeping users in memory."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_ombi_client(self) -> OmbiClient:
        """Provide mock Ombi client."""
        return MockOmbiClient()
