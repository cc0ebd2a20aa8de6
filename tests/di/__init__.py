"""Mock providers for testing."""

from .jellyfin import MockJellyfinProvider
from .mail import MockMailProvider
from .ombi import MockOmbiProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockJellyfinProvider",
    "MockMailProvider",
    "MockOmbiProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
