"""In-memory repository implementations for testing."""

from .email import InMemoryEmailRepository
from .invite import InMemoryInviteRepository
from .profile import InMemoryProfileRepository, InMemoryTemplateRepository

__all__ = [
    "InMemoryEmailRepository",
    "InMemoryInviteRepository",
    "InMemoryProfileRepository",
    "InMemoryTemplateRepository",
]
