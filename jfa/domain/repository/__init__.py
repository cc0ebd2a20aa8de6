"""Repository interfaces for the jfa domain.

Interfaces live in the domain layer; JSON-file and in-memory
implementations live in ``jfa.persistence``.
"""

from jfa.domain.repository.email import EmailRepository
from jfa.domain.repository.invite import InviteRepository
from jfa.domain.repository.profile import ProfileRepository, TemplateRepository

__all__ = [
    "EmailRepository",
    "InviteRepository",
    "ProfileRepository",
    "TemplateRepository",
]
