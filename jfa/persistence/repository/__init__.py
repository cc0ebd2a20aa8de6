"""JSON-file repository implementations."""

from jfa.persistence.repository.email import JsonEmailRepository
from jfa.persistence.repository.invite import JsonInviteRepository
from jfa.persistence.repository.profile import (
    JsonProfileRepository,
    JsonTemplateRepository,
)

__all__ = [
    "JsonEmailRepository",
    "JsonInviteRepository",
    "JsonProfileRepository",
    "JsonTemplateRepository",
]
