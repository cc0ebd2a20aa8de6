"""Account settings use cases."""

from jfa.application.usecase.settings.apply_settings import (
    ApplySettingsRequest,
    ApplySettingsResponse,
    ApplySettingsUseCase,
)
from jfa.application.usecase.settings.set_defaults import (
    SetDefaultsRequest,
    SetDefaultsResponse,
    SetDefaultsUseCase,
)

__all__ = [
    "ApplySettingsRequest",
    "ApplySettingsResponse",
    "ApplySettingsUseCase",
    "SetDefaultsRequest",
    "SetDefaultsResponse",
    "SetDefaultsUseCase",
]
