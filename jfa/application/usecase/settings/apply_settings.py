"""Apply settings use case."""

from typing import Literal

import logfire
from pydantic import BaseModel, ConfigDict, Field

from jfa.application.usecase.base import BaseUseCase
from jfa.domain.error import ValidationError
from jfa.domain.repository import TemplateRepository
from jfa.domain.service import AccountService, ApplySettingsErrors, ProvisioningService


class ApplySettingsRequest(BaseModel):
    """Apply settings request."""

    model_config = ConfigDict(populate_by_name=True)

    source: Literal["template", "user"] = Field(default="template", alias="from")
    id: str | None = None  # Source user when ``from`` is "user"
    apply_to: list[str]
    homescreen: bool = False


class ApplySettingsResponse(BaseModel):
    """Apply settings response.

    ``all_failed`` is set when every target failed one of the steps.
    """

    errors: ApplySettingsErrors
    all_failed: bool = False


class ApplySettingsUseCase(BaseUseCase):
    """Use case for copying settings onto existing accounts."""

    def __init__(
        self,
        account_service: AccountService,
        provisioning_service: ProvisioningService,
        template_repository: TemplateRepository,
    ) -> None:
        self.account_service = account_service
        self.provisioning_service = provisioning_service
        self.template_repository = template_repository

    async def execute(self, request: ApplySettingsRequest) -> ApplySettingsResponse:
        """Apply the template's or a user's settings to every target.

        Raises:
            ValidationError: If the requested template part is not stored,
                or no source user was given
            UpstreamError: If the source user could not be fetched
        """
        configuration = None
        displayprefs = None
        if request.source == "template":
            template = await self.template_repository.load_user_template()
            if not template.has_policy:
                raise ValidationError("No policy template available")
            if request.homescreen and not template.has_homescreen:
                raise ValidationError("No homescreen template available")
            policy = template.policy
            if request.homescreen:
                configuration = template.configuration
                displayprefs = template.displayprefs
            applying_from = "template"
        else:
            if not request.id:
                raise ValidationError("No source user given")
            user = await self.account_service.get_user(request.id)
            policy = user.policy
            if request.homescreen:
                displayprefs = await self.account_service.get_display_preferences(
                    request.id
                )
                configuration = user.configuration
            applying_from = f'"{user.name}"'

        logfire.info(
            "Applying settings to {count} user(s) from {source}",
            count=len(request.apply_to),
            source=applying_from,
        )
        errors = await self.provisioning_service.apply_settings(
            request.apply_to,
            policy,
            configuration=configuration,
            displayprefs=displayprefs,
            homescreen=request.homescreen,
        )
        targets = len(request.apply_to)
        all_failed = targets > 0 and (
            len(errors.policy) == targets or len(errors.homescreen) == targets
        )
        return ApplySettingsResponse(errors=errors, all_failed=all_failed)
