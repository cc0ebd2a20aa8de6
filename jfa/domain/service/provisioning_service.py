"""Provisioning of Jellyfin accounts from templates.

Steps run in order (policy, then configuration, then display
preferences). A failed step is logged and reported but never rolls back
the steps before it, and in batch mode never stops the next account.
"""

from typing import Any

import logfire
from pydantic import BaseModel, Field

from jfa.config import InviteSettings
from jfa.domain.model.profile import UserTemplate
from jfa.domain.repository import ProfileRepository
from jfa.domain.value import JellyfinUserId

from .base import Service
from .upstream import JellyfinClient


class ApplySettingsErrors(BaseModel):
    """Per-account failures of a batch settings update."""

    policy: dict[str, str] = Field(default_factory=dict)
    homescreen: dict[str, str] = Field(default_factory=dict)


class ProvisioningService(Service):
    """Domain service applying templates to accounts."""

    def __init__(
        self,
        jellyfin: JellyfinClient,
        profile_repository: ProfileRepository,
        settings: InviteSettings,
    ) -> None:
        """Initialize provisioning service.

        Args:
            jellyfin: Jellyfin client
            profile_repository: Profile store
            settings: Invite settings (default profile name)
        """
        self.jellyfin = jellyfin
        self.profile_repository = profile_repository
        self.settings = settings

    async def resolve_profile(self, name: str) -> UserTemplate | None:
        """Find the template an invite's profile name refers to.

        Empty means no template; an unknown name falls back to the default
        profile, and to nothing if that is missing too.
        """
        if not name:
            return None
        await self.profile_repository.load()
        profile = self.profile_repository.get(name)
        if profile is None:
            profile = self.profile_repository.get(self.settings.default_profile)
        return profile

    async def apply_profile(self, user_id: JellyfinUserId, profile_name: str) -> dict[str, str]:
        """Apply an invite's profile to a freshly created account.

        Returns:
            Map of failed step to error summary (empty on full success)
        """
        with logfire.span(
            "provisioning.apply_profile", user_id=user_id, profile=profile_name
        ):
            template = await self.resolve_profile(profile_name)
            if template is None:
                return {}
            logfire.debug('Applying profile "{profile}"', profile=profile_name)
            return await self.apply_template(user_id, template)

    async def apply_template(
        self, user_id: JellyfinUserId, template: UserTemplate
    ) -> dict[str, str]:
        """Apply policy and, when complete, homescreen settings to one account.

        Returns:
            Map of failed step to error summary (empty on full success)
        """
        errors: dict[str, str] = {}
        if template.has_policy:
            response = await self.jellyfin.set_policy(user_id, template.policy)
            if not response.ok:
                logfire.error(
                    "{user_id}: Failed to set user policy: Code {status}",
                    user_id=user_id,
                    status=response.status,
                )
                errors["policy"] = response.describe()
        if template.has_homescreen:
            error = await self._apply_homescreen(
                user_id, template.configuration, template.displayprefs
            )
            if error:
                logfire.error(
                    "{user_id}: Failed to set configuration template: {error}",
                    user_id=user_id,
                    error=error,
                )
                errors["homescreen"] = error
        return errors

    async def apply_settings(
        self,
        targets: list[JellyfinUserId],
        policy: dict[str, Any],
        configuration: dict[str, Any] | None = None,
        displayprefs: dict[str, Any] | None = None,
        homescreen: bool = False,
    ) -> ApplySettingsErrors:
        """Copy settings onto several accounts, one after another.

        Args:
            targets: Accounts to update
            policy: Policy to set on each
            configuration: Homescreen configuration (when ``homescreen``)
            displayprefs: Display preferences (when ``homescreen``)
            homescreen: Also copy the homescreen

        Returns:
            Failures per account; accounts not listed succeeded
        """
        with logfire.span(
            "provisioning.apply_settings", targets=len(targets), homescreen=homescreen
        ):
            errors = ApplySettingsErrors()
            for user_id in targets:
                response = await self.jellyfin.set_policy(user_id, policy)
                if not response.ok:
                    errors.policy[user_id] = response.describe()
                if homescreen:
                    error = await self._apply_homescreen(
                        user_id, configuration or {}, displayprefs or {}
                    )
                    if error:
                        errors.homescreen[user_id] = error
            if errors.policy or errors.homescreen:
                logfire.error(
                    "Settings update failed for some users",
                    policy_failures=len(errors.policy),
                    homescreen_failures=len(errors.homescreen),
                )
            return errors

    async def _apply_homescreen(
        self,
        user_id: JellyfinUserId,
        configuration: dict[str, Any],
        displayprefs: dict[str, Any],
    ) -> str:
        # Display preferences only make sense on top of the configuration
        response = await self.jellyfin.set_configuration(user_id, configuration)
        if not response.ok:
            return f"Configuration {response.describe()}"
        response = await self.jellyfin.set_display_preferences(user_id, displayprefs)
        if not response.ok:
            return f"Displayprefs {response.describe()}"
        return ""
