"""Account service.

Jellyfin account operations that are not part of the invite state machine:
creation and deletion, the email directory, and the optional Ombi mirror.
"""

from typing import Any

import logfire

from jfa.config import Settings
from jfa.domain.error import UpstreamError, ValidationError
from jfa.domain.model import JellyfinUser
from jfa.domain.repository import EmailRepository, TemplateRepository
from jfa.domain.value import JellyfinUserId

from .base import Service
from .notification_service import NotificationDispatcher
from .upstream import JellyfinClient, OmbiClient, UpstreamResponse


def _raise_for(service: str, response: UpstreamResponse) -> None:
    if not response.ok:
        raise UpstreamError(service, status=response.status, detail=response.error)


class AccountService(Service):
    """Domain service for Jellyfin and Ombi accounts."""

    def __init__(
        self,
        jellyfin: JellyfinClient,
        ombi: OmbiClient,
        email_repository: EmailRepository,
        template_repository: TemplateRepository,
        dispatcher: NotificationDispatcher,
        settings: Settings,
    ) -> None:
        """Initialize account service.

        Args:
            jellyfin: Jellyfin client
            ombi: Ombi client
            email_repository: Email directory
            template_repository: Global templates (for the Ombi template)
            dispatcher: Notification dispatcher (deletion emails)
            settings: Application settings
        """
        self.jellyfin = jellyfin
        self.ombi = ombi
        self.email_repository = email_repository
        self.template_repository = template_repository
        self.dispatcher = dispatcher
        self.settings = settings

    async def create(self, username: str, password: str) -> JellyfinUserId:
        """Create a Jellyfin account.

        Returns:
            ID of the new account

        Raises:
            ValidationError: If an account with this name already exists
            UpstreamError: If Jellyfin refused to create the account
        """
        with logfire.span("account_service.create", username=username):
            existing = await self.jellyfin.user_by_name(username)
            if existing.data is not None:
                logfire.info(
                    "{username}: New user failed: already exists", username=username
                )
                raise ValidationError(f"User already exists named {username}")

            response = await self.jellyfin.new_user(username, password)
            if not response.ok:
                logfire.error(
                    "{username}: New user failed: Jellyfin responded with {status}",
                    username=username,
                    status=response.status,
                )
                raise UpstreamError("jellyfin", status=response.status, detail=response.error)
            self.jellyfin.invalidate_cache()
            user = response.data or {}
            logfire.info("{username}: User created", username=username)
            return JellyfinUserId(user.get("Id", ""))

    async def store_email(self, user_id: JellyfinUserId, address: str) -> None:
        """Record a user's contact address in the email directory."""
        async with self.email_repository.lock:
            await self.email_repository.load()
            self.email_repository.set(user_id, address)
            await self.email_repository.persist()

    async def set_emails(self, addresses: dict[str, str]) -> int:
        """Update contact addresses of existing accounts.

        IDs Jellyfin does not know are ignored.

        Returns:
            Number of addresses stored

        Raises:
            UpstreamError: If the account list could not be fetched
        """
        response = await self.jellyfin.get_users()
        if not response.ok:
            logfire.error(
                "Failed to get users from Jellyfin: Code {status}", status=response.status
            )
            logfire.debug("Error: {error}", error=response.error)
        _raise_for("jellyfin", response)

        known = {user["Id"] for user in response.data}
        updates = {uid: addr for uid, addr in addresses.items() if uid in known}
        async with self.email_repository.lock:
            await self.email_repository.load()
            for user_id, address in updates.items():
                self.email_repository.set(JellyfinUserId(user_id), address)
            await self.email_repository.persist()
        logfire.info("Email list modified", count=len(updates))
        return len(updates)

    async def notification_address(self, user_id: str | None) -> str | None:
        """Address the calling admin receives invite notifications at.

        With Jellyfin logins each admin's address comes from the email
        directory; otherwise the single configured admin address is used.
        """
        if not self.settings.ui.jellyfin_login:
            return self.settings.ui.email or None
        if not user_id:
            return None
        await self.email_repository.load()
        return self.email_repository.get(JellyfinUserId(user_id))

    async def create_ombi_user(self, username: str, password: str, email: str) -> bool:
        """Mirror a new account on Ombi, if enabled and a template is stored.

        Failures are logged and reported, never raised.

        Returns:
            True if an Ombi user was created
        """
        if not self.settings.ombi.enabled:
            return False
        template = await self.template_repository.load_ombi_template()
        if not template:
            logfire.debug("No Ombi template stored, skipping Ombi user")
            return False
        response = await self.ombi.new_user(username, password, email, template)
        if not response.ok:
            logfire.info(
                "Failed to create Ombi user ({status}): {error}",
                status=response.status,
                error=response.error,
            )
            errors = response.data if isinstance(response.data, list) else []
            logfire.debug("Errors reported by Ombi: {errors}", errors=", ".join(errors))
            return False
        logfire.info("Created Ombi user", username=username)
        return True

    async def delete_users(
        self, user_ids: list[str], notify: bool = False, reason: str = ""
    ) -> dict[str, str]:
        """Delete several accounts, continuing past failures.

        Args:
            user_ids: Accounts to delete
            notify: Email each user with a known address
            reason: Reason quoted in the email

        Returns:
            Map of user ID to error summary for the deletions that failed
        """
        with logfire.span("account_service.delete_users", count=len(user_ids)):
            errors: dict[str, str] = {}
            if notify:
                await self.email_repository.load()
            for user_id in user_ids:
                response = await self.jellyfin.delete_user(JellyfinUserId(user_id))
                if not response.ok:
                    errors[user_id] = response.describe()
                if notify:
                    address = self.email_repository.get(JellyfinUserId(user_id))
                    if address:
                        self.dispatcher.dispatch_deleted(
                            JellyfinUserId(user_id), reason, address
                        )
            self.jellyfin.invalidate_cache()
            if errors and len(errors) == len(user_ids):
                logfire.error(
                    "Account deletion failed: {error}", error=errors[user_ids[0]]
                )
            return errors

    async def list_users(self) -> list[tuple[JellyfinUser, str | None]]:
        """List accounts with their stored contact address.

        Raises:
            UpstreamError: If Jellyfin could not be reached
        """
        response = await self.jellyfin.get_users()
        if not response.ok:
            logfire.error(
                "Failed to get users from Jellyfin: Code {status}", status=response.status
            )
            logfire.debug("Error: {error}", error=response.error)
        _raise_for("jellyfin", response)
        await self.email_repository.load()
        users = [JellyfinUser.from_api(record) for record in response.data]
        return [(user, self.email_repository.get(user.id)) for user in users]

    async def get_user(self, user_id: str) -> JellyfinUser:
        """Fetch one account.

        Raises:
            UpstreamError: If the account could not be fetched
        """
        response = await self.jellyfin.user_by_id(JellyfinUserId(user_id))
        if not response.ok:
            logfire.error(
                "Failed to get user from Jellyfin: Code {status}", status=response.status
            )
        _raise_for("jellyfin", response)
        return JellyfinUser.from_api(response.data)

    async def get_display_preferences(self, user_id: str) -> dict[str, Any]:
        """Fetch an account's display preferences.

        Raises:
            UpstreamError: If they could not be fetched
        """
        response = await self.jellyfin.get_display_preferences(JellyfinUserId(user_id))
        if not response.ok:
            logfire.error(
                "Failed to get DisplayPrefs: Code {status}", status=response.status
            )
        _raise_for("jellyfin", response)
        return response.data or {}

    async def list_ombi_users(self) -> list[dict[str, str]]:
        """List Ombi users as ``{"id", "name"}`` pairs.

        Raises:
            UpstreamError: If Ombi could not be reached
        """
        response = await self.ombi.get_users()
        if not response.ok:
            logfire.error(
                "Failed to get users from Ombi: Code {status}", status=response.status
            )
        _raise_for("ombi", response)
        return [
            {"id": user["id"], "name": user.get("userName", "")}
            for user in response.data or []
        ]

    async def store_ombi_template(self, ombi_user_id: str) -> None:
        """Use an existing Ombi user as the template for new Ombi accounts.

        Raises:
            UpstreamError: If the user could not be fetched or is empty
        """
        response = await self.ombi.template_by_id(ombi_user_id)
        if not response.ok or not response.data:
            logfire.error(
                "Couldn't get user from Ombi: {status} {error}",
                status=response.status,
                error=response.error,
            )
            raise UpstreamError("ombi", status=response.status, detail=response.error)
        await self.template_repository.store_ombi_template(response.data)
        logfire.info("Ombi template stored", ombi_user_id=ombi_user_id)
