"""Notification dispatcher.

Notifications are fire-and-forget: each recipient gets its own
``asyncio.Task``, started after the triggering state change has been
persisted. A failing recipient never affects another recipient or the
request that triggered it.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable

import logfire

from jfa.config import NotificationSettings
from jfa.domain.error import UpstreamError
from jfa.domain.model.invite import Invite
from jfa.domain.value import InviteCode, JellyfinUserId, Message, NotifyEvent

from .base import Service


class MailError(Exception):
    """Building or sending an email failed."""

    pass


class Mailer(ABC):
    """Constructs and sends the emails jfa produces."""

    @abstractmethod
    def construct_invite(self, code: InviteCode, invite: Invite) -> Message:
        pass

    @abstractmethod
    def construct_created(
        self, code: InviteCode, username: str, address: str, invite: Invite
    ) -> Message:
        pass

    @abstractmethod
    def construct_expiry(self, code: InviteCode, invite: Invite) -> Message:
        pass

    @abstractmethod
    def construct_deleted(self, reason: str) -> Message:
        pass

    @abstractmethod
    async def send(self, address: str, message: Message) -> None:
        """Deliver a message.

        Raises:
            MailError: If the transport rejected the message
        """
        pass


class NotificationDispatcher(Service):
    """Domain service sending invite and account notifications."""

    def __init__(self, mailer: Mailer, settings: NotificationSettings) -> None:
        """Initialize dispatcher.

        Args:
            mailer: Mail collaborator
            settings: Notification feature flag
        """
        self.mailer = mailer
        self.settings = settings
        self._tasks: set[asyncio.Task] = set()

    @property
    def enabled(self) -> bool:
        return self.settings.enabled

    def dispatch_expiry(self, code: InviteCode, invite: Invite) -> int:
        """Notify every address subscribed to this invite's expiry.

        Returns:
            Number of notifications started
        """
        if not self.enabled or not invite.notify:
            return 0
        recipients = invite.subscribers(NotifyEvent.EXPIRY)
        if recipients:
            logfire.debug("{code}: Expiry notification", code=str(code))
        for address in recipients:
            self._spawn(
                label=f"{code}: expiry notification",
                address=address,
                build=lambda: self.mailer.construct_expiry(code, invite),
            )
        return len(recipients)

    def dispatch_creation(
        self, code: InviteCode, invite: Invite, username: str, user_email: str
    ) -> int:
        """Notify every address subscribed to account creation on this invite.

        Args:
            code: Invite that was redeemed
            invite: Invite as it was just before redemption
            username: New account name
            user_email: Address the new user signed up with

        Returns:
            Number of notifications started
        """
        if not self.enabled:
            return 0
        recipients = invite.subscribers(NotifyEvent.CREATION)
        for address in recipients:
            self._spawn(
                label=f"{code}: user creation notification",
                address=address,
                build=lambda: self.mailer.construct_created(
                    code, username, user_email, invite
                ),
            )
        return len(recipients)

    def dispatch_deleted(self, user_id: JellyfinUserId, reason: str, address: str) -> None:
        """Tell a user their account was deleted."""
        self._spawn(
            label=f"{user_id}: account deletion email",
            address=address,
            build=lambda: self.mailer.construct_deleted(reason),
        )

    async def send_invite(self, code: InviteCode, invite: Invite, address: str) -> None:
        """Email an invite code, waiting for the result.

        Raises:
            UpstreamError: If the message could not be built or sent
        """
        with logfire.span("notification.send_invite", code=str(code)):
            try:
                message = self.mailer.construct_invite(code, invite)
            except Exception as e:
                logfire.error("{code}: Failed to construct invite email", code=str(code))
                logfire.debug("{code}: Error: {error}", code=str(code), error=str(e))
                raise UpstreamError("mail", detail=str(e)) from e
            try:
                await self.mailer.send(address, message)
            except Exception as e:
                logfire.error(
                    "{code}: Failed to send to {address}", code=str(code), address=address
                )
                logfire.debug("{code}: Error: {error}", code=str(code), error=str(e))
                raise UpstreamError("mail", detail=str(e)) from e
            logfire.info("{code}: Sent invite email to {address}", code=str(code), address=address)

    async def drain(self) -> None:
        """Wait for every in-flight notification to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def _spawn(self, label: str, address: str, build: Callable[[], Message]) -> None:
        task = asyncio.create_task(self._deliver(label, address, build))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _deliver(
        self, label: str, address: str, build: Callable[[], Message]
    ) -> None:
        try:
            message = build()
        except Exception as e:
            logfire.error("Failed to construct {label}", label=label)
            logfire.debug("{label}: Error: {error}", label=label, error=str(e))
            return
        try:
            await self.mailer.send(address, message)
        except Exception as e:
            logfire.error("Failed to send {label} to {address}", label=label, address=address)
            logfire.debug("{label}: Error: {error}", label=label, error=str(e))
            return
        logfire.info("Sent {label} to {address}", label=label, address=address)
