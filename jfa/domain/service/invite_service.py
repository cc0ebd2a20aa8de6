"""Invite lifecycle service.

Every operation that reads or changes invites runs its whole
load-check-mutate-persist sequence while holding the store lock, so two
requests touching the same code cannot lose each other's updates.
Notifications are started only after the change has been persisted.
"""

from collections.abc import Callable
from datetime import datetime, timedelta

import logfire
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from jfa.config import Settings
from jfa.domain.error import NoDefaultProfileError, NotFoundError, UpstreamError
from jfa.domain.model.invite import Invite
from jfa.domain.repository import InviteRepository, ProfileRepository
from jfa.domain.value import (
    InviteCode,
    Limited,
    NotifyPreferences,
    RemainingUses,
    Unlimited,
    UsedBy,
    generate_invite_code,
)
from jfa.util.timeutil import DateFormatter, calendar_diff, utc_now

from .base import Service
from .notification_service import NotificationDispatcher


class GenerateInviteOptions(BaseModel):
    """Parameters for a new invite."""

    days: int = Field(default=0, ge=0)
    hours: int = Field(default=0, ge=0)
    minutes: int = Field(default=0, ge=0)
    multiple_uses: bool = False
    no_limit: bool = False
    remaining_uses: int = Field(default=1, ge=0)  # 0 means unlimited
    profile: str = ""
    email: str = ""

    def uses(self) -> RemainingUses:
        """Resolve the use allowance the flags describe."""
        if not self.multiple_uses:
            return Limited(count=1)
        if self.no_limit:
            return Unlimited()
        if self.remaining_uses == 0:
            return Unlimited(flagged=False)
        return Limited(count=self.remaining_uses)


class InviteSummary(BaseModel):
    """Invite as shown in the admin listing."""

    code: str
    years: int
    months: int
    days: int
    hours: int
    minutes: int
    created: str
    profile: str
    used_by: list[UsedBy] = Field(default_factory=list)
    no_limit: bool = False
    remaining_uses: int = 1
    email: str | None = None
    notify_expiry: bool | None = None
    notify_creation: bool | None = None


class InviteService(Service):
    """Domain service owning the invite state machine."""

    def __init__(
        self,
        invite_repository: InviteRepository,
        profile_repository: ProfileRepository,
        dispatcher: NotificationDispatcher,
        formatter: DateFormatter,
        settings: Settings,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite store
            profile_repository: Profile store, for validating profile names
            dispatcher: Notification dispatcher
            formatter: Formats redemption timestamps
            settings: Application settings
            clock: Source of "now"
        """
        self.invite_repository = invite_repository
        self.profile_repository = profile_repository
        self.dispatcher = dispatcher
        self.formatter = formatter
        self.settings = settings
        self.clock = clock

    async def generate(self, options: GenerateInviteOptions) -> Invite:
        """Create and persist a new invite.

        An unknown profile name falls back to the default profile. When an
        address is given and invite emails are enabled the code is mailed;
        a failed send is recorded on the invite's email field and does not
        undo the invite.

        Raises:
            NoDefaultProfileError: If the fallback profile does not exist
            PersistenceError: If the invite could not be stored
        """
        with logfire.span(
            "invite_service.generate",
            days=options.days,
            hours=options.hours,
            minutes=options.minutes,
            multiple_uses=options.multiple_uses,
            profile=options.profile,
        ):
            now = self.clock()
            valid_till = now + timedelta(
                days=options.days, hours=options.hours, minutes=options.minutes
            )
            profile = await self._resolve_profile(options.profile)
            send_email = bool(options.email) and self.settings.invite_emails.enabled

            async with self.invite_repository.lock:
                await self.invite_repository.load()
                code = generate_invite_code()
                while self.invite_repository.get(code) is not None:
                    code = generate_invite_code()
                invite = Invite(
                    code=code,
                    created=now,
                    valid_till=valid_till,
                    uses=options.uses(),
                    email=options.email if send_email else "",
                    profile=profile,
                )
                self.invite_repository.put(invite)
                await self.invite_repository.persist()

            logfire.info(
                "Invite created",
                code=str(code),
                valid_till=valid_till.isoformat(),
                no_limit=invite.no_limit,
            )

            if send_email:
                logfire.debug("{code}: Sending invite email", code=str(code))
                try:
                    await self.dispatcher.send_invite(code, invite, options.email)
                except UpstreamError:
                    invite = await self._record_email_failure(invite, options.email)
            return invite

    async def validate_and_consume(
        self, code: str, consuming: bool = False, username: str = ""
    ) -> bool:
        """Check an invite code, optionally using it up.

        An expired invite is deleted (and its expiry subscribers notified)
        by whichever call discovers it, and is never reported as valid.

        Args:
            code: Code supplied by the user
            consuming: Record a redemption and decrement the allowance
            username: Account the redemption is attributed to

        Returns:
            True if the code exists and has not expired
        """
        return await self._check(code, consuming, username) is not None

    async def redeem(
        self, code: str, username: str, user_email: str = ""
    ) -> Invite | None:
        """Consume an invite for a newly created account.

        Creation subscribers are notified even when this use exhausts the
        invite, from the snapshot taken before consumption.

        Returns:
            The invite as it was before this redemption, or None if the
            code is unknown or expired
        """
        with logfire.span("invite_service.redeem", code=code, username=username):
            snapshot = await self._check(code, True, username)
            if snapshot is not None:
                self.dispatcher.dispatch_creation(
                    snapshot.code, snapshot, username, user_email
                )
            return snapshot

    async def sweep_expired(self) -> list[InviteCode]:
        """Delete every expired invite and notify expiry subscribers.

        Idempotent: a second run with nothing newly expired changes nothing
        and sends nothing.

        Returns:
            Codes of the invites removed
        """
        with logfire.span("invite_service.sweep_expired"):
            now = self.clock()
            expired: list[Invite] = []
            async with self.invite_repository.lock:
                await self.invite_repository.load()
                for invite in self.invite_repository.all():
                    if invite.is_expired(now):
                        logfire.debug(
                            "Housekeeping: Deleting old invite {code}",
                            code=str(invite.code),
                        )
                        self.invite_repository.delete(invite.code)
                        expired.append(invite)
                if expired:
                    await self.invite_repository.persist()

            for invite in expired:
                self.dispatcher.dispatch_expiry(invite.code, invite)
            if expired:
                logfire.info("Expired invites removed", count=len(expired))
            return [invite.code for invite in expired]

    async def set_profile(self, code: str, profile: str) -> Invite:
        """Change the profile applied when an invite is redeemed.

        An empty name means "apply no profile".

        Raises:
            NotFoundError: If the invite or the profile does not exist
        """
        with logfire.span("invite_service.set_profile", code=code, profile=profile):
            logfire.debug('{code}: Setting profile to "{profile}"', code=code, profile=profile)
            if profile:
                await self.profile_repository.load()
                if not self.profile_repository.exists(profile):
                    logfire.error(
                        '{code}: Profile "{profile}" not found', code=code, profile=profile
                    )
                    raise NotFoundError("Profile", profile)

            async with self.invite_repository.lock:
                await self.invite_repository.load()
                invite = self._get_or_raise(code)
                updated = invite.model_copy(update={"profile": profile})
                self.invite_repository.put(updated)
                await self.invite_repository.persist()
            return updated

    async def set_notify_preferences(
        self, code: str, address: str, preferences: NotifyPreferences
    ) -> bool:
        """Update which events ``address`` hears about for one invite.

        Only keys explicitly set in ``preferences`` are overwritten. Nothing
        is written when the result equals the current state.

        Returns:
            True if the preferences changed

        Raises:
            NotFoundError: If the invite does not exist
        """
        with logfire.span("invite_service.set_notify_preferences", code=code):
            logfire.debug("{code}: Notification settings change requested", code=code)
            async with self.invite_repository.lock:
                await self.invite_repository.load()
                invite = self._get_or_raise(code)
                current = invite.preferences_for(address)
                merged = current.merged(preferences)
                if merged == current:
                    return False
                updated = invite.model_copy(
                    update={"notify": {**invite.notify, address: merged}}
                )
                self.invite_repository.put(updated)
                await self.invite_repository.persist()

            logfire.debug(
                "{code}: Set notify-expiry={expiry}, notify-creation={creation} for {address}",
                code=code,
                expiry=merged.notify_expiry,
                creation=merged.notify_creation,
                address=address,
            )
            return True

    async def delete(self, code: str) -> None:
        """Remove an invite unconditionally.

        Raises:
            NotFoundError: If the invite does not exist
        """
        with logfire.span("invite_service.delete", code=code):
            logfire.debug("{code}: Deletion requested", code=code)
            async with self.invite_repository.lock:
                await self.invite_repository.load()
                invite = self._get_or_raise(code)
                self.invite_repository.delete(invite.code)
                await self.invite_repository.persist()
            logfire.info("{code}: Invite deleted", code=code)

    async def list_invites(
        self, caller_address: str | None = None
    ) -> list[InviteSummary]:
        """List live invites, purging expired ones first.

        Args:
            caller_address: Notification address of the requesting admin;
                only that address's notify flags are included

        Returns:
            Invites ordered by creation time
        """
        with logfire.span("invite_service.list_invites"):
            await self.sweep_expired()
            now = self.clock()
            async with self.invite_repository.lock:
                await self.invite_repository.load()
                invites = self.invite_repository.all()
            invites.sort(key=lambda invite: invite.created)
            return [self._summarize(invite, now, caller_address) for invite in invites]

    async def _check(self, code: str, consuming: bool, username: str) -> Invite | None:
        try:
            invite_code = InviteCode(code)
        except PydanticValidationError:
            return None

        now = self.clock()
        async with self.invite_repository.lock:
            await self.invite_repository.load()
            invite = self.invite_repository.get(invite_code)
            if invite is None:
                return None

            if invite.is_expired(now):
                logfire.debug("Housekeeping: Deleting old invite {code}", code=code)
                self.invite_repository.delete(invite_code)
                await self.invite_repository.persist()
                expired = invite
            else:
                if consuming:
                    updated = invite.consume(username, self.formatter.format(now))
                    if updated is None:
                        self.invite_repository.delete(invite_code)
                        logfire.info("{code}: Invite used up", code=code)
                    else:
                        self.invite_repository.put(updated)
                    await self.invite_repository.persist()
                return invite

        self.dispatcher.dispatch_expiry(invite_code, expired)
        return None

    async def _resolve_profile(self, name: str) -> str:
        if not name:
            return ""
        await self.profile_repository.load()
        if self.profile_repository.exists(name):
            return name
        default = self.settings.invites.default_profile
        if not self.profile_repository.exists(default):
            logfire.error(
                'Profile "{profile}" not found and no default profile exists',
                profile=name,
            )
            raise NoDefaultProfileError(default)
        logfire.info(
            'Profile "{profile}" not found, using "{default}"', profile=name, default=default
        )
        return default

    async def _record_email_failure(self, invite: Invite, address: str) -> Invite:
        note = f"Failed to send to {address}"
        async with self.invite_repository.lock:
            await self.invite_repository.load()
            current = self.invite_repository.get(invite.code)
            if current is None:
                return invite.model_copy(update={"email": note})
            updated = current.model_copy(update={"email": note})
            self.invite_repository.put(updated)
            await self.invite_repository.persist()
        return updated

    def _get_or_raise(self, code: str) -> Invite:
        try:
            invite_code = InviteCode(code)
        except PydanticValidationError:
            invite_code = None
        invite = self.invite_repository.get(invite_code) if invite_code else None
        if invite is None:
            logfire.error("{code}: Invalid code", code=code)
            raise NotFoundError("Invite", code)
        return invite

    def _summarize(
        self, invite: Invite, now: datetime, caller_address: str | None
    ) -> InviteSummary:
        diff = calendar_diff(invite.valid_till, now)
        summary = InviteSummary(
            code=str(invite.code),
            years=diff.years,
            months=diff.months,
            days=diff.days,
            hours=diff.hours,
            minutes=diff.minutes,
            created=self.formatter.format(invite.created),
            profile=invite.profile,
            used_by=list(invite.used_by),
            no_limit=invite.no_limit,
            remaining_uses=invite.uses.count if isinstance(invite.uses, Limited) else 1,
            email=invite.email or None,
        )
        if caller_address and caller_address in invite.notify:
            preferences = invite.notify[caller_address]
            summary.notify_expiry = preferences.notify_expiry
            summary.notify_creation = preferences.notify_creation
        return summary
