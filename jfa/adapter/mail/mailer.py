"""Mail transports.

``BaseMailer`` builds every message; subclasses only deliver them.
"""

import asyncio
import smtplib
import ssl
from collections.abc import Callable
from datetime import datetime
from email.message import EmailMessage
from email.utils import formataddr

import httpx
import logfire
from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from jfa.config import EmailSettings
from jfa.domain.model.invite import Invite
from jfa.domain.service.notification_service import MailError, Mailer
from jfa.domain.value import InviteCode, Message
from jfa.util.timeutil import DateFormatter, calendar_diff, utc_now

INVITE_SUBJECT = "Invite - Jellyfin"
CREATED_SUBJECT = "Notice: User created"
EXPIRY_SUBJECT = "Notice: Invite expired"
DELETED_SUBJECT = "Your account was deleted - Jellyfin"

# HTML bodies are autoescaped, plain-text bodies are not
templates = Environment(
    loader=PackageLoader("jfa.adapter.mail", "templates"),
    autoescape=select_autoescape(),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


class BaseMailer(Mailer):
    """Builds jfa's messages; delivery is left to subclasses."""

    def __init__(
        self,
        settings: EmailSettings,
        formatter: DateFormatter,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize mailer.

        Args:
            settings: Email settings (sender, public URL, transport)
            formatter: Formats dates shown in messages
            clock: Source of "now" for "expires in" texts
        """
        self.settings = settings
        self.formatter = formatter
        self.clock = clock

    def render(self, name: str, subject: str, **values: str) -> Message:
        """Render the plain-text and HTML bodies of template ``name``."""
        return Message(
            subject=subject,
            text=templates.get_template(f"{name}.txt").render(values),
            html=templates.get_template(f"{name}.html").render(values),
        )

    @property
    def sender(self) -> str:
        return formataddr((self.settings.sender_name, self.settings.sender))

    def construct_invite(self, code: InviteCode, invite: Invite) -> Message:
        date, time = self.formatter.pretty(invite.valid_till)
        diff = calendar_diff(invite.valid_till, self.clock())
        return self.render(
            "invite",
            INVITE_SUBJECT,
            invite_link=f"{self.settings.jfa_url.rstrip('/')}/invite/{code}",
            date=date,
            time=time,
            expires_in=f"{diff.days}d {diff.hours}h {diff.minutes}m",
        )

    def construct_created(
        self, code: InviteCode, username: str, address: str, invite: Invite
    ) -> Message:
        return self.render(
            "created",
            CREATED_SUBJECT,
            code=str(code),
            username=username,
            address=address or "n/a",
            time=self.formatter.format(self.clock()),
        )

    def construct_expiry(self, code: InviteCode, invite: Invite) -> Message:
        date, time = self.formatter.pretty(invite.valid_till)
        return self.render(
            "expiry", EXPIRY_SUBJECT, code=str(code), date=date, time=time
        )

    def construct_deleted(self, reason: str) -> Message:
        return self.render("deleted", DELETED_SUBJECT, reason=reason or "n/a")


class SMTPMailer(BaseMailer):
    """Delivers through an SMTP server.

    ``smtplib`` is blocking, so each send runs in a worker thread.
    """

    async def send(self, address: str, message: Message) -> None:
        email = EmailMessage()
        email["From"] = self.sender
        email["To"] = address
        email["Subject"] = message.subject
        email.set_content(message.text)
        if message.html:
            email.add_alternative(message.html, subtype="html")
        try:
            await asyncio.to_thread(self._send_sync, email)
        except (smtplib.SMTPException, OSError) as e:
            raise MailError(f"SMTP delivery to {address} failed: {e}") from e

    def _send_sync(self, email: EmailMessage) -> None:
        settings = self.settings
        if settings.smtp_encryption == "ssl_tls":
            server = smtplib.SMTP_SSL(
                settings.smtp_server,
                settings.smtp_port,
                timeout=settings.timeout_seconds,
                context=ssl.create_default_context(),
            )
        else:
            server = smtplib.SMTP(
                settings.smtp_server, settings.smtp_port, timeout=settings.timeout_seconds
            )
        with server:
            if settings.smtp_encryption == "starttls":
                server.starttls(context=ssl.create_default_context())
            if settings.smtp_username:
                server.login(settings.smtp_username, settings.smtp_password or "")
            server.send_message(email)


class MailgunMailer(BaseMailer):
    """Delivers through the Mailgun HTTP API."""

    async def send(self, address: str, message: Message) -> None:
        data = {
            "from": self.sender,
            "to": address,
            "subject": message.subject,
            "text": message.text,
        }
        if message.html:
            data["html"] = message.html
        try:
            async with httpx.AsyncClient(timeout=self.settings.timeout_seconds) as client:
                response = await client.post(
                    self.settings.mailgun_api_url,
                    data=data,
                    auth=("api", self.settings.mailgun_api_key or ""),
                )
        except httpx.HTTPError as e:
            raise MailError(f"Mailgun request failed: {e}") from e
        if response.status_code != 200:
            raise MailError(
                f"Mailgun responded with {response.status_code}: {response.text}"
            )


class DisabledMailer(BaseMailer):
    """Used when no mail method is configured."""

    async def send(self, address: str, message: Message) -> None:
        logfire.warn("Email is not configured, dropping mail to {address}", address=address)
        raise MailError("No email method configured")


class MockMailer(BaseMailer):
    """Records messages instead of sending them.

    Addresses in ``failing`` raise ``MailError``.
    """

    def __init__(
        self,
        settings: EmailSettings | None = None,
        formatter: DateFormatter | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        settings = settings or EmailSettings()
        super().__init__(settings, formatter or DateFormatter.from_settings(settings), clock)
        self.sent: list[tuple[str, Message]] = []
        self.failing: set[str] = set()

    async def send(self, address: str, message: Message) -> None:
        if address in self.failing:
            raise MailError(f"Mock delivery to {address} failed")
        self.sent.append((address, message))

    def sent_to(self, address: str) -> list[Message]:
        return [message for to, message in self.sent if to == address]


def create_mailer(settings: EmailSettings, formatter: DateFormatter) -> Mailer:
    """Pick the transport named by ``settings.method``."""
    if settings.method == "smtp":
        return SMTPMailer(settings, formatter)
    if settings.method == "mailgun":
        return MailgunMailer(settings, formatter)
    return DisabledMailer(settings, formatter)
