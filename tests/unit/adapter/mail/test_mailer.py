"""Unit tests for message construction and the mail transports."""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import httpx
import pytest

from jfa.adapter.mail import (
    DisabledMailer,
    MailgunMailer,
    MockMailer,
    SMTPMailer,
    create_mailer,
)
from jfa.adapter.mail.mailer import DELETED_SUBJECT, INVITE_SUBJECT
from jfa.config import EmailSettings
from jfa.domain.service import MailError
from jfa.domain.value import Message
from jfa.util.timeutil import DateFormatter
from tests.conftest import NOW, FakeClock, make_invite

MESSAGE = Message(subject="Hello", text="plain", html="<p>html</p>")


class TestConstruction:
    """Tests for message construction."""

    def test_deleted_message_escapes_html_only(self):
        """The reason should be escaped in the HTML body but not the text."""
        # Arrange
        mailer = MockMailer(clock=FakeClock())

        # Act
        message = mailer.construct_deleted("<b>spam</b>")

        # Assert
        assert message.subject == DELETED_SUBJECT
        assert "Reason: <b>spam</b>" in message.text
        assert "<i>&lt;b&gt;spam&lt;/b&gt;</i>" in message.html

    def test_deleted_message_without_reason(self):
        """An empty reason should read "n/a"."""
        message = MockMailer(clock=FakeClock()).construct_deleted("")

        assert "Reason: n/a" in message.text

    def test_expiry_message(self):
        """The expiry notice should name the code in both bodies."""
        mailer = MockMailer(clock=FakeClock())
        invite = make_invite()

        message = mailer.construct_expiry(invite.code, invite)

        assert f"Code {invite.code} expired at" in message.text
        assert f"<b>{invite.code}</b>" in message.html

    def test_invite_message(self):
        """The invite should link to the code and say when it expires."""
        # Arrange
        mailer = MockMailer(
            EmailSettings(jfa_url="https://jfa.example.com/"), clock=FakeClock()
        )
        invite = make_invite(valid_for=timedelta(days=1, hours=2, minutes=3))

        # Act
        message = mailer.construct_invite(invite.code, invite)

        # Assert
        assert message.subject == INVITE_SUBJECT
        assert f"https://jfa.example.com/invite/{invite.code}" in message.text
        assert "1d 2h 3m" in message.text
        assert f'href="https://jfa.example.com/invite/{invite.code}"' in message.html

    def test_created_message_without_address(self):
        """A sign-up without address should read "n/a"."""
        mailer = MockMailer(clock=FakeClock())
        invite = make_invite()

        message = mailer.construct_created(invite.code, "alice", "", invite)

        assert "Address: n/a" in message.text
        assert DateFormatter("%d/%m/%y").format(NOW) in message.text


class TestTransports:
    """Tests for the transports."""

    def test_create_mailer_follows_method(self):
        """The configured method should pick the transport."""
        formatter = DateFormatter("%d/%m/%y")

        assert isinstance(create_mailer(EmailSettings(method="smtp"), formatter), SMTPMailer)
        assert isinstance(
            create_mailer(EmailSettings(method="mailgun"), formatter), MailgunMailer
        )
        assert isinstance(create_mailer(EmailSettings(), formatter), DisabledMailer)

    @pytest.mark.asyncio
    async def test_disabled_mailer_refuses(self):
        """Sending without a configured method should fail."""
        mailer = DisabledMailer(EmailSettings(), DateFormatter("%d/%m/%y"))

        with pytest.raises(MailError):
            await mailer.send("a@example.com", MESSAGE)

    @pytest.mark.asyncio
    async def test_smtp_starttls(self):
        """STARTTLS servers should be upgraded and logged into before sending."""
        # Arrange
        settings = EmailSettings(
            method="smtp",
            smtp_encryption="starttls",
            smtp_port=587,
            smtp_username="jfa",
            smtp_password="pw",
        )
        mailer = SMTPMailer(settings, DateFormatter("%d/%m/%y"))
        server = MagicMock()
        server.__enter__.return_value = server

        # Act
        with patch("jfa.adapter.mail.mailer.smtplib.SMTP", return_value=server):
            await mailer.send("a@example.com", MESSAGE)

        # Assert
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("jfa", "pw")
        sent = server.send_message.call_args.args[0]
        assert sent["To"] == "a@example.com"
        assert sent["Subject"] == "Hello"

    @pytest.mark.asyncio
    async def test_smtp_failure_raises_mail_error(self):
        """A refused connection should become a MailError."""
        mailer = SMTPMailer(EmailSettings(method="smtp"), DateFormatter("%d/%m/%y"))

        with patch(
            "jfa.adapter.mail.mailer.smtplib.SMTP_SSL",
            side_effect=ConnectionRefusedError("refused"),
        ):
            with pytest.raises(MailError):
                await mailer.send("a@example.com", MESSAGE)

    @pytest.mark.asyncio
    async def test_mailgun_request(self):
        """Mailgun should receive the message as form data with the API key."""
        # Arrange
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"message": "Queued"})

        real_client = httpx.AsyncClient
        settings = EmailSettings(method="mailgun", mailgun_api_key="key-123")
        mailer = MailgunMailer(settings, DateFormatter("%d/%m/%y"))

        # Act
        with patch(
            "jfa.adapter.mail.mailer.httpx.AsyncClient",
            side_effect=lambda **kw: real_client(
                transport=httpx.MockTransport(handler), **kw
            ),
        ):
            await mailer.send("a@example.com", MESSAGE)

        # Assert
        [request] = seen
        assert request.headers["Authorization"].startswith("Basic ")
        assert b"to=a%40example.com" in request.content

    @pytest.mark.asyncio
    async def test_mailgun_error_status(self):
        """A rejected Mailgun request should raise MailError."""
        real_client = httpx.AsyncClient
        mailer = MailgunMailer(EmailSettings(method="mailgun"), DateFormatter("%d/%m/%y"))

        with patch(
            "jfa.adapter.mail.mailer.httpx.AsyncClient",
            side_effect=lambda **kw: real_client(
                transport=httpx.MockTransport(lambda r: httpx.Response(401, text="no")),
                **kw,
            ),
        ):
            with pytest.raises(MailError):
                await mailer.send("a@example.com", MESSAGE)
