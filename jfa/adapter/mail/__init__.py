"""Mail adapter."""

from .mailer import (
    BaseMailer,
    DisabledMailer,
    MailgunMailer,
    MockMailer,
    SMTPMailer,
    create_mailer,
)

__all__ = [
    "BaseMailer",
    "DisabledMailer",
    "MailgunMailer",
    "MockMailer",
    "SMTPMailer",
    "create_mailer",
]
