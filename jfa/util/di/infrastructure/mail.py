"""Mail infrastructure providers."""

from dishka import Scope, provide

from jfa.adapter.mail import create_mailer
from jfa.config import EmailSettings
from jfa.domain.service import Mailer
from jfa.util.di.base import ProviderBase
from jfa.util.timeutil import DateFormatter


class MailProvider(ProviderBase):
    """Mail component base."""

    __mock_component__ = "mail"


class ProdMailProvider(MailProvider):
    """Production mail provider; the transport follows ``email.method``."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_mailer(self, settings: EmailSettings, formatter: DateFormatter) -> Mailer:
        """Provide mailer."""
        return create_mailer(settings, formatter)
