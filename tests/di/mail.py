"""Mock mail providers for testing."""

from dishka import Scope, provide

from jfa.adapter.mail import MockMailer
from jfa.config import EmailSettings
from jfa.domain.service import Mailer
from jfa.util.di.infrastructure.mail import MailProvider
from jfa.util.timeutil import DateFormatter


class MockMailProvider(MailProvider):
    """Mock mail provider recording messages instead of sending them."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mailer(self, settings: EmailSettings, formatter: DateFormatter) -> Mailer:
        """Provide mock mailer."""
        return MockMailer(settings, formatter)
