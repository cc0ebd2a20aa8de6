"""Password requirement checks for new accounts."""

from jfa.config import PasswordValidationSettings

from .base import Service


class PasswordValidator(Service):
    """Checks a password against the configured minimum counts.

    Criteria with a minimum of zero are not reported.
    """

    CRITERIA = (
        "characters",
        "uppercase characters",
        "lowercase characters",
        "numbers",
        "special characters",
    )

    def __init__(self, settings: PasswordValidationSettings) -> None:
        if settings.enabled:
            minimums = (
                settings.min_length,
                settings.upper,
                settings.lower,
                settings.number,
                settings.special,
            )
        else:
            minimums = (0, 0, 0, 0, 0)
        self.requirements = {
            criterion: minimum
            for criterion, minimum in zip(self.CRITERIA, minimums)
            if minimum > 0
        }

    def validate(self, password: str) -> dict[str, bool]:
        """Return whether each active criterion is met."""
        counts = {
            "characters": len(password),
            "uppercase characters": sum(c.isupper() for c in password),
            "lowercase characters": sum(c.islower() for c in password),
            "numbers": sum(c.isdigit() for c in password),
            "special characters": sum(not c.isalnum() for c in password),
        }
        return {
            criterion: counts[criterion] >= minimum
            for criterion, minimum in self.requirements.items()
        }

    def is_valid(self, password: str) -> bool:
        return all(self.validate(password).values())
