"""Unit tests for PasswordValidator."""

from jfa.config import PasswordValidationSettings
from jfa.domain.service import PasswordValidator


class TestPasswordValidator:
    """Tests for validate and is_valid."""

    def test_only_active_criteria_are_reported(self):
        """Criteria with a zero minimum should not appear."""
        validator = PasswordValidator(
            PasswordValidationSettings(min_length=8, upper=1, lower=0, number=1, special=0)
        )

        result = validator.validate("Password1")

        assert result == {
            "characters": True,
            "uppercase characters": True,
            "numbers": True,
        }

    def test_failing_criteria(self):
        """Each unmet criterion should be False."""
        # Arrange
        validator = PasswordValidator(
            PasswordValidationSettings(min_length=10, upper=2, lower=1, number=1, special=1)
        )

        # Act
        result = validator.validate("Abc!")

        # Assert
        assert result == {
            "characters": False,
            "uppercase characters": False,
            "lowercase characters": True,
            "numbers": False,
            "special characters": True,
        }
        assert not validator.is_valid("Abc!")

    def test_spaces_count_as_special(self):
        """Anything that is not a letter or digit should be special."""
        validator = PasswordValidator(
            PasswordValidationSettings(min_length=0, upper=0, number=0, special=2)
        )

        assert validator.validate("a b-c") == {"special characters": True}

    def test_disabled_accepts_anything(self):
        """With validation disabled every password should pass."""
        validator = PasswordValidator(PasswordValidationSettings(enabled=False))

        assert validator.validate("") == {}
        assert validator.is_valid("")
