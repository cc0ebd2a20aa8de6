"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from jfa.domain.model.invite import Invite
from jfa.domain.value import (
    InviteCode,
    Limited,
    NotifyPreferences,
    RemainingUses,
    generate_invite_code,
)

# Fixed instant used as "now" by tests that control the clock
NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_invite(
    code: str | None = None,
    created: datetime = NOW,
    valid_for: timedelta = timedelta(days=1),
    uses: RemainingUses | None = None,
    profile: str = "",
    notify: dict[str, NotifyPreferences] | None = None,
) -> Invite:
    """Helper building an invite relative to ``NOW``.

    Args:
        code: Invite code (random when omitted)
        created: Creation instant
        valid_for: Time from ``created`` until expiry
        uses: Use allowance (single use when omitted)
        profile: Profile name
        notify: Notification preferences by address

    Returns:
        Invite entity
    """
    return Invite(
        code=InviteCode(code) if code else generate_invite_code(),
        created=created,
        valid_till=created + valid_for,
        uses=uses or Limited(count=1),
        profile=profile,
        notify=notify or {},
    )


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at ``NOW``."""
    return FakeClock()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests independent of the developer's environment and data."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("STORAGE__DATA_DIR", str(tmp_path / "data"))
