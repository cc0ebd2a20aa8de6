"""Unit tests for the account creation use cases."""

import pytest

from jfa.application.usecase.user import (
    NewUserAdminRequest,
    NewUserAdminUseCase,
    NewUserRequest,
    NewUserUseCase,
)
from jfa.domain.error import NotFoundError, ValidationError
from jfa.domain.model.profile import Profile
from jfa.domain.repository import (
    EmailRepository,
    InviteRepository,
    ProfileRepository,
    TemplateRepository,
)
from jfa.domain.service import (
    JellyfinClient,
    Mailer,
    NotificationDispatcher,
    OmbiClient,
)
from jfa.domain.value import Limited, NotifyPreferences
from jfa.util.timeutil import utc_now
from tests.conftest import make_invite
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

KIDS_POLICY = {"IsAdministrator": False, "EnableContentDeletion": False}


def request_for(code, password="Password1", **kwargs):
    return NewUserRequest(
        username=kwargs.pop("username", "alice"),
        password=password,
        email=kwargs.pop("email", "alice@example.com"),
        code=str(code),
    )


class TestNewUser:
    """Tests for NewUserUseCase."""

    @pytest.mark.asyncio
    async def test_sign_up_uses_invite_and_applies_profile(self, unit_env):
        """A valid sign-up should create the account and apply the profile."""
        # Arrange
        use_case = await unit_env.get(NewUserUseCase)
        invite_repo = await unit_env.get(InviteRepository)
        profile_repo = await unit_env.get(ProfileRepository)
        jellyfin = await unit_env.get(JellyfinClient)
        profile_repo.add(Profile(name="Kids", policy=KIDS_POLICY))
        invite = make_invite(created=utc_now(), profile="Kids")
        invite_repo.seed(invite)

        # Act
        response = await use_case.execute(request_for(invite.code))

        # Assert
        assert response.success
        assert response.provisioning_errors == {}
        assert jellyfin.users[response.user_id]["Name"] == "alice"
        assert jellyfin.users[response.user_id]["Policy"] == KIDS_POLICY
        assert invite_repo.get(invite.code) is None

    @pytest.mark.asyncio
    async def test_invalid_code_raises(self, unit_env):
        """An unknown code should be rejected before anything is created."""
        use_case = await unit_env.get(NewUserUseCase)
        jellyfin = await unit_env.get(JellyfinClient)

        with pytest.raises(NotFoundError):
            await use_case.execute(request_for("unknownCode"))
        assert jellyfin.users == {}

    @pytest.mark.asyncio
    async def test_weak_password_reports_criteria(self, unit_env):
        """A weak password should fail without using the invite."""
        # Arrange
        use_case = await unit_env.get(NewUserUseCase)
        invite_repo = await unit_env.get(InviteRepository)
        jellyfin = await unit_env.get(JellyfinClient)
        invite = make_invite(created=utc_now())
        invite_repo.seed(invite)

        # Act
        response = await use_case.execute(request_for(invite.code, password="short"))

        # Assert
        assert response.success is False
        assert response.validation == {
            "characters": False,
            "uppercase characters": False,
            "numbers": False,
        }
        assert jellyfin.users == {}
        assert invite_repo.get(invite.code) == invite

    @pytest.mark.asyncio
    async def test_taken_username_keeps_invite(self, unit_env):
        """A duplicate username should leave the invite unused."""
        # Arrange
        use_case = await unit_env.get(NewUserUseCase)
        invite_repo = await unit_env.get(InviteRepository)
        jellyfin = await unit_env.get(JellyfinClient)
        jellyfin.add_user("alice")
        invite = make_invite(created=utc_now(), uses=Limited(count=2))
        invite_repo.seed(invite)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(request_for(invite.code))
        assert invite_repo.get(invite.code) == invite

    @pytest.mark.asyncio
    async def test_address_stored_when_password_resets_enabled(self, unit_env, monkeypatch):
        """The sign-up address should be kept for password resets."""
        # Arrange
        monkeypatch.setenv("PASSWORD_RESETS__ENABLED", "true")
        use_case = await unit_env.get(NewUserUseCase)
        invite_repo = await unit_env.get(InviteRepository)
        emails = await unit_env.get(EmailRepository)
        invite = make_invite(created=utc_now())
        invite_repo.seed(invite)

        # Act
        response = await use_case.execute(request_for(invite.code))

        # Assert
        assert emails.get(response.user_id) == "alice@example.com"

    @pytest.mark.asyncio
    async def test_creation_notice_sent(self, unit_env, monkeypatch):
        """Creation subscribers should hear about the new account."""
        # Arrange
        monkeypatch.setenv("NOTIFICATIONS__ENABLED", "true")
        use_case = await unit_env.get(NewUserUseCase)
        invite_repo = await unit_env.get(InviteRepository)
        mailer = await unit_env.get(Mailer)
        dispatcher = await unit_env.get(NotificationDispatcher)
        invite = make_invite(
            created=utc_now(),
            notify={"admin@example.com": NotifyPreferences(notify_creation=True)},
        )
        invite_repo.seed(invite)

        # Act
        await use_case.execute(request_for(invite.code))
        await dispatcher.drain()

        # Assert
        [message] = mailer.sent_to("admin@example.com")
        assert "alice" in message.text

    @pytest.mark.asyncio
    async def test_ombi_user_mirrored(self, unit_env, monkeypatch):
        """With Ombi enabled and a template stored an Ombi user is made."""
        # Arrange
        monkeypatch.setenv("OMBI__ENABLED", "true")
        use_case = await unit_env.get(NewUserUseCase)
        invite_repo = await unit_env.get(InviteRepository)
        templates = await unit_env.get(TemplateRepository)
        ombi = await unit_env.get(OmbiClient)
        await templates.store_ombi_template({"claims": ["RequestTv"]})
        invite = make_invite(created=utc_now())
        invite_repo.seed(invite)

        # Act
        await use_case.execute(request_for(invite.code))

        # Assert
        [user] = ombi.users.values()
        assert user["userName"] == "alice"
        assert user["emailAddress"] == "alice@example.com"


class TestNewUserAdmin:
    """Tests for NewUserAdminUseCase."""

    @pytest.mark.asyncio
    async def test_applies_global_template(self, unit_env):
        """Admin-created accounts should get the stored template."""
        # Arrange
        use_case = await unit_env.get(NewUserAdminUseCase)
        templates = await unit_env.get(TemplateRepository)
        jellyfin = await unit_env.get(JellyfinClient)
        await templates.store_policy(KIDS_POLICY)

        # Act
        response = await use_case.execute(
            NewUserAdminRequest(username="bob", password="x")
        )

        # Assert
        assert jellyfin.users[response.user_id]["Policy"] == KIDS_POLICY
        assert ("set_configuration", response.user_id) not in jellyfin.calls
