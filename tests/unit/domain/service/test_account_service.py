"""Unit tests for AccountService."""

import pytest

from jfa.adapter.jellyfin import MockJellyfinClient
from jfa.adapter.mail import MockMailer
from jfa.adapter.ombi import MockOmbiClient
from jfa.config import NotificationSettings, OmbiSettings, Settings, UISettings
from jfa.domain.error import UpstreamError, ValidationError
from jfa.domain.service import AccountService, NotificationDispatcher
from jfa.domain.value import JellyfinUserId
from jfa.persistence.repository.inmemory import (
    InMemoryEmailRepository,
    InMemoryTemplateRepository,
)


@pytest.fixture
def jellyfin():
    return MockJellyfinClient()


@pytest.fixture
def ombi():
    return MockOmbiClient()


@pytest.fixture
def emails():
    return InMemoryEmailRepository()


@pytest.fixture
def templates():
    return InMemoryTemplateRepository()


@pytest.fixture
def mailer(clock):
    return MockMailer(clock=clock)


@pytest.fixture
def account_service(jellyfin, ombi, emails, templates, mailer):
    dispatcher = NotificationDispatcher(mailer, NotificationSettings(enabled=True))
    settings = Settings(ombi=OmbiSettings(enabled=True))
    return AccountService(jellyfin, ombi, emails, templates, dispatcher, settings)


class TestCreate:
    """Tests for create method."""

    @pytest.mark.asyncio
    async def test_create_returns_new_id(self, account_service, jellyfin):
        """A new account should be created and the user cache dropped."""
        # Act
        user_id = await account_service.create("alice", "Password1")

        # Assert
        assert jellyfin.users[user_id]["Name"] == "alice"
        assert jellyfin.cache_invalidations == 1

    @pytest.mark.asyncio
    async def test_duplicate_name_raises(self, account_service, jellyfin):
        """An existing name should be rejected before calling Jellyfin."""
        jellyfin.add_user("alice")

        with pytest.raises(ValidationError, match="already exists"):
            await account_service.create("alice", "Password1")
        assert ("new_user", "alice") not in jellyfin.calls

    @pytest.mark.asyncio
    async def test_refused_creation_raises(self, account_service, jellyfin):
        """A Jellyfin error should surface as UpstreamError."""
        jellyfin.failures["new_user"] = 400

        with pytest.raises(UpstreamError) as exc_info:
            await account_service.create("alice", "Password1")
        assert exc_info.value.status == 400


class TestEmails:
    """Tests for the email directory operations."""

    @pytest.mark.asyncio
    async def test_set_emails_ignores_unknown_users(self, account_service, jellyfin, emails):
        """Only accounts Jellyfin knows should be stored."""
        # Arrange
        jellyfin.add_user("alice", user_id="u1")

        # Act
        count = await account_service.set_emails(
            {"u1": "alice@example.com", "ghost": "ghost@example.com"}
        )

        # Assert
        assert count == 1
        assert emails.all() == {"u1": "alice@example.com"}

    @pytest.mark.asyncio
    async def test_set_emails_needs_user_list(self, account_service, jellyfin):
        """If the account list is unavailable nothing should be stored."""
        jellyfin.failures["get_users"] = 500

        with pytest.raises(UpstreamError):
            await account_service.set_emails({"u1": "a@example.com"})

    @pytest.mark.asyncio
    async def test_notification_address_from_settings(self, account_service):
        """Without Jellyfin logins the configured admin address is used."""
        account_service.settings = Settings(ui=UISettings(email="admin@example.com"))

        assert await account_service.notification_address("u1") == "admin@example.com"

    @pytest.mark.asyncio
    async def test_notification_address_from_directory(self, account_service, emails):
        """With Jellyfin logins the caller's stored address is used."""
        # Arrange
        account_service.settings = Settings(ui=UISettings(jellyfin_login=True))
        emails.set(JellyfinUserId("u1"), "admin@example.com")

        # Act & Assert
        assert await account_service.notification_address("u1") == "admin@example.com"
        assert await account_service.notification_address(None) is None


class TestOmbi:
    """Tests for the Ombi mirror."""

    @pytest.mark.asyncio
    async def test_no_template_no_user(self, account_service, ombi):
        """Without a stored template no Ombi user should be created."""
        created = await account_service.create_ombi_user("alice", "pw", "a@example.com")

        assert created is False
        assert ombi.users == {}

    @pytest.mark.asyncio
    async def test_user_from_template(self, account_service, ombi, templates):
        """The stored template should be used for the new Ombi user."""
        # Arrange
        template_user = ombi.add_user("template", claims=["RequestMovie"])
        await account_service.store_ombi_template(template_user["id"])

        # Act
        created = await account_service.create_ombi_user("alice", "pw", "a@example.com")

        # Assert
        assert created is True
        assert templates.ombi_template == {"claims": ["RequestMovie"]}
        [alice] = [u for u in ombi.users.values() if u["userName"] == "alice"]
        assert alice["claims"] == ["RequestMovie"]

    @pytest.mark.asyncio
    async def test_ombi_failure_is_not_raised(self, account_service, ombi, templates):
        """Ombi refusing the user should only be reported."""
        templates.ombi_template = {"claims": []}
        ombi.fail_new_user = True

        assert await account_service.create_ombi_user("alice", "pw", "a@example.com") is False

    @pytest.mark.asyncio
    async def test_list_ombi_users(self, account_service, ombi):
        """Ombi users should be listed as id and name."""
        user = ombi.add_user("bob")

        assert await account_service.list_ombi_users() == [{"id": user["id"], "name": "bob"}]


class TestDeleteUsers:
    """Tests for delete_users method."""

    @pytest.mark.asyncio
    async def test_partial_failure_and_notices(
        self, account_service, jellyfin, emails, mailer
    ):
        """Unknown users should be reported and known ones notified."""
        # Arrange
        jellyfin.add_user("alice", user_id="u1")
        emails.set(JellyfinUserId("u1"), "alice@example.com")

        # Act
        errors = await account_service.delete_users(
            ["u1", "ghost"], notify=True, reason="Cleanup"
        )
        await account_service.dispatcher.drain()

        # Assert
        assert list(errors) == ["ghost"]
        assert errors["ghost"].startswith("404")
        assert "u1" not in jellyfin.users
        [message] = mailer.sent_to("alice@example.com")
        assert "Cleanup" in message.text

    @pytest.mark.asyncio
    async def test_list_users_with_emails(self, account_service, jellyfin, emails):
        """Accounts should be listed with their stored address."""
        # Arrange
        jellyfin.add_user("alice", user_id="u1", admin=True)
        jellyfin.add_user("bob", user_id="u2")
        emails.set(JellyfinUserId("u1"), "alice@example.com")

        # Act
        users = await account_service.list_users()

        # Assert
        by_name = {user.name: (user, email) for user, email in users}
        assert by_name["alice"][0].is_admin
        assert by_name["alice"][1] == "alice@example.com"
        assert by_name["bob"][1] is None
