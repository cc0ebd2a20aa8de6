"""Unit tests for ProvisioningService."""

import pytest

from jfa.adapter.jellyfin import MockJellyfinClient
from jfa.config import InviteSettings
from jfa.domain.model.profile import Profile, UserTemplate
from jfa.domain.service import ProvisioningService
from jfa.domain.value import JellyfinUserId
from jfa.persistence.repository.inmemory import InMemoryProfileRepository

POLICY = {"IsAdministrator": False, "EnableDownloads": False}
CONFIGURATION = {"OrderedViews": ["movies"]}
DISPLAYPREFS = {"CustomPrefs": {"homesection0": "resume"}}


@pytest.fixture
def jellyfin():
    client = MockJellyfinClient()
    client.add_user("alice", user_id="u1")
    client.add_user("bob", user_id="u2")
    return client


@pytest.fixture
def provisioning(jellyfin):
    profiles = InMemoryProfileRepository(
        Profile(name="Default", policy=POLICY),
        Profile(
            name="Full",
            policy=POLICY,
            configuration=CONFIGURATION,
            displayprefs=DISPLAYPREFS,
        ),
    )
    return ProvisioningService(jellyfin, profiles, InviteSettings())


class TestResolveProfile:
    """Tests for resolve_profile method."""

    @pytest.mark.asyncio
    async def test_empty_name_means_no_profile(self, provisioning):
        """An empty profile name should apply nothing."""
        assert await provisioning.resolve_profile("") is None

    @pytest.mark.asyncio
    async def test_unknown_name_uses_default(self, provisioning):
        """A profile deleted since the invite was made falls back to the default."""
        profile = await provisioning.resolve_profile("Removed")

        assert profile.name == "Default"


class TestApplyProfile:
    """Tests for apply_profile and apply_template."""

    @pytest.mark.asyncio
    async def test_policy_and_homescreen_in_order(self, provisioning, jellyfin):
        """A complete profile should set policy, configuration then display prefs."""
        # Act
        errors = await provisioning.apply_profile(JellyfinUserId("u1"), "Full")

        # Assert
        assert errors == {}
        assert [c for c in jellyfin.calls if c[1] == "u1"] == [
            ("set_policy", "u1"),
            ("set_configuration", "u1"),
            ("set_display_preferences", "u1"),
        ]
        assert jellyfin.users["u1"]["Policy"] == POLICY
        assert jellyfin.displayprefs["u1"] == DISPLAYPREFS

    @pytest.mark.asyncio
    async def test_partial_homescreen_is_skipped(self, provisioning, jellyfin):
        """Configuration without display prefs should not be applied."""
        template = UserTemplate(policy=POLICY, configuration=CONFIGURATION)

        errors = await provisioning.apply_template(JellyfinUserId("u1"), template)

        assert errors == {}
        assert ("set_configuration", "u1") not in jellyfin.calls

    @pytest.mark.asyncio
    async def test_policy_failure_does_not_stop_homescreen(self, provisioning, jellyfin):
        """A failed policy step should be reported and the rest still applied."""
        # Arrange
        jellyfin.failures["set_policy"] = 500

        # Act
        errors = await provisioning.apply_profile(JellyfinUserId("u1"), "Full")

        # Assert
        assert errors == {"policy": "500: Mock set_policy failure"}
        assert jellyfin.displayprefs["u1"] == DISPLAYPREFS

    @pytest.mark.asyncio
    async def test_failed_configuration_skips_display_prefs(self, provisioning, jellyfin):
        """Display prefs should not be set on top of a failed configuration."""
        # Arrange
        jellyfin.failures["set_configuration"] = 400

        # Act
        errors = await provisioning.apply_profile(JellyfinUserId("u1"), "Full")

        # Assert
        assert errors["homescreen"].startswith("Configuration 400")
        assert ("set_display_preferences", "u1") not in jellyfin.calls


class TestApplySettings:
    """Tests for apply_settings method."""

    @pytest.mark.asyncio
    async def test_every_target_is_attempted(self, provisioning, jellyfin):
        """A failure for one target should not stop the next."""
        # Arrange
        jellyfin.failures["set_display_preferences"] = 500

        # Act
        errors = await provisioning.apply_settings(
            [JellyfinUserId("u1"), JellyfinUserId("u2")],
            POLICY,
            CONFIGURATION,
            DISPLAYPREFS,
            homescreen=True,
        )

        # Assert
        assert errors.policy == {}
        assert set(errors.homescreen) == {"u1", "u2"}
        assert errors.homescreen["u1"].startswith("Displayprefs 500")
        assert jellyfin.users["u2"]["Configuration"] == CONFIGURATION

    @pytest.mark.asyncio
    async def test_policy_only(self, provisioning, jellyfin):
        """Without the homescreen flag only the policy should be set."""
        errors = await provisioning.apply_settings([JellyfinUserId("u1")], POLICY)

        assert errors.policy == {} and errors.homescreen == {}
        assert ("set_configuration", "u1") not in jellyfin.calls
