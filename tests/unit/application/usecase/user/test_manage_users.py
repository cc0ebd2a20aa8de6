"""Unit tests for listing, deleting and addressing accounts."""

import pytest

from jfa.application.usecase.user import (
    DeleteUsersRequest,
    DeleteUsersUseCase,
    GetUsersUseCase,
    ModifyEmailsRequest,
    ModifyEmailsUseCase,
)
from jfa.domain.error import PartialBatchFailure, UpstreamError
from jfa.domain.repository import EmailRepository
from jfa.domain.service import JellyfinClient
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestGetUsers:
    """Tests for GetUsersUseCase."""

    @pytest.mark.asyncio
    async def test_lists_users(self, unit_env):
        """Users without activity should show "n/a"."""
        # Arrange
        use_case = await unit_env.get(GetUsersUseCase)
        jellyfin = await unit_env.get(JellyfinClient)
        jellyfin.add_user("alice", user_id="u1", admin=True)
        jellyfin.add_user("bob", user_id="u2", last_activity="2024-03-15T12:00:00.0000000Z")

        # Act
        response = await use_case.execute()

        # Assert
        by_id = {user.id: user for user in response.users}
        assert by_id["u1"].admin is True
        assert by_id["u1"].last_active == "n/a"
        assert by_id["u2"].last_active != "n/a"

    @pytest.mark.asyncio
    async def test_unreachable_jellyfin(self, unit_env):
        """Jellyfin failing should surface as UpstreamError."""
        use_case = await unit_env.get(GetUsersUseCase)
        jellyfin = await unit_env.get(JellyfinClient)
        jellyfin.failures["get_users"] = 0

        with pytest.raises(UpstreamError):
            await use_case.execute()


class TestDeleteUsers:
    """Tests for DeleteUsersUseCase."""

    @pytest.mark.asyncio
    async def test_all_deleted(self, unit_env):
        """Deleting existing accounts should succeed."""
        use_case = await unit_env.get(DeleteUsersUseCase)
        jellyfin = await unit_env.get(JellyfinClient)
        jellyfin.add_user("alice", user_id="u1")

        response = await use_case.execute(DeleteUsersRequest(users=["u1"]))

        assert response.success
        assert jellyfin.users == {}

    @pytest.mark.asyncio
    async def test_partial_failure(self, unit_env):
        """Failures should be collected while the rest are still deleted."""
        # Arrange
        use_case = await unit_env.get(DeleteUsersUseCase)
        jellyfin = await unit_env.get(JellyfinClient)
        jellyfin.add_user("alice", user_id="u1")

        # Act
        with pytest.raises(PartialBatchFailure) as exc_info:
            await use_case.execute(DeleteUsersRequest(users=["u1", "ghost"]))

        # Assert
        assert set(exc_info.value.errors) == {"ghost"}
        assert not exc_info.value.all_failed
        assert jellyfin.users == {}


class TestModifyEmails:
    """Tests for ModifyEmailsUseCase."""

    @pytest.mark.asyncio
    async def test_updates_known_users(self, unit_env):
        """Addresses of existing accounts should be stored."""
        # Arrange
        use_case = await unit_env.get(ModifyEmailsUseCase)
        jellyfin = await unit_env.get(JellyfinClient)
        emails = await unit_env.get(EmailRepository)
        jellyfin.add_user("alice", user_id="u1")

        # Act
        response = await use_case.execute(
            ModifyEmailsRequest(emails={"u1": "alice@example.com", "ghost": "x@y.z"})
        )

        # Assert
        assert response.updated == 1
        assert emails.all() == {"u1": "alice@example.com"}
