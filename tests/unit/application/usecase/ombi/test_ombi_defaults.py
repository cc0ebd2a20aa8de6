"""Unit tests for the Ombi use cases."""

import pytest

from jfa.application.usecase.ombi import (
    GetOmbiUsersUseCase,
    SetOmbiDefaultsRequest,
    SetOmbiDefaultsUseCase,
)
from jfa.domain.error import UpstreamError
from jfa.domain.repository import TemplateRepository
from jfa.domain.service import OmbiClient
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestOmbiUseCases:
    """Tests for GetOmbiUsersUseCase and SetOmbiDefaultsUseCase."""

    @pytest.mark.asyncio
    async def test_list_users(self, unit_env):
        """Ombi users should be listed by id and name."""
        use_case = await unit_env.get(GetOmbiUsersUseCase)
        ombi = await unit_env.get(OmbiClient)
        user = ombi.add_user("template")

        response = await use_case.execute()

        assert [(u.id, u.name) for u in response.users] == [(user["id"], "template")]

    @pytest.mark.asyncio
    async def test_set_defaults_strips_identity(self, unit_env):
        """The stored template should not carry the source user's identity."""
        # Arrange
        use_case = await unit_env.get(SetOmbiDefaultsUseCase)
        ombi = await unit_env.get(OmbiClient)
        templates = await unit_env.get(TemplateRepository)
        user = ombi.add_user(
            "template", emailAddress="t@example.com", movieRequestLimit=5
        )

        # Act
        await use_case.execute(SetOmbiDefaultsRequest(id=user["id"], name="template"))

        # Assert
        assert await templates.load_ombi_template() == {"movieRequestLimit": 5}

    @pytest.mark.asyncio
    async def test_unknown_user(self, unit_env):
        """An unknown Ombi user should raise UpstreamError."""
        use_case = await unit_env.get(SetOmbiDefaultsUseCase)

        with pytest.raises(UpstreamError):
            await use_case.execute(SetOmbiDefaultsRequest(id="ghost"))
