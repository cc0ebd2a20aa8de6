"""Unit tests for the Ombi HTTP client."""

import json
from unittest.mock import patch

import httpx
import pytest

from jfa.adapter.ombi import RealOmbiClient
from jfa.adapter.ombi.client import strip_identity
from jfa.config import OmbiSettings


def serve(handler):
    real_client = httpx.AsyncClient

    def factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    return patch("jfa.adapter.ombi.client.httpx.AsyncClient", side_effect=factory)


@pytest.fixture
def client():
    return RealOmbiClient(OmbiSettings(server="http://ombi:5000", api_key="key"))


class TestOmbiClient:
    """Tests for RealOmbiClient."""

    @pytest.mark.asyncio
    async def test_new_user_merges_template(self, client):
        """The template should be sent with the new identity on top."""
        # Arrange
        bodies = []

        def handler(request):
            assert request.headers["ApiKey"] == "key"
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"successful": True})

        # Act
        with serve(handler):
            response = await client.new_user(
                "alice", "pw", "a@example.com", {"claims": ["RequestMovie"]}
            )

        # Assert
        assert response.ok
        assert bodies == [
            {
                "claims": ["RequestMovie"],
                "userName": "alice",
                "password": "pw",
                "emailAddress": "a@example.com",
            }
        ]

    @pytest.mark.asyncio
    async def test_unsuccessful_body_is_an_error(self, client):
        """Ombi's own failure flag should turn a 200 into an error."""
        body = {"successful": False, "errors": ["Username taken", "Weak password"]}

        with serve(lambda request: httpx.Response(200, json=body)):
            response = await client.new_user("alice", "pw", "", {})

        assert not response.ok
        assert response.data == ["Username taken", "Weak password"]
        assert response.error == "Username taken, Weak password"

    @pytest.mark.asyncio
    async def test_template_by_id_strips_identity(self, client):
        """Fetched templates should not carry identity fields."""
        user = {"id": "o1", "userName": "template", "movieRequestLimit": 3}

        with serve(lambda request: httpx.Response(200, json=user)):
            response = await client.template_by_id("o1")

        assert response.data == {"movieRequestLimit": 3}

    def test_strip_identity(self):
        """Every identity field should be removed."""
        user = {
            "id": "o1",
            "userName": "t",
            "alias": "T",
            "emailAddress": "t@example.com",
            "password": "x",
            "lastLoggedIn": None,
            "hasLoggedIn": True,
            "claims": [],
        }

        assert strip_identity(user) == {"claims": []}
