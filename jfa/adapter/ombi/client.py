"""Ombi REST client."""

import uuid
from typing import Any

import httpx
import logfire

from jfa.config import OmbiSettings
from jfa.domain.service.upstream import OmbiClient, UpstreamResponse

# Identity fields of the template user that must not leak into new accounts
TEMPLATE_IDENTITY_FIELDS = (
    "id",
    "userName",
    "alias",
    "emailAddress",
    "password",
    "lastLoggedIn",
    "hasLoggedIn",
)


def strip_identity(user: dict[str, Any]) -> dict[str, Any]:
    """Turn an Ombi user record into a reusable template."""
    return {k: v for k, v in user.items() if k not in TEMPLATE_IDENTITY_FIELDS}


class RealOmbiClient(OmbiClient):
    """Ombi client over HTTP, authenticated with an API key."""

    def __init__(self, settings: OmbiSettings) -> None:
        """Initialize Ombi client.

        Args:
            settings: Ombi connection settings
        """
        self.server = settings.server.rstrip("/")
        self.timeout = settings.timeout_seconds
        self.headers = {
            "Accept": "application/json",
            "ApiKey": settings.api_key,
        }

    async def new_user(
        self, username: str, password: str, email: str, template: dict[str, Any]
    ) -> UpstreamResponse:
        """Create an Ombi user from the stored template.

        Ombi answers 200 even for some rejected requests; a body reporting
        ``successful: false`` is turned into an error carrying Ombi's
        messages in ``data``.
        """
        user = {
            **template,
            "userName": username,
            "password": password,
            "emailAddress": email,
        }
        response = await self._request("POST", "/api/v1/Identity", json=user)
        if response.status == 200 and isinstance(response.data, dict):
            if not response.data.get("successful", True):
                errors = response.data.get("errors") or []
                return UpstreamResponse(
                    status=response.status, data=errors, error=", ".join(errors)
                )
        return response

    async def get_users(self) -> UpstreamResponse:
        return await self._request("GET", "/api/v1/Identity/Users")

    async def template_by_id(self, user_id: str) -> UpstreamResponse:
        response = await self._request("GET", f"/api/v1/Identity/User/{user_id}")
        if response.ok and isinstance(response.data, dict):
            return UpstreamResponse(
                status=response.status, data=strip_identity(response.data)
            )
        return response

    async def _request(self, method: str, path: str, json: Any = None) -> UpstreamResponse:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method, f"{self.server}{path}", json=json, headers=self.headers
                )
        except httpx.HTTPError as e:
            logfire.error("Ombi request failed", method=method, path=path, error=str(e))
            return UpstreamResponse(status=0, error=str(e))

        data = None
        if response.content:
            try:
                data = response.json()
            except ValueError:
                data = response.text
        if response.status_code != 200:
            errors = data.get("errors") if isinstance(data, dict) else None
            return UpstreamResponse(
                status=response.status_code,
                data=errors or [],
                error=response.text or None,
            )
        return UpstreamResponse(status=200, data=data)


class MockOmbiClient(OmbiClient):
    """Mock Ombi client for testing."""

    def __init__(self) -> None:
        self.users: dict[str, dict[str, Any]] = {}
        self.fail_new_user = False

    def add_user(self, name: str, **fields: Any) -> dict[str, Any]:
        user = {"id": uuid.uuid4().hex, "userName": name, **fields}
        self.users[user["id"]] = user
        return user

    async def new_user(
        self, username: str, password: str, email: str, template: dict[str, Any]
    ) -> UpstreamResponse:
        if self.fail_new_user:
            errors = ["Mock Ombi failure"]
            return UpstreamResponse(status=400, data=errors, error=errors[0])
        self.add_user(username, emailAddress=email, **template)
        return UpstreamResponse(status=200, data={"successful": True})

    async def get_users(self) -> UpstreamResponse:
        return UpstreamResponse(status=200, data=list(self.users.values()))

    async def template_by_id(self, user_id: str) -> UpstreamResponse:
        user = self.users.get(user_id)
        if user is None:
            return UpstreamResponse(status=404, error="User not found")
        return UpstreamResponse(status=200, data=strip_identity(user))
