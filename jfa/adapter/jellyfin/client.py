"""Jellyfin REST client.

Talks to the Jellyfin server with an API key. Results are returned as
``UpstreamResponse`` values; transport errors never escape as exceptions.
"""

import time
import uuid
from typing import Any

import httpx
import logfire

from jfa.config import JellyfinSettings
from jfa.domain.service.upstream import JellyfinClient, UpstreamResponse
from jfa.domain.value import JellyfinUserId

# Display preferences are stored per client; the web UI uses "emby"
DISPLAYPREFS_CLIENT = "emby"


class RealJellyfinClient(JellyfinClient):
    """Jellyfin client over HTTP.

    The user list is cached for ``cache_seconds``; anything that creates or
    deletes accounts calls ``invalidate_cache()`` afterwards.
    """

    def __init__(self, settings: JellyfinSettings) -> None:
        """Initialize Jellyfin client.

        Args:
            settings: Jellyfin connection settings
        """
        self.server = settings.server.rstrip("/")
        self.timeout = settings.timeout_seconds
        self.cache_seconds = settings.cache_seconds
        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "X-Emby-Authorization": (
                f'MediaBrowser Client="{settings.client}", '
                f'Device="{settings.device}", '
                f'DeviceId="{settings.device_id}", '
                f'Version="{settings.version}"'
            ),
            "X-Emby-Token": settings.api_key,
        }
        self._users: list[dict[str, Any]] | None = None
        self._users_expire_at = 0.0

    def invalidate_cache(self) -> None:
        self._users_expire_at = 0.0

    async def new_user(self, username: str, password: str) -> UpstreamResponse:
        response = await self._request(
            "POST", "/Users/New", json={"Name": username, "Password": password}
        )
        if response.ok:
            self.invalidate_cache()
        return response

    async def delete_user(self, user_id: JellyfinUserId) -> UpstreamResponse:
        response = await self._request("DELETE", f"/Users/{user_id}")
        if response.ok:
            self.invalidate_cache()
        return response

    async def get_users(self) -> UpstreamResponse:
        """List accounts, served from cache while it is fresh."""
        if self._users is not None and time.monotonic() < self._users_expire_at:
            return UpstreamResponse(status=200, data=self._users)
        response = await self._request("GET", "/Users")
        if response.ok:
            self._users = response.data or []
            self._users_expire_at = time.monotonic() + self.cache_seconds
        return response

    async def user_by_name(self, username: str) -> UpstreamResponse:
        response = await self.get_users()
        if not response.ok:
            return response
        for user in response.data:
            if user.get("Name") == username:
                return UpstreamResponse(status=response.status, data=user)
        return UpstreamResponse(status=response.status, data=None)

    async def user_by_id(self, user_id: JellyfinUserId) -> UpstreamResponse:
        return await self._request("GET", f"/Users/{user_id}")

    async def set_policy(
        self, user_id: JellyfinUserId, policy: dict[str, Any]
    ) -> UpstreamResponse:
        return await self._request("POST", f"/Users/{user_id}/Policy", json=policy)

    async def set_configuration(
        self, user_id: JellyfinUserId, configuration: dict[str, Any]
    ) -> UpstreamResponse:
        return await self._request(
            "POST", f"/Users/{user_id}/Configuration", json=configuration
        )

    async def get_display_preferences(
        self, user_id: JellyfinUserId
    ) -> UpstreamResponse:
        return await self._request(
            "GET",
            "/DisplayPreferences/usersettings",
            params={"userId": user_id, "client": DISPLAYPREFS_CLIENT},
        )

    async def set_display_preferences(
        self, user_id: JellyfinUserId, displayprefs: dict[str, Any]
    ) -> UpstreamResponse:
        return await self._request(
            "POST",
            "/DisplayPreferences/usersettings",
            params={"userId": user_id, "client": DISPLAYPREFS_CLIENT},
            json=displayprefs,
        )

    async def _request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> UpstreamResponse:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method,
                    f"{self.server}{path}",
                    json=json,
                    params=params,
                    headers=self.headers,
                )
        except httpx.HTTPError as e:
            logfire.error(
                "Jellyfin request failed", method=method, path=path, error=str(e)
            )
            return UpstreamResponse(status=0, error=str(e))

        data = None
        if response.content:
            try:
                data = response.json()
            except ValueError:
                data = response.text
        if response.status_code not in (200, 204):
            logfire.debug(
                "Jellyfin responded with {status}",
                status=response.status_code,
                method=method,
                path=path,
            )
            return UpstreamResponse(
                status=response.status_code, data=data, error=response.text or None
            )
        return UpstreamResponse(status=response.status_code, data=data)


class MockJellyfinClient(JellyfinClient):
    """Mock Jellyfin client for testing.

    Keeps accounts in memory. ``failures`` maps a method name to the status
    it should answer with instead of succeeding.
    """

    def __init__(self) -> None:
        self.users: dict[str, dict[str, Any]] = {}
        self.displayprefs: dict[str, dict[str, Any]] = {}
        self.failures: dict[str, int] = {}
        self.calls: list[tuple[str, str]] = []
        self.cache_invalidations = 0

    def add_user(
        self,
        name: str,
        user_id: str | None = None,
        admin: bool = False,
        last_activity: str | None = None,
    ) -> dict[str, Any]:
        """Create an account directly, as if made on the server."""
        user_id = user_id or uuid.uuid4().hex
        user = {
            "Id": user_id,
            "Name": name,
            "Policy": {"IsAdministrator": admin},
            "Configuration": {},
        }
        if last_activity:
            user["LastActivityDate"] = last_activity
        self.users[user_id] = user
        return user

    def invalidate_cache(self) -> None:
        self.cache_invalidations += 1

    async def new_user(self, username: str, password: str) -> UpstreamResponse:
        self.calls.append(("new_user", username))
        failed = self._failed("new_user")
        if failed:
            return failed
        return UpstreamResponse(status=200, data=self.add_user(username))

    async def delete_user(self, user_id: JellyfinUserId) -> UpstreamResponse:
        self.calls.append(("delete_user", user_id))
        failed = self._failed("delete_user")
        if failed:
            return failed
        if self.users.pop(user_id, None) is None:
            return UpstreamResponse(status=404, error="User not found")
        return UpstreamResponse(status=204)

    async def user_by_name(self, username: str) -> UpstreamResponse:
        failed = self._failed("user_by_name")
        if failed:
            return failed
        for user in self.users.values():
            if user["Name"] == username:
                return UpstreamResponse(status=200, data=user)
        return UpstreamResponse(status=200, data=None)

    async def user_by_id(self, user_id: JellyfinUserId) -> UpstreamResponse:
        failed = self._failed("user_by_id")
        if failed:
            return failed
        user = self.users.get(user_id)
        if user is None:
            return UpstreamResponse(status=404, error="User not found")
        return UpstreamResponse(status=200, data=user)

    async def get_users(self) -> UpstreamResponse:
        failed = self._failed("get_users")
        if failed:
            return failed
        return UpstreamResponse(status=200, data=list(self.users.values()))

    async def set_policy(
        self, user_id: JellyfinUserId, policy: dict[str, Any]
    ) -> UpstreamResponse:
        self.calls.append(("set_policy", user_id))
        failed = self._failed("set_policy")
        if failed:
            return failed
        if user_id in self.users:
            self.users[user_id]["Policy"] = policy
        return UpstreamResponse(status=204)

    async def set_configuration(
        self, user_id: JellyfinUserId, configuration: dict[str, Any]
    ) -> UpstreamResponse:
        self.calls.append(("set_configuration", user_id))
        failed = self._failed("set_configuration")
        if failed:
            return failed
        if user_id in self.users:
            self.users[user_id]["Configuration"] = configuration
        return UpstreamResponse(status=204)

    async def get_display_preferences(
        self, user_id: JellyfinUserId
    ) -> UpstreamResponse:
        failed = self._failed("get_display_preferences")
        if failed:
            return failed
        return UpstreamResponse(status=200, data=self.displayprefs.get(user_id, {}))

    async def set_display_preferences(
        self, user_id: JellyfinUserId, displayprefs: dict[str, Any]
    ) -> UpstreamResponse:
        self.calls.append(("set_display_preferences", user_id))
        failed = self._failed("set_display_preferences")
        if failed:
            return failed
        self.displayprefs[user_id] = displayprefs
        return UpstreamResponse(status=204)

    def _failed(self, method: str) -> UpstreamResponse | None:
        status = self.failures.get(method)
        if status is None:
            return None
        return UpstreamResponse(status=status, error=f"Mock {method} failure")
