import logging
from typing import Any

import httpx

from nikah_console.config import get_console_settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed API call. ``status`` is None when the request never got a response."""

    def __init__(self, status: int | None, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


class ApiClient:
    """Thin JSON client for the NikahFirst API with bearer auth."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, transport: httpx.AsyncBaseTransport | None = None) -> "ApiClient":
        s = get_console_settings()
        return cls(s.api_base_url, token=s.api_token, timeout=s.request_timeout, transport=transport)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> dict[str, Any]:
        params = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                r = await client.request(method, path, params=params or None, json=json, headers=self._headers())
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(None, "Network error. Please check your connection and try again.") from e

        try:
            body = r.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"data": body}
        if r.is_error:
            message = body.get("error") or f"Request failed ({r.status_code})"
            logger.warning("%s %s -> %s: %s", method, path, r.status_code, message)
            raise ApiError(r.status_code, message)
        return body

    async def get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self.request("POST", path, params=params, json=json)

    async def patch(self, path: str, json: Any = None) -> dict[str, Any]:
        return await self.request("PATCH", path, json=json)

    async def put(self, path: str, json: Any = None) -> dict[str, Any]:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self.request("DELETE", path, params=params)
