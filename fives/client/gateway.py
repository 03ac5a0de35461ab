"""
gateway.py — Persistence Gateway: the client's only way to reach stored data.

Wraps an httpx.AsyncClient, stamps every request with the X-Session-Id
header, and turns the API's {"error": {...}} envelope into GatewayError.
No retries and no backoff: a failed request fails once and the caller decides.
"""
import logging
from typing import Any, Optional

import httpx

from fives.config import settings

logger = logging.getLogger(__name__)

SESSION_HEADER = "X-Session-Id"


class GatewayError(Exception):
    """
    A request that did not produce a 2xx response.
    status_code is None for transport failures (no response at all).
    """

    def __init__(self, status_code: Optional[int], code: str, message: str):
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(f"{code} ({status_code}): {message}")


class PersistenceGateway:
    """
    Usage:
        async with PersistenceGateway(session_id) as gateway:
            progress = await gateway.get("/api/progress")

    Pass `client` to reuse an existing httpx.AsyncClient (tests pass one
    bound to the ASGI app); the gateway then leaves closing it to the caller.
    """

    def __init__(
        self,
        session_id: str,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.session_id = session_id
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout or settings.api_timeout,
        )

    async def __aenter__(self) -> "PersistenceGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        params = {key: value for key, value in (params or {}).items() if value is not None}
        try:
            response = await self._client.request(
                method,
                path,
                params=params or None,
                json=json,
                headers={SESSION_HEADER: self.session_id},
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise GatewayError(None, "TRANSPORT_ERROR", str(exc)) from exc

        if response.status_code >= 400:
            code, message = _parse_error(response)
            logger.info("%s %s -> %d %s", method, path, response.status_code, code)
            raise GatewayError(response.status_code, code, message)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Optional[Any] = None) -> Any:
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, json: Optional[Any] = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def put(self, path: str, json: Optional[Any] = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)


def _parse_error(response: httpx.Response) -> tuple[str, str]:
    try:
        error = response.json()["error"]
        return error["code"], error["message"]
    except (ValueError, KeyError, TypeError):
        return f"HTTP_{response.status_code}", response.text[:200]
