"""Portfolio API Client — async gateway to the blog and contact endpoints.

Invariants:
    - Every call bounded by the client timeout (default 10s)
    - Reads and create_post retry 5xx answers with doubling backoff (default 2 retries);
      mutations that are not idempotent (contact submission, edit, delete, clear)
      never retry
    - Non-2xx answers raise ApiError(status, message, errors); transport failures
      raise ApiTimeoutError / ApiConnectionError
    - The admin key, when configured, is sent only on admin operations

Design Decisions:
    - One httpx.AsyncClient per gateway instance (connection reuse); used as an
      async context manager
    - create_post retries because the store rejects duplicate slugs: a retry after
      a lost success answer ends in 409, never in a duplicate post
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from portfolio.client.errors import ApiConnectionError, ApiError, ApiTimeoutError
from portfolio.client.retry import with_retry

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001/api"
ADMIN_HEADER = "X-Admin-Key"


def _error_from_response(response: httpx.Response) -> ApiError:
    try:
        data = response.json()
    except ValueError:
        data = None
    message = data.get("message") if isinstance(data, dict) else None
    errors = data.get("errors") if isinstance(data, dict) else None
    return ApiError(
        response.status_code,
        message or f"HTTP {response.status_code}: {response.reason_phrase}",
        errors if isinstance(errors, list) else None,
    )


class PortfolioApiClient:
    """Typed async calls mirroring the blog and contact service operations."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        admin_key: str | None = None,
        timeout: float = 10.0,
        retries: int = 2,
        retry_delay: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.admin_key = admin_key
        self.retries = retries
        self.retry_delay = retry_delay
        self._sleep = sleep
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, transport=transport,
        )

    async def __aenter__(self) -> "PortfolioApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ─── Blog ────────────────────────────────────────────────────

    async def get_posts(self, page: int = 1, limit: int = 10) -> dict:
        return await self._retrying(
            "GET", "/blog", params={"page": page, "limit": limit},
        )

    async def get_post(self, slug: str) -> dict:
        return await self._retrying("GET", f"/blog/{slug}")

    async def get_tags(self) -> list[str]:
        return await self._retrying("GET", "/blog/tags/all")

    async def get_posts_by_tag(
        self, tag: str, page: int = 1, limit: int = 10,
    ) -> dict:
        return await self._retrying(
            "GET", f"/blog/tag/{tag}", params={"page": page, "limit": limit},
        )

    async def create_post(self, post: dict) -> dict:
        return await self._retrying("POST", "/blog", json=post, admin=True)

    async def update_post(self, post_id: str, changes: dict) -> dict:
        return await self._request(
            "PATCH", f"/blog/{post_id}", json=changes, admin=True,
        )

    async def delete_post(self, post_id: str) -> dict:
        return await self._request("DELETE", f"/blog/{post_id}", admin=True)

    async def clear_posts(self) -> dict:
        return await self._request("DELETE", "/blog/clear/all", admin=True)

    # ─── Contact ─────────────────────────────────────────────────

    async def send_message(self, contact: dict) -> dict:
        return await self._request("POST", "/contact", json=contact)

    async def get_contacts(self, page: int = 1, limit: int = 10) -> dict:
        return await self._retrying(
            "GET", "/contact", params={"page": page, "limit": limit}, admin=True,
        )

    # ─── Transport ───────────────────────────────────────────────

    async def _retrying(self, method: str, path: str, **kwargs) -> Any:
        return await with_retry(
            lambda: self._request(method, path, **kwargs),
            retries=self.retries,
            delay=self.retry_delay,
            sleep=self._sleep,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: Any = None,
        admin: bool = False,
    ) -> Any:
        headers = {}
        if admin and self.admin_key:
            headers[ADMIN_HEADER] = self.admin_key
        try:
            response = await self._client.request(
                method, path, params=params, json=json, headers=headers,
            )
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {path} timed out")
            raise ApiTimeoutError() from e
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiConnectionError() from e
        if not response.is_success:
            raise _error_from_response(response)
        return response.json()
