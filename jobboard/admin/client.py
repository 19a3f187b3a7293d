"""Async wrapper around the admin list HTTP endpoints."""

from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import quote

import httpx

from jobboard.config.settings import Settings

logger = logging.getLogger(__name__)

ADMIN_EMAIL_HEADER = "X-Admin-Email"


class AdminRequestError(RuntimeError):
    """Raised when an admin endpoint fails or responds with an error status code."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class AdminAPIClient:
    """Talks to one collection endpoint: list, aggregate counts, patch status, delete."""

    def __init__(
        self,
        base_url: str,
        collection_path: str,
        *,
        admin_email: str = "",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if admin_email:
            headers[ADMIN_EMAIL_HEADER] = admin_email
        self._path = "/" + collection_path.strip("/")
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        collection_path: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AdminAPIClient":
        return cls(
            settings.admin_api_base_url,
            collection_path,
            admin_email=settings.admin_api_email,
            timeout=settings.request_timeout,
            transport=transport,
        )

    @property
    def collection_path(self) -> str:
        return self._path

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    def _item_path(self, item_id: str) -> str:
        return f"{self._path}/{quote(str(item_id), safe='')}"

    async def _request_json(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        logger.debug("%s %s params=%s", method, endpoint, params)
        try:
            response = await self._client.request(method, endpoint, params=params, json=json_body)
            response.raise_for_status()
            if not response.content:
                return {}
            payload = response.json()
        except httpx.TimeoutException as exc:
            raise AdminRequestError(f"Timed out waiting for {method} {endpoint}.") from exc
        except httpx.HTTPStatusError as exc:
            raise AdminRequestError(
                f"{method} {endpoint} failed with {exc.response.status_code}: {exc.response.text}",
                status_code=exc.response.status_code,
            ) from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise AdminRequestError(f"{method} {endpoint} could not be sent: {exc}") from exc
        except ValueError as exc:
            raise AdminRequestError(f"{method} {endpoint} returned invalid JSON.") from exc

        if isinstance(payload, list):
            return {"data": payload}
        if not isinstance(payload, dict):
            raise AdminRequestError(f"{method} {endpoint} returned an unexpected payload.")
        return payload

    async def list_items(self, status: str | None = None) -> dict[str, Any]:
        """Fetch the whole collection, optionally narrowed server-side by status."""

        params = {"status": status} if status else None
        return await self._request_json("GET", self._path, params=params)

    async def fetch_counts(self) -> dict[str, Any]:
        return await self._request_json("GET", self._path, params={"aggregate": "counts"})

    async def update_status(self, item_id: str, status: str) -> dict[str, Any]:
        return await self._request_json("PATCH", self._item_path(item_id), json_body={"status": status})

    async def delete_item(self, item_id: str) -> dict[str, Any]:
        return await self._request_json("DELETE", self._item_path(item_id))

    async def ping(self) -> bool:
        """Return ``True`` if the service health endpoint answers ok."""

        payload = await self._request_json("GET", "/health")
        return payload.get("status") == "ok"
