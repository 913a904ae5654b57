# src/asana_tasks/http/dispatcher.py

"""
httpx-backed Dispatcher.

Handles:
- bearer-token auth headers,
- the {"data": ...} envelope on requests and responses,
- transparent pagination for collection endpoints (next_page.offset),
- mapping non-2xx responses to ApiError subclasses,
- rejecting 2xx bodies that are not a JSON {"data": ...} object (only an empty body is ok),
- retrying 429 responses after Retry-After (nothing else is retried).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from ..config import DEFAULT_BASE_URL, Settings
from ..core.models import Payload, Record, Request, Verb
from ..errors import ApiError, ConfigurationError, RateLimitEnforcedError, error_for_status

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 1.0


def _clean_params(params: Payload | None) -> dict[str, Any]:
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None}


def _retry_after(response: httpx.Response) -> float:
    raw = response.headers.get("Retry-After")
    if raw is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    try:
        return max(0.0, float(raw))
    except ValueError:
        return DEFAULT_RETRY_AFTER_SECONDS


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _malformed(response: httpx.Response, detail: str) -> ApiError:
    return ApiError(f"Malformed response: {detail}", status_code=response.status_code, body=response.text)


def _success_body(response: httpx.Response) -> dict[str, Any] | None:
    """
    Decode a 2xx body. Only an empty body (e.g. 204) yields None; anything that is
    not a JSON object with a "data" key raises instead of passing as success.
    """
    if not response.content:
        return None
    try:
        body = response.json()
    except ValueError:
        raise _malformed(response, "body is not JSON") from None
    if not isinstance(body, dict) or "data" not in body:
        raise _malformed(response, 'missing "data" envelope')
    return body


def _unwrap(response: httpx.Response) -> Record:
    body = _success_body(response)
    if body is None:
        return {}
    data = body["data"]
    if not isinstance(data, dict):
        raise _malformed(response, '"data" is not an object')
    return data


class HttpDispatcher:
    """
    Async HTTP dispatcher for the Asana REST API.

    One httpx.AsyncClient is shared by all in-flight requests. An injected client
    (or transport, for tests) is used as-is; only a client created here is closed
    by aclose().
    """

    def __init__(
        self,
        access_token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        page_size: int = 50,
        item_limit: int | None = None,
        max_retries: int = 3,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not access_token or not str(access_token).strip():
            raise ConfigurationError("Access token is not set. Set ASANA_ACCESS_TOKEN in your .env.")

        self.page_size = page_size
        self.item_limit = item_limit
        self.max_retries = max_retries
        self._headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        }

        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                base_url=base_url,
                timeout=timeout,
                transport=transport,
            )
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "HttpDispatcher":
        if not settings.access_token:
            raise ConfigurationError("Access token is not set. Set ASANA_ACCESS_TOKEN in your .env.")
        return cls(
            settings.access_token,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            page_size=settings.page_size,
            item_limit=settings.item_limit,
            max_retries=settings.max_retries,
            **kwargs,
        )

    async def __aenter__(self) -> "HttpDispatcher":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ---- Dispatcher port ----

    async def get(self, path: str, params: Payload | None = None) -> Record:
        response = await self._send(Request(Verb.GET, path, params))
        return _unwrap(response)

    async def get_collection(self, path: str, params: Payload | None = None) -> list[Record]:
        query: dict[str, Any] = dict(params or {})
        query.setdefault("limit", self.page_size)

        items: list[Record] = []
        while True:
            response = await self._send(Request(Verb.GET_COLLECTION, path, query))
            body = _success_body(response)
            if body is None:
                return items

            page = body["data"]
            if not isinstance(page, list):
                raise _malformed(response, '"data" is not a list')
            items.extend(page)

            if self.item_limit is not None and len(items) >= self.item_limit:
                return items[: self.item_limit]

            next_page = body.get("next_page")
            offset = next_page.get("offset") if isinstance(next_page, dict) else None
            if not offset:
                return items

            query = {**query, "offset": offset}

    async def post(self, path: str, data: Payload | None = None) -> Record:
        response = await self._send(Request(Verb.POST, path, data))
        return _unwrap(response)

    async def put(self, path: str, data: Payload | None = None) -> Record:
        response = await self._send(Request(Verb.PUT, path, data))
        return _unwrap(response)

    async def delete(self, path: str) -> Record:
        response = await self._send(Request(Verb.DELETE, path))
        return _unwrap(response)

    # ---- Internals ----

    def _build(self, request: Request) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"headers": self._headers}
        if request.verb in (Verb.POST, Verb.PUT):
            kwargs["json"] = {"data": dict(request.payload or {})}
        elif request.payload:
            kwargs["params"] = _clean_params(request.payload)
        return kwargs

    async def _send(self, request: Request) -> httpx.Response:
        method = request.verb.http_method
        kwargs = self._build(request)

        attempt = 0
        while True:
            logger.debug("%s %s (attempt %d)", method, request.path, attempt + 1)
            response = await self._client.request(method, request.path, **kwargs)

            if response.is_success:
                return response

            error = error_for_status(
                response.status_code,
                _json_or_none(response),
                reason=response.reason_phrase,
                retry_after=_retry_after(response),
            )

            if isinstance(error, RateLimitEnforcedError) and attempt < self.max_retries:
                attempt += 1
                logger.info(
                    "Rate-limited on %s %s, retrying in %.1fs (%d/%d)",
                    method,
                    request.path,
                    error.retry_after,
                    attempt,
                    self.max_retries,
                )
                await asyncio.sleep(error.retry_after)
                continue

            logger.warning("%s %s failed: %s", method, request.path, error)
            raise error
