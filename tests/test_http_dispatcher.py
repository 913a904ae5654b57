# tests/test_http_dispatcher.py

from __future__ import annotations

import dataclasses
import json

import httpx
import pytest

from asana_tasks.config import Settings
from asana_tasks.errors import (
    ApiError,
    ConfigurationError,
    ForbiddenError,
    InvalidRequestError,
    NoAuthorizationError,
    NotFoundError,
    PremiumOnlyError,
    RateLimitEnforcedError,
    ServerError,
)
from asana_tasks.http.dispatcher import HttpDispatcher


class Recorder:
    """MockTransport handler that replays queued responses and keeps the requests."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)


def make_dispatcher(recorder: Recorder, **kwargs) -> HttpDispatcher:
    kwargs.setdefault("max_retries", 2)
    return HttpDispatcher("test-token", transport=httpx.MockTransport(recorder), **kwargs)


@pytest.mark.asyncio
async def test_get_unwraps_data_and_sends_auth() -> None:
    rec = Recorder(httpx.Response(200, json={"data": {"gid": "123", "name": "x"}}))
    async with make_dispatcher(rec) as d:
        record = await d.get("/tasks/123", {"opt_fields": "name", "skip": None})

    assert record == {"gid": "123", "name": "x"}
    (req,) = rec.requests
    assert req.method == "GET"
    assert req.url.path == "/api/1.0/tasks/123"
    assert req.headers["Authorization"] == "Bearer test-token"
    assert dict(req.url.params) == {"opt_fields": "name"}


@pytest.mark.asyncio
async def test_post_wraps_body_in_data_envelope() -> None:
    rec = Recorder(httpx.Response(201, json={"data": {"gid": "1"}}))
    async with make_dispatcher(rec) as d:
        record = await d.post("/workspaces/55/tasks", {"name": "x"})

    assert record == {"gid": "1"}
    (req,) = rec.requests
    assert req.method == "POST"
    assert req.url.path == "/api/1.0/workspaces/55/tasks"
    assert json.loads(req.content) == {"data": {"name": "x"}}


@pytest.mark.asyncio
async def test_put_without_data_sends_empty_envelope() -> None:
    rec = Recorder(httpx.Response(200, json={"data": {}}))
    async with make_dispatcher(rec) as d:
        await d.put("/tasks/7")

    assert json.loads(rec.requests[0].content) == {"data": {}}


@pytest.mark.asyncio
async def test_delete_returns_empty_record() -> None:
    rec = Recorder(httpx.Response(200, json={"data": {}}))
    async with make_dispatcher(rec) as d:
        assert await d.delete("/tasks/7") == {}
    assert rec.requests[0].method == "DELETE"


@pytest.mark.asyncio
async def test_get_collection_follows_next_page() -> None:
    rec = Recorder(
        httpx.Response(200, json={"data": [{"gid": "1"}, {"gid": "2"}], "next_page": {"offset": "abc"}}),
        httpx.Response(200, json={"data": [{"gid": "3"}], "next_page": None}),
    )
    async with make_dispatcher(rec, page_size=2) as d:
        items = await d.get_collection("/projects/5/tasks", {"completed_since": "now"})

    assert [i["gid"] for i in items] == ["1", "2", "3"]
    first, second = rec.requests
    assert dict(first.url.params) == {"completed_since": "now", "limit": "2"}
    assert dict(second.url.params) == {"completed_since": "now", "limit": "2", "offset": "abc"}


@pytest.mark.asyncio
async def test_get_collection_keeps_caller_limit_and_item_limit() -> None:
    rec = Recorder(
        httpx.Response(200, json={"data": [{"gid": "1"}, {"gid": "2"}], "next_page": {"offset": "more"}}),
    )
    async with make_dispatcher(rec, item_limit=1) as d:
        items = await d.get_collection("/tasks", {"limit": 10})

    assert items == [{"gid": "1"}]
    assert len(rec.requests) == 1
    assert rec.requests[0].url.params["limit"] == "10"


@pytest.mark.asyncio
async def test_not_found_maps_to_error_with_messages() -> None:
    rec = Recorder(httpx.Response(404, json={"errors": [{"message": "task: Unknown object: 9"}]}))
    async with make_dispatcher(rec) as d:
        with pytest.raises(NotFoundError) as exc_info:
            await d.get("/tasks/9")

    err = exc_info.value
    assert err.status_code == 404
    assert err.errors == ["task: Unknown object: 9"]
    assert "Unknown object" in str(err)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "cls"),
    [
        (400, InvalidRequestError),
        (401, NoAuthorizationError),
        (402, PremiumOnlyError),
        (403, ForbiddenError),
        (500, ServerError),
        (503, ServerError),
        (418, ApiError),
    ],
)
async def test_status_codes_map_to_error_classes(status, cls) -> None:
    rec = Recorder(httpx.Response(status, text="not json"))
    async with make_dispatcher(rec) as d:
        with pytest.raises(cls) as exc_info:
            await d.post("/tasks", {"name": "x"})

    assert exc_info.value.status_code == status
    assert exc_info.value.body is None
    assert len(rec.requests) == 1


@pytest.mark.asyncio
async def test_rate_limit_is_retried_then_succeeds() -> None:
    rec = Recorder(
        httpx.Response(429, headers={"Retry-After": "0"}, json={"errors": [{"message": "slow down"}]}),
        httpx.Response(200, json={"data": {"gid": "1"}}),
    )
    async with make_dispatcher(rec) as d:
        assert await d.get("/tasks/1") == {"gid": "1"}
    assert len(rec.requests) == 2


@pytest.mark.asyncio
async def test_rate_limit_raised_after_max_retries() -> None:
    rec = Recorder(*[httpx.Response(429, headers={"Retry-After": "0"}) for _ in range(3)])
    async with make_dispatcher(rec, max_retries=2) as d:
        with pytest.raises(RateLimitEnforcedError) as exc_info:
            await d.get("/tasks/1")

    assert exc_info.value.retry_after == 0.0
    assert len(rec.requests) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"Retry-After": "soon"}], ids=["missing", "malformed"])
async def test_retry_after_defaults_to_one_second(headers) -> None:
    rec = Recorder(httpx.Response(429, headers=headers))
    async with make_dispatcher(rec, max_retries=0) as d:
        with pytest.raises(RateLimitEnforcedError) as exc_info:
            await d.get("/tasks/1")

    assert exc_info.value.retry_after == 1.0
    assert len(rec.requests) == 1


@pytest.mark.asyncio
async def test_html_success_body_is_an_error_not_an_empty_result() -> None:
    page = "<html>proxy login</html>"
    rec = Recorder(httpx.Response(200, text=page), httpx.Response(200, text=page))
    async with make_dispatcher(rec) as d:
        with pytest.raises(ApiError, match="Malformed response") as exc_info:
            await d.get("/tasks/1")
        with pytest.raises(ApiError, match="Malformed response"):
            await d.get_collection("/tasks")

    assert exc_info.value.status_code == 200
    assert exc_info.value.body == page


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [{"gid": "1"}, [{"gid": "1"}], {"data": "oops"}],
    ids=["no-envelope", "bare-list", "data-not-object"],
)
async def test_success_without_data_object_raises(body) -> None:
    rec = Recorder(httpx.Response(200, json=body))
    async with make_dispatcher(rec) as d:
        with pytest.raises(ApiError, match="Malformed response"):
            await d.put("/tasks/1", {"name": "x"})


@pytest.mark.asyncio
async def test_collection_data_must_be_a_list() -> None:
    rec = Recorder(httpx.Response(200, json={"data": {"gid": "1"}}))
    async with make_dispatcher(rec) as d:
        with pytest.raises(ApiError, match="not a list"):
            await d.get_collection("/tasks")


@pytest.mark.asyncio
async def test_empty_success_body_is_an_empty_record() -> None:
    rec = Recorder(httpx.Response(204))
    async with make_dispatcher(rec) as d:
        assert await d.delete("/tasks/7") == {}


def test_missing_token_is_configuration_error(settings: Settings) -> None:
    with pytest.raises(ConfigurationError):
        HttpDispatcher("")

    no_token = dataclasses.replace(settings, access_token=None)
    with pytest.raises(ConfigurationError):
        HttpDispatcher.from_settings(no_token)


@pytest.mark.asyncio
async def test_injected_client_is_not_closed() -> None:
    rec = Recorder(httpx.Response(200, json={"data": {}}))
    client = httpx.AsyncClient(base_url="https://example.test/api", transport=httpx.MockTransport(rec))

    d = HttpDispatcher("t", client=client)
    await d.get("/users/me")
    await d.aclose()

    assert not client.is_closed
    assert rec.requests[0].url.path == "/api/users/me"
    await client.aclose()
