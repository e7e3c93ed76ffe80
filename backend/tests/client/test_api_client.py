"""Portfolio API Client — verifies request shaping, error mapping and retry policy.

Invariants:
    - 5xx answers retried (reads, create_post) with doubling delay, then raised
    - 4xx answers raised at once, never retried
    - send_message and other non-idempotent writes never retried
    - Admin key only sent on admin operations
    - Timeouts and transport failures surface as typed errors

Design Decisions:
    - httpx.MockTransport + recorded sleeps: no sockets, no real waiting
"""

import httpx
import pytest

from portfolio.client.api_client import PortfolioApiClient
from portfolio.client.errors import ApiConnectionError, ApiError, ApiTimeoutError


class _Server:
    """Scripted responses, consumed in order; the last one repeats."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


@pytest.fixture
def sleeps():
    return []


def _client(server, sleeps, **kwargs) -> PortfolioApiClient:
    async def fake_sleep(seconds):
        sleeps.append(seconds)

    return PortfolioApiClient(
        "http://api.test/api",
        transport=httpx.MockTransport(server),
        sleep=fake_sleep,
        **kwargs,
    )


POSTS_PAGE = {
    "posts": [],
    "pagination": {"current": 1, "total": 0, "hasNext": False, "hasPrev": False},
}


# ─── Requests ────────────────────────────────────────────────────

async def test_get_posts_sends_pagination_params(sleeps):
    server = _Server(httpx.Response(200, json=POSTS_PAGE))
    async with _client(server, sleeps) as api:
        assert await api.get_posts(page=2, limit=6) == POSTS_PAGE
    request = server.requests[0]
    assert request.url.path == "/api/blog"
    assert request.url.params["page"] == "2"
    assert request.url.params["limit"] == "6"
    assert "x-admin-key" not in request.headers


async def test_admin_key_sent_only_on_admin_calls(sleeps):
    server = _Server(httpx.Response(200, json={"message": "ok", "title": "t"}))
    async with _client(server, sleeps, admin_key="s3cret") as api:
        await api.get_post("hello-world")
        await api.delete_post("1234")
    public, admin = server.requests
    assert "x-admin-key" not in public.headers
    assert admin.headers["x-admin-key"] == "s3cret"
    assert admin.method == "DELETE"
    assert admin.url.path == "/api/blog/1234"


async def test_send_message_posts_json(sleeps):
    reply = {"message": "Message sent successfully! I'll get back to you soon.",
             "success": True}
    server = _Server(httpx.Response(201, json=reply))
    async with _client(server, sleeps) as api:
        assert await api.send_message({"name": "Ada"}) == reply
    assert server.requests[0].method == "POST"
    assert server.requests[0].url.path == "/api/contact"


# ─── Errors ──────────────────────────────────────────────────────

async def test_validation_error_exposes_field_messages(sleeps):
    body = {
        "message": "Validation failed",
        "errors": [{"field": "message",
                    "message": "Message must be between 10-1000 characters"}],
    }
    server = _Server(httpx.Response(400, json=body))
    async with _client(server, sleeps) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.send_message({"message": "Hi!!!"})
    error = exc_info.value
    assert error.status == 400
    assert error.message == "Validation failed"
    assert error.field_errors() == {
        "message": "Message must be between 10-1000 characters",
    }


async def test_non_json_error_falls_back_to_status_line(sleeps):
    server = _Server(httpx.Response(404, text="<html>nope</html>"))
    async with _client(server, sleeps) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.get_post("missing")
    assert exc_info.value.message == "HTTP 404: Not Found"
    assert sleeps == []


async def test_timeout_is_typed(sleeps):
    def timeout(request):
        raise httpx.ReadTimeout("slow", request=request)

    async with _client(timeout, sleeps) as api:
        with pytest.raises(ApiTimeoutError) as exc_info:
            await api.get_tags()
    assert exc_info.value.status is None
    assert sleeps == []


async def test_connection_failure_is_typed(sleeps):
    def refused(request):
        raise httpx.ConnectError("refused", request=request)

    async with _client(refused, sleeps) as api:
        with pytest.raises(ApiConnectionError):
            await api.get_tags()


# ─── Retry ───────────────────────────────────────────────────────

async def test_read_retries_server_errors_then_succeeds(sleeps):
    server = _Server(
        httpx.Response(503, json={"message": "busy"}),
        httpx.Response(500, json={"message": "Something went wrong!"}),
        httpx.Response(200, json=["python", "web"]),
    )
    async with _client(server, sleeps) as api:
        assert await api.get_tags() == ["python", "web"]
    assert len(server.requests) == 3
    assert sleeps == [1.0, 2.0]


async def test_retries_exhausted_raises_last_error(sleeps):
    server = _Server(httpx.Response(502, json={"message": "bad gateway"}))
    async with _client(server, sleeps, retries=2, retry_delay=0.5) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.get_posts()
    assert exc_info.value.status == 502
    assert len(server.requests) == 3
    assert sleeps == [0.5, 1.0]


async def test_client_errors_not_retried(sleeps):
    server = _Server(httpx.Response(404, json={"message": "Blog post not found"}))
    async with _client(server, sleeps) as api:
        with pytest.raises(ApiError):
            await api.get_post("missing")
    assert len(server.requests) == 1


async def test_send_message_never_retried(sleeps):
    server = _Server(httpx.Response(500, json={"message": "Something went wrong!"}))
    async with _client(server, sleeps) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.send_message({"name": "Ada"})
    assert exc_info.value.is_server_error
    assert len(server.requests) == 1
    assert sleeps == []


async def test_create_post_retries(sleeps):
    created = {"slug": "hello-world"}
    server = _Server(
        httpx.Response(500, json={"message": "Something went wrong!"}),
        httpx.Response(201, json=created),
    )
    async with _client(server, sleeps, admin_key="k") as api:
        assert await api.create_post({"title": "Hello World"}) == created
    assert len(server.requests) == 2
    assert all(r.headers["x-admin-key"] == "k" for r in server.requests)
