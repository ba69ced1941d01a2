import json

import httpx
import pytest

from pow_box.adapters.http_client import HttpNetworkClient, build_async_client
from pow_box.core.config import AppSettings
from pow_box.core.errors import NetworkError
from pow_box.core.interfaces.network_client import NetworkClient

BASE_URL = "https://box.example/api"


@pytest.fixture
def settings():
    return AppSettings(_env_file=None, base_url=BASE_URL, user_agent="pow-box-tests", http_timeout_seconds=5)


def _client(settings, handler):
    client = build_async_client(settings, base_url=settings.base_url, transport=httpx.MockTransport(handler))
    return HttpNetworkClient(settings, client=client)


def test_build_async_client_defaults(settings):
    client = build_async_client(settings, extra_headers={"X-Extra": "1"})
    assert client.headers["User-Agent"] == "pow-box-tests"
    assert client.headers["Accept"] == "application/json"
    assert client.headers["X-Extra"] == "1"
    assert client.timeout.read == 5


def test_http_network_client_satisfies_protocol(settings):
    assert isinstance(HttpNetworkClient(settings), NetworkClient)


@pytest.mark.asyncio
async def test_post_json_sends_body_and_headers(settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["authorization"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"jobId": "abc"})

    async with _client(settings, handler) as client:
        result = await client.post_json({"command": "attachToTangle"}, "commands", {"Authorization": "key"})

    assert result == {"jobId": "abc"}
    assert seen == {
        "method": "POST",
        "url": f"{BASE_URL}/commands",
        "authorization": "key",
        "body": {"command": "attachToTangle"},
    }


@pytest.mark.asyncio
async def test_get_json_resolves_relative_path(settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["method"] = request.method
        return httpx.Response(200, json={"progress": "50"})

    async with _client(settings, handler) as client:
        result = await client.get_json("jobs/abc")

    assert result == {"progress": "50"}
    assert seen == {"url": f"{BASE_URL}/jobs/abc", "method": "GET"}


@pytest.mark.asyncio
async def test_non_success_status_raises_network_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="invalid api key")

    async with _client(settings, handler) as client:
        with pytest.raises(NetworkError, match="Failed POST request to commands") as exc_info:
            await client.post_json({}, "commands")

    assert exc_info.value.additional == {"status_code": 401, "body": "invalid api key"}


@pytest.mark.asyncio
async def test_connection_error_raises_network_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(settings, handler) as client:
        with pytest.raises(NetworkError, match="Failed GET request to jobs/abc") as exc_info:
            await client.get_json("jobs/abc")

    assert isinstance(exc_info.value.inner_error, httpx.ConnectError)


@pytest.mark.asyncio
async def test_invalid_json_raises_network_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    async with _client(settings, handler) as client:
        with pytest.raises(NetworkError, match="was not valid JSON"):
            await client.get_json("jobs/abc")


@pytest.mark.asyncio
async def test_empty_body_returns_none(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    async with _client(settings, handler) as client:
        assert await client.get_json("jobs/abc") is None


@pytest.mark.asyncio
async def test_injected_client_is_not_closed(settings):
    client = build_async_client(settings, base_url=BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    async with HttpNetworkClient(settings, client=client):
        pass
    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_owned_client_is_closed(settings):
    network_client = HttpNetworkClient(settings)
    assert network_client.base_url == f"{BASE_URL}/"
    await network_client.aclose()
    assert network_client._client.is_closed
