import httpx
import pytest

from pay402.clients.http_client import InterceptingClient
from pay402.engine.exceptions import RequestFailedError


@pytest.mark.asyncio
async def test_success_is_returned_unchanged():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True}))

    async with InterceptingClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/data")

    assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_error_status_raises_request_failed():
    transport = httpx.MockTransport(lambda request: httpx.Response(404))

    async with InterceptingClient(transport=transport, base_url="http://testserver") as client:
        with pytest.raises(RequestFailedError) as exc_info:
            await client.get("/missing", headers={"X-Trace": "1"})

    failure = exc_info.value
    assert failure.status_code == 404
    assert failure.config.method == "GET"
    assert failure.config.url == "/missing"
    assert failure.config.headers["x-trace"] == "1"


@pytest.mark.asyncio
async def test_custom_status_validator():
    transport = httpx.MockTransport(lambda request: httpx.Response(404))

    async with InterceptingClient(
        transport=transport,
        base_url="http://testserver",
        validate_status=lambda status: status < 500,
    ) as client:
        response = await client.get("/missing")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_transport_error_becomes_failure_without_response():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with InterceptingClient(
        transport=httpx.MockTransport(handler), base_url="http://testserver"
    ) as client:
        with pytest.raises(RequestFailedError) as exc_info:
            await client.post("/data", json={"a": 1})

    assert exc_info.value.response is None
    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_replay_resends_body_with_client_defaults():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200)

    async with InterceptingClient(
        transport=httpx.MockTransport(handler),
        base_url="http://testserver",
        headers={"Authorization": "Bearer abc"},
    ) as client:
        failures = []

        async def capture(error):
            failures.append(error)
            raise error

        client._validate_status = lambda status: False
        client.interceptors.use(on_rejected=capture)
        with pytest.raises(RequestFailedError):
            await client.post("/orders", json={"id": 7})

        client._validate_status = lambda status: True
        config = failures[0].config
        config.ensure_headers()["X-Extra"] = "yes"
        response = await client.replay(config)

    assert response.status_code == 200
    replayed = requests[-1]
    assert replayed.url == "http://testserver/orders"
    assert replayed.method == "POST"
    assert replayed.content == requests[0].content
    assert replayed.headers["authorization"] == "Bearer abc"
    assert replayed.headers["x-extra"] == "yes"
