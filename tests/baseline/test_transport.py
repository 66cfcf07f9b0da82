"""Tests for rgsclient.engine.transport: the httpx-backed transport."""

import httpx
import orjson
import pytest

from rgsclient.engine.client import RGSClient
from rgsclient.engine.errors import TransportError
from rgsclient.engine.transport import HttpResponse, HttpxTransport, RawResponse, Transport


class Recorder:
    """httpx.MockTransport handler which records requests and replies with a canned response."""

    def __init__(self, status: int = 200, body: bytes = b'{"status":{"statusCode":"SUCCESS"}}'):
        self.status = status
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, content=self.body)


def transportFor(recorder: Recorder) -> HttpxTransport:
    return HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(recorder)))


class TestProtocols:
    def test_httpx_transport_satisfies_protocol(self):
        assert isinstance(HttpxTransport(), Transport)

    def test_http_response_satisfies_protocol(self):
        assert isinstance(HttpResponse(200, b"{}"), RawResponse)


class TestHttpResponse:
    def test_json(self):
        assert HttpResponse(200, b'{"a": 1}').json() == {"a": 1}

    def test_invalid_json_raises(self):
        with pytest.raises(orjson.JSONDecodeError):
            HttpResponse(500, b"<html>Bad Gateway</html>").json()


class TestHttpxTransport:
    @pytest.mark.asyncio
    async def test_post_sends_json_body(self):
        recorder = Recorder()
        transport = transportFor(recorder)

        got = await transport.send("POST", "https://h/wallet/balance", {"sessionID": "s"})

        request = recorder.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://h/wallet/balance"
        assert request.headers["content-type"] == "application/json"
        assert orjson.loads(request.content) == {"sessionID": "s"}
        assert got.statusCode == 200
        assert got.json() == {"status": {"statusCode": "SUCCESS"}}

    @pytest.mark.asyncio
    async def test_get_sends_no_body(self):
        recorder = Recorder()
        transport = transportFor(recorder)

        await transport.send("GET", "https://h/health", {"ignored": True})

        assert recorder.requests[0].method == "GET"
        assert recorder.requests[0].content == b""

    @pytest.mark.asyncio
    async def test_non_2xx_does_not_raise(self):
        recorder = Recorder(status=500, body=b'{"message": "boom"}')
        transport = transportFor(recorder)

        got = await transport.send("POST", "https://h/wallet/play", {})

        assert got.statusCode == 500
        assert got.reason == "Internal Server Error"
        assert got.json() == {"message": "boom"}

    @pytest.mark.asyncio
    async def test_connect_error_propagates(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(refuse)))

        with pytest.raises(httpx.ConnectError):
            await transport.send("POST", "https://h/wallet/balance", {})

    @pytest.mark.asyncio
    async def test_shared_client_left_open(self):
        shared = httpx.AsyncClient(transport=httpx.MockTransport(Recorder()))
        transport = HttpxTransport(client=shared)

        await transport.send("POST", "https://h/wallet/balance", {})
        await transport.send("POST", "https://h/wallet/balance", {})

        assert not shared.is_closed
        await shared.aclose()


class TestClientOverHttpx:
    """Full stack: RGSClient -> HttpxTransport -> httpx.MockTransport."""

    @pytest.mark.asyncio
    async def test_bet_on_the_wire(self):
        recorder = Recorder()
        client = RGSClient(transportFor(recorder), ambient={"sessionID": "s1", "rgs_url": "h"})

        await client.play(amount=1.00, mode="base")

        assert orjson.loads(recorder.requests[0].content) == {
            "mode": "base",
            "currency": "USD",
            "sessionID": "s1",
            "amount": 1_000_000,
        }

    @pytest.mark.asyncio
    async def test_html_error_page(self):
        recorder = Recorder(status=502, body=b"<html>Bad Gateway</html>")
        client = RGSClient(transportFor(recorder), ambient={"sessionID": "s1", "rgs_url": "h"})

        with pytest.raises(TransportError) as exc:
            await client.balance()

        assert exc.value.statusCode == 502
        assert exc.value.body == {}
