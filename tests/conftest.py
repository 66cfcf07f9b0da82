"""Shared test fixtures for the rgsclient test suite.

FakeTransport is a test double for the HTTP transport, allowing the client
to be exercised without any network access. It records every request so
tests can assert on the exact wire payload (or on no request being made).
"""

from collections import deque
from dataclasses import dataclass, field
from io import StringIO
from typing import Any

import pytest
from loguru import logger

from rgsclient.engine.client import RGSClient


@dataclass
class FakeResponse:
    """Stub satisfying the RawResponse protocol."""

    statusCode: int = 200
    body: Any = field(default_factory=lambda: {"status": {"statusCode": "SUCCESS"}})

    # simulate a body which isn't JSON at all
    undecodable: bool = False

    def json(self) -> Any:
        if self.undecodable:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")

        return self.body


@dataclass
class SentRequest:
    method: str
    url: str
    body: Any


class FakeTransport:
    """Test double for HttpxTransport.

    Responses queued with ``reply()`` are returned in order; once the queue
    is empty every request gets ``default``.
    """

    def __init__(self, default: FakeResponse | None = None):
        self.calls: list[SentRequest] = []
        self.responses: deque[FakeResponse | BaseException] = deque()
        self.default = default or FakeResponse()

    def reply(self, statusCode: int = 200, body: Any = None, **kwargs) -> "FakeTransport":
        """Test helper: queue a canned response."""
        if body is None:
            self.responses.append(FakeResponse(statusCode=statusCode, **kwargs))
        else:
            self.responses.append(FakeResponse(statusCode=statusCode, body=body, **kwargs))

        return self

    def fail(self, exc: BaseException) -> "FakeTransport":
        """Test helper: the next request raises ``exc`` (a network fault)."""
        self.responses.append(exc)
        return self

    async def send(self, method, url, body=None):
        self.calls.append(SentRequest(method, url, body))

        got = self.responses.popleft() if self.responses else self.default
        if isinstance(got, BaseException):
            raise got

        return got

    @property
    def last(self) -> SentRequest:
        return self.calls[-1]


# ── Fixtures ──


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def ambient() -> dict[str, str]:
    """Launch parameters as a game would receive them in its URL."""
    return {
        "sessionID": "amb-session",
        "rgs_url": "rgs.example.com",
        "lang": "de",
        "currency": "EUR",
    }


@pytest.fixture
def client(transport) -> RGSClient:
    """Client with no ambient source; every call must be explicit."""
    return RGSClient(transport)


@pytest.fixture
def ambient_client(transport, ambient) -> RGSClient:
    return RGSClient(transport, ambient=ambient)


@pytest.fixture
def log_capture():
    """Capture rgsclient loguru output for assertion. Yields a StringIO buffer."""
    buf = StringIO()
    logger.enable("rgsclient")
    handler_id = logger.add(buf, format="{level} {message}", level="TRACE")
    yield buf
    logger.remove(handler_id)
    logger.disable("rgsclient")
