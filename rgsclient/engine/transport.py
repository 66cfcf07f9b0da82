"""HTTP transport used by the operation client.

The client only depends on the narrow ``Transport`` protocol, so tests (or
callers with their own HTTP stack) can substitute any object with a matching
``send()``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final, Literal, Protocol, TypeAlias, runtime_checkable

import httpx
import orjson
from loguru import logger

HttpMethod: TypeAlias = Literal["GET", "POST"]

JSON_HEADERS: Final = {"Content-Type": "application/json"}

DEFAULT_TIMEOUT: Final = 10.0


@runtime_checkable
class RawResponse(Protocol):
    """What the client needs from a response: the status and a JSON decoder."""

    statusCode: int

    def json(self) -> Any: ...


@runtime_checkable
class Transport(Protocol):
    """Issue one HTTP request.

    Implementations must NOT raise for non-2xx statuses (the client inspects
    the status itself). Only genuine network faults may raise.
    """

    async def send(
        self, method: HttpMethod, url: str, body: Mapping[str, Any] | None = None
    ) -> RawResponse: ...


@dataclass(slots=True, frozen=True)
class HttpResponse:
    statusCode: int
    content: bytes = b""
    reason: str = ""

    def json(self) -> Any:
        return orjson.loads(self.content)


class HttpxTransport:
    """Transport backed by httpx.AsyncClient.

    If ``client`` is provided it is reused for every request and left open
    (the caller owns it). Otherwise each request opens its own short-lived
    client with ``timeout``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ):
        self.client = client
        self.timeout = timeout

    async def send(
        self, method: HttpMethod, url: str, body: Mapping[str, Any] | None = None
    ) -> HttpResponse:
        content = None if method == "GET" or body is None else orjson.dumps(body)

        logger.trace("{} {} ({} bytes)", method, url, len(content) if content else 0)

        if self.client is not None:
            got = await self.client.request(method, url, content=content, headers=JSON_HEADERS)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                got = await client.request(method, url, content=content, headers=JSON_HEADERS)

        return HttpResponse(statusCode=got.status_code, content=got.content, reason=got.reason_phrase)
