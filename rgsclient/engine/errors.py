"""Error taxonomy for RGS operations.

Local validation failures are raised before any network I/O. Non-200 HTTP
responses raise TransportError. Network faults from the transport itself
(httpx.RequestError etc.) are never wrapped here.

Domain statuses (``status.statusCode`` inside a 200 body) are NOT errors and
have no class in this module.
"""

from __future__ import annotations

from typing import Any


class RGSError(Exception):
    """Base class for every error raised by rgsclient."""


class ValidationError(RGSError):
    """Local failure detected before a request is sent."""


class MissingConfig(ValidationError):
    """A session parameter is absent from both explicit args and the ambient source."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is required (provide it explicitly or via the ambient source)")


class MissingArgument(ValidationError):
    """An operation-specific field was not supplied."""

    def __init__(self, field: str, operation: str | None = None):
        self.field = field
        self.operation = operation
        where = f" for {operation}" if operation else ""
        super().__init__(f"{field} is required{where}")


class InvalidAmount(ValidationError):
    def __init__(self, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid amount {value!r}: {reason}")


class UnknownOperation(RGSError):
    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Unknown operation: {name!r}")


class TransportError(RGSError):
    """The service answered with a non-200 HTTP status.

    ``body`` is the decoded error payload, or an empty dict when the body
    could not be decoded as a JSON object.
    """

    def __init__(
        self,
        statusCode: int,
        message: str | None = None,
        body: dict[str, Any] | None = None,
        operation: str | None = None,
    ):
        self.statusCode = statusCode
        self.message = message
        self.body = body if body is not None else {}
        self.operation = operation

        text = f"RGS API error: {statusCode}"
        if message:
            text += f" - {message}"

        super().__init__(text)


class MalformedResponse(RGSError):
    """A 200 response whose body is not a JSON object."""

    def __init__(self, statusCode: int, operation: str | None = None):
        self.statusCode = statusCode
        self.operation = operation
        super().__init__(f"[{operation}] Response body is not a JSON object (HTTP {statusCode})")
