"""rgsclient engine layer: operation dispatch with no CLI dependency.

Modules
-------
amounts
    Conversion between currency units and the RGS integer format.
    - ``API_AMOUNT_MULTIPLIER``: 1,000,000 API units per currency unit
    - ``BOOK_AMOUNT_MULTIPLIER``: 100 book units per currency unit (reporting only)
    - ``toWireAmount``, ``fromWireAmount``, ``fromWireAmountDecimal``

config
    Session parameter resolution.
    - ``PartialConfig``: explicitly supplied values (any may be None)
    - ``SessionContext``: fully resolved values for one call
    - ``resolve``: explicit values first, ambient mapping second, then defaults
    - ``ambientFromUrl``, ``ambientFromEnv``: build ambient mappings from a
      launch URL or from RGS_* environment / dotenv settings

transport
    HTTP transport protocol and the default httpx implementation.
    - ``Transport``, ``RawResponse``: protocols the client depends on
    - ``HttpxTransport``, ``HttpResponse``

operations
    The closed set of operations and their wire mapping.
    - ``Operation``: enum of the eight operations
    - ``OPERATIONS``: read-only Operation -> OperationDescriptor table
    - ``*Args``: per-operation argument dataclasses, ``SearchCriteria``

schemas
    Response TypedDicts and the in-band ``StatusCode`` enum.
    - ``statusCodeOf``, ``isSuccess``: branch on domain status

errors
    ``RGSError`` hierarchy (local validation, HTTP failures, malformed bodies).

client
    ``RGSClient``: one method per operation, all routed through ``dispatch()``.
"""

from rgsclient.engine.amounts import (
    API_AMOUNT_MULTIPLIER,
    BOOK_AMOUNT_MULTIPLIER,
    fromWireAmount,
    fromWireAmountDecimal,
    toWireAmount,
)
from rgsclient.engine.client import RGSClient
from rgsclient.engine.config import (
    PartialConfig,
    SessionContext,
    ambientFromEnv,
    ambientFromUrl,
    resolve,
)
from rgsclient.engine.errors import (
    InvalidAmount,
    MalformedResponse,
    MissingArgument,
    MissingConfig,
    RGSError,
    TransportError,
    UnknownOperation,
    ValidationError,
)
from rgsclient.engine.operations import (
    OPERATIONS,
    ActionArgs,
    AuthenticateArgs,
    BalanceArgs,
    EndRoundArgs,
    EventArgs,
    Operation,
    OperationDescriptor,
    PlayArgs,
    SearchArgs,
    SearchCriteria,
    SessionStartArgs,
)
from rgsclient.engine.schemas import StatusCode, isSuccess, statusCodeOf
from rgsclient.engine.transport import HttpResponse, HttpxTransport, RawResponse, Transport

__all__ = [
    "API_AMOUNT_MULTIPLIER",
    "BOOK_AMOUNT_MULTIPLIER",
    "fromWireAmount",
    "fromWireAmountDecimal",
    "toWireAmount",
    "RGSClient",
    "PartialConfig",
    "SessionContext",
    "ambientFromEnv",
    "ambientFromUrl",
    "resolve",
    "InvalidAmount",
    "MalformedResponse",
    "MissingArgument",
    "MissingConfig",
    "RGSError",
    "TransportError",
    "UnknownOperation",
    "ValidationError",
    "OPERATIONS",
    "ActionArgs",
    "AuthenticateArgs",
    "BalanceArgs",
    "EndRoundArgs",
    "EventArgs",
    "Operation",
    "OperationDescriptor",
    "PlayArgs",
    "SearchArgs",
    "SearchCriteria",
    "SessionStartArgs",
    "StatusCode",
    "isSuccess",
    "statusCodeOf",
    "HttpResponse",
    "HttpxTransport",
    "RawResponse",
    "Transport",
]
