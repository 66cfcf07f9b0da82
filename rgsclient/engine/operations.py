"""The closed set of RGS operations and how each maps onto the wire.

Each ``Operation`` has one immutable ``OperationDescriptor`` in ``OPERATIONS``
holding its HTTP method, path, argument type, required fields and payload
builder. The table is read-only; ``test_operations`` checks it covers every
member of the enum.
"""

from __future__ import annotations

import enum
import types
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Final, TypeAlias

from rgsclient.engine.amounts import toWireAmount
from rgsclient.engine.config import PartialConfig, SessionContext
from rgsclient.engine.schemas import (
    ActionResponse,
    AuthenticateResponse,
    BalanceResponse,
    EndRoundResponse,
    EventResponse,
    PlayResponse,
    SearchResponse,
    SessionStartResponse,
)
from rgsclient.engine.transport import HttpMethod


class Operation(enum.Enum):
    AUTHENTICATE = "authenticate"
    BALANCE = "balance"
    PLAY = "play"
    END_ROUND = "end-round"
    EVENT = "event"
    ACTION = "action"
    SESSION_START = "session-start"
    SEARCH = "search"


# ── Arguments ───────────────────────────────────────────────────────
# Every argument type is a PartialConfig, so session parameters can be given
# per call and anything left unset falls back to the ambient source.
# Operation fields default to None so omissions are reported as
# MissingArgument by dispatch instead of as a TypeError at construction.


@dataclass(slots=True, frozen=True)
class AuthenticateArgs(PartialConfig):
    pass


@dataclass(slots=True, frozen=True)
class BalanceArgs(PartialConfig):
    pass


@dataclass(slots=True, frozen=True)
class PlayArgs(PartialConfig):
    # currency units; 1.00 is one unit (converted to API units on send)
    amount: int | float | Decimal | str | None = None
    mode: str | None = None
    meta: Mapping[str, Any] | None = None


@dataclass(slots=True, frozen=True)
class EndRoundArgs(PartialConfig):
    pass


@dataclass(slots=True, frozen=True)
class EventArgs(PartialConfig):
    eventIndex: int | None = None


@dataclass(slots=True, frozen=True)
class ActionArgs(PartialConfig):
    # e.g. "BET" sends an additional bet to the operator, "DECISION" goes to the game
    action: str | None = None
    meta: Mapping[str, Any] | None = None


@dataclass(slots=True, frozen=True)
class SessionStartArgs(PartialConfig):
    """Operator-side session start (normally sent to the mock casino endpoint)."""

    token: str | Mapping[str, Any] | None = None
    # {"amount": <API units>, "currency": ...}; currency defaults to the resolved one
    balance: Mapping[str, Any] | None = None
    setBalance: bool | None = None


@dataclass(slots=True, frozen=True)
class SearchCriteria:
    bookID: int | None = None
    kind: int | None = None
    symbol: str | None = None
    hasWild: bool | None = None
    wildMult: float | None = None
    gameType: str | None = None

    def toWire(self) -> dict[str, Any]:
        """Only criteria that were set are sent."""
        return {f.name: v for f in fields(self) if (v := getattr(self, f.name)) is not None}


@dataclass(slots=True, frozen=True)
class SearchArgs(PartialConfig):
    mode: str | None = None
    search: SearchCriteria | Mapping[str, Any] | None = None


CallArgs: TypeAlias = (
    AuthenticateArgs
    | BalanceArgs
    | PlayArgs
    | EndRoundArgs
    | EventArgs
    | ActionArgs
    | SessionStartArgs
    | SearchArgs
)


# ── Payload builders ────────────────────────────────────────────────


def _session(args: PartialConfig, ctx: SessionContext) -> dict[str, Any]:
    return {"sessionID": ctx.sessionId}


def _authenticate(args: AuthenticateArgs, ctx: SessionContext) -> dict[str, Any]:
    return {"sessionID": ctx.sessionId, "language": ctx.locale}


def _play(args: PlayArgs, ctx: SessionContext) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "mode": args.mode,
        "currency": ctx.currency,
        "sessionID": ctx.sessionId,
        "amount": toWireAmount(args.amount),
    }

    if args.meta is not None:
        payload["meta"] = dict(args.meta)

    return payload


def _event(args: EventArgs, ctx: SessionContext) -> dict[str, Any]:
    # the RGS stores events as strings
    return {"sessionID": ctx.sessionId, "event": f"{args.eventIndex}"}


def _action(args: ActionArgs, ctx: SessionContext) -> dict[str, Any]:
    payload: dict[str, Any] = {"sessionID": ctx.sessionId, "action": args.action}

    if args.meta is not None:
        payload["meta"] = dict(args.meta)

    return payload


def _sessionStart(args: SessionStartArgs, ctx: SessionContext) -> dict[str, Any]:
    token = args.token if isinstance(args.token, str) else dict(args.token or {})
    payload: dict[str, Any] = {"currency": ctx.currency, "token": token}

    if args.balance is not None:
        balance = dict(args.balance)
        balance.setdefault("currency", ctx.currency)
        payload["balance"] = balance

    if args.setBalance is not None:
        payload["setBalance"] = args.setBalance

    return payload


def _search(args: SearchArgs, ctx: SessionContext) -> dict[str, Any]:
    search = args.search
    if isinstance(search, SearchCriteria):
        criteria = search.toWire()
    else:
        criteria = {k: v for k, v in (search or {}).items() if v is not None}

    return {"mode": args.mode, "search": criteria}


# ── Descriptor table ────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class OperationDescriptor:
    method: HttpMethod
    path: str
    argsType: type[PartialConfig]
    responseType: type
    build: Callable[[Any, SessionContext], dict[str, Any]]

    # argument attributes which must be set (not None, not "")
    required: tuple[str, ...] = ()

    # False for operations which don't carry a player sessionID
    needsSession: bool = True


OPERATIONS: Final[Mapping[Operation, OperationDescriptor]] = types.MappingProxyType(
    {
        Operation.AUTHENTICATE: OperationDescriptor(
            "POST", "/wallet/authenticate", AuthenticateArgs, AuthenticateResponse, _authenticate
        ),
        Operation.BALANCE: OperationDescriptor(
            "POST", "/wallet/balance", BalanceArgs, BalanceResponse, _session
        ),
        Operation.PLAY: OperationDescriptor(
            "POST", "/wallet/play", PlayArgs, PlayResponse, _play, required=("amount", "mode")
        ),
        Operation.END_ROUND: OperationDescriptor(
            "POST", "/wallet/end-round", EndRoundArgs, EndRoundResponse, _session
        ),
        Operation.EVENT: OperationDescriptor(
            "POST", "/bet/event", EventArgs, EventResponse, _event, required=("eventIndex",)
        ),
        Operation.ACTION: OperationDescriptor(
            "POST", "/bet/action", ActionArgs, ActionResponse, _action, required=("action",)
        ),
        Operation.SESSION_START: OperationDescriptor(
            "POST",
            "/session/start",
            SessionStartArgs,
            SessionStartResponse,
            _sessionStart,
            required=("token",),
            needsSession=False,
        ),
        Operation.SEARCH: OperationDescriptor(
            "POST",
            "/game/search",
            SearchArgs,
            SearchResponse,
            _search,
            required=("mode", "search"),
            needsSession=False,
        ),
    }
)


def operationFor(name: Operation | str) -> Operation | None:
    """Look up an operation by member or logical name ("end-round", "play", ...)."""
    if isinstance(name, Operation):
        return name

    try:
        return Operation(name)
    except ValueError:
        return None


def missingFields(descriptor: OperationDescriptor, args: PartialConfig) -> list[str]:
    """Return the required argument fields which were not supplied."""
    return [
        name for name in descriptor.required if (val := getattr(args, name)) is None or val == ""
    ]
