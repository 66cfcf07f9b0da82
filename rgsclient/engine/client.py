"""Operation client for the RGS API.

Every public method funnels into ``RGSClient.dispatch()``, which:

1. looks up the operation's descriptor
2. resolves session parameters (explicit args, then the ambient source)
3. checks the operation's required fields
4. builds the JSON payload (bet amounts converted to API units)
5. sends ``https://{serviceHost}{path}`` through the transport
6. raises TransportError for any non-200 status
7. returns the decoded body as-is

Steps 1-4 never touch the network, so local mistakes are reported without a
request being made. In-band statuses such as ERR_IPB are NOT raised: they are
returned in ``response["status"]["statusCode"]`` for the caller to branch on
(see ``schemas.statusCodeOf()``).

Usage:
    client = RGSClient(ambient=ambientFromUrl(launchUrl))
    auth = await client.authenticate()
    bet = await client.play(amount=1.00, mode="base")
    if statusCodeOf(bet) is StatusCode.ERR_IPB:
        ...
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from rgsclient.engine.config import AmbientSource, resolve
from rgsclient.engine.errors import (
    MalformedResponse,
    MissingArgument,
    TransportError,
    UnknownOperation,
)
from rgsclient.engine.operations import (
    OPERATIONS,
    ActionArgs,
    AuthenticateArgs,
    BalanceArgs,
    CallArgs,
    EndRoundArgs,
    EventArgs,
    Operation,
    PlayArgs,
    SearchArgs,
    SessionStartArgs,
    missingFields,
    operationFor,
)
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
from rgsclient.engine.transport import HttpxTransport, RawResponse, Transport


def errorBody(response: RawResponse) -> dict[str, Any]:
    """Decode an error response body, or {} if it isn't a JSON object."""
    try:
        found = response.json()
    except Exception:
        return {}

    return found if isinstance(found, dict) else {}


def _callArgs(argsType: type, args: CallArgs | None, fields: dict[str, Any]) -> CallArgs:
    if args is None:
        return argsType(**fields)

    if fields:
        raise TypeError(
            f"pass either a {argsType.__name__} or keyword fields, not both (got {sorted(fields)})"
        )

    return args


class RGSClient:
    """Typed RGS API client.

    Dependencies injected at construction:
    - transport: anything implementing the Transport protocol (default: HttpxTransport)
    - ambient: default ambient source for session parameters (default: empty)

    The client keeps no per-session state; concurrent calls are independent
    and are not ordered relative to each other.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        ambient: AmbientSource | None = None,
    ):
        self.transport: Transport = transport if transport is not None else HttpxTransport()
        self.ambient: AmbientSource = ambient if ambient is not None else {}

    async def dispatch(
        self,
        operation: Operation | str,
        args: CallArgs | None = None,
        *,
        ambient: AmbientSource | None = None,
    ) -> Any:
        """Run one operation and return its decoded response body.

        ``ambient`` replaces the client's default ambient source for this call only.
        """
        op = operationFor(operation)
        if op is None or op not in OPERATIONS:
            raise UnknownOperation(operation)

        descriptor = OPERATIONS[op]
        name = op.value

        if args is None:
            args = descriptor.argsType()  # type: ignore
        elif not isinstance(args, descriptor.argsType):
            raise TypeError(
                f"{name} expects {descriptor.argsType.__name__}, got {type(args).__name__}"
            )

        ctx = resolve(
            args,
            self.ambient if ambient is None else ambient,
            requireSession=descriptor.needsSession,
        )

        if missing := missingFields(descriptor, args):
            raise MissingArgument(missing[0], name)

        payload = descriptor.build(args, ctx)
        url = f"https://{ctx.serviceHost}{descriptor.path}"

        logger.debug("[{}] {} {}", name, descriptor.method, url)

        response = await self.transport.send(
            descriptor.method, url, None if descriptor.method == "GET" else payload
        )

        if response.statusCode != 200:
            body = errorBody(response)
            message = body.get("message")
            logger.debug("[{}] HTTP {}: {}", name, response.statusCode, body or "(no body)")
            raise TransportError(
                response.statusCode,
                message if isinstance(message, str) else None,
                body,
                name,
            )

        try:
            found = response.json()
        except Exception as e:
            raise MalformedResponse(response.statusCode, name) from e

        if not isinstance(found, dict):
            raise MalformedResponse(response.statusCode, name)

        logger.trace("[{}] Response: {}", name, found)

        return found

    # ── Operations ──────────────────────────────────────────────────
    # Each accepts either a prepared args object or the same fields as keywords.

    async def authenticate(
        self, args: AuthenticateArgs | None = None, **fields
    ) -> AuthenticateResponse:
        """Validate the session and fetch balance, bet config and any active round."""
        return await self.dispatch(
            Operation.AUTHENTICATE, _callArgs(AuthenticateArgs, args, fields)
        )

    async def balance(self, args: BalanceArgs | None = None, **fields) -> BalanceResponse:
        return await self.dispatch(Operation.BALANCE, _callArgs(BalanceArgs, args, fields))

    async def play(self, args: PlayArgs | None = None, **fields) -> PlayResponse:
        """Place a bet and start a round.

        ``amount`` is in currency units (1.00 == one unit); it is converted to
        API units before sending.
        """
        return await self.dispatch(Operation.PLAY, _callArgs(PlayArgs, args, fields))

    bet = play

    async def endRound(self, args: EndRoundArgs | None = None, **fields) -> EndRoundResponse:
        """Close the active round so the payout is sent to the operator.

        ERR_BNF in the response usually just means there was no active round.
        """
        return await self.dispatch(Operation.END_ROUND, _callArgs(EndRoundArgs, args, fields))

    async def event(self, args: EventArgs | None = None, **fields) -> EventResponse:
        """Record how far through the current bet the player has progressed."""
        return await self.dispatch(Operation.EVENT, _callArgs(EventArgs, args, fields))

    async def action(self, args: ActionArgs | None = None, **fields) -> ActionResponse:
        return await self.dispatch(Operation.ACTION, _callArgs(ActionArgs, args, fields))

    async def sessionStart(
        self, args: SessionStartArgs | None = None, **fields
    ) -> SessionStartResponse:
        """Start an operator session and get the game URL for it."""
        return await self.dispatch(
            Operation.SESSION_START, _callArgs(SessionStartArgs, args, fields)
        )

    async def search(self, args: SearchArgs | None = None, **fields) -> SearchResponse:
        """Search stored outcomes (forced results for testing)."""
        return await self.dispatch(Operation.SEARCH, _callArgs(SearchArgs, args, fields))

    forceResult = search
