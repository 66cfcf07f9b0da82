"""Command line front end: run a single RGS operation and print the response.

Session parameters come from flags first, then from ``--launch-url``, then
from RGS_* environment variables (or the ``.env.rgsclient`` dotenv file).

    python -m rgsclient --launch-url "https://game/?sessionID=abc&rgs_url=rgs.example.com" balance
    python -m rgsclient --session-id abc --host rgs.example.com play --amount 1.00 --mode base

Exit codes: 0 on success, 1 on local or HTTP failure, 2 when the service
returned a status other than SUCCESS.
"""

from __future__ import annotations

import argparse
import asyncio
import datetime
import os
import pathlib
import sys
from typing import Any

import httpx
import orjson
from loguru import logger

from rgsclient.engine.client import RGSClient
from rgsclient.engine.config import DEFAULT_ENV_FILE, ambientFromEnv, ambientFromUrl
from rgsclient.engine.errors import RGSError
from rgsclient.engine.operations import (
    ActionArgs,
    AuthenticateArgs,
    BalanceArgs,
    CallArgs,
    EndRoundArgs,
    EventArgs,
    Operation,
    PlayArgs,
    SearchArgs,
    SearchCriteria,
    SessionStartArgs,
)
from rgsclient.engine.schemas import StatusCode, statusCodeOf
from rgsclient.engine.transport import DEFAULT_TIMEOUT, HttpxTransport, Transport

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_DOMAIN_STATUS = 2


def setupLogging(level: str = "INFO") -> None:
    """Console logging on stderr, plus a TRACE file log when RGS_LOGDIR is set."""
    logger.remove()
    logger.enable("rgsclient")
    logger.add(sys.stderr, colorize=True, level=level)

    if logdir := os.getenv("RGS_LOGDIR"):
        now = datetime.datetime.now()
        LOGDIR = pathlib.Path(logdir) / f"{now.year}" / f"{now.month:02}"
        LOGDIR.mkdir(exist_ok=True, parents=True)
        logfile = LOGDIR / f"rgsclient-{now:%Y%m%d-%H%M%S}.log"
        logger.add(sink=str(logfile), level="TRACE", colorize=False)
        logger.info("Logging session to: {}", logfile)


def _jsonArg(val: str) -> Any:
    try:
        return orjson.loads(val)
    except orjson.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"invalid JSON: {e}") from None


def buildParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rgsclient", description="Run one RGS API operation.")
    parser.add_argument("--session-id", dest="sessionId")
    parser.add_argument("--host", dest="serviceHost", help="RGS host, without scheme")
    parser.add_argument("--lang", dest="locale")
    parser.add_argument("--currency")
    parser.add_argument("--launch-url", dest="launchUrl", help="game launch URL to read parameters from")
    parser.add_argument("--env-file", dest="envFile", default=DEFAULT_ENV_FILE)
    parser.add_argument("--no-env", dest="useEnv", action="store_false", help="ignore RGS_* settings")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT)
    parser.add_argument("--log-level", dest="logLevel", default="INFO")

    sub = parser.add_subparsers(dest="operation", required=True)

    sub.add_parser(Operation.AUTHENTICATE.value, help="validate the session")
    sub.add_parser(Operation.BALANCE.value, help="fetch the player balance")

    play = sub.add_parser(Operation.PLAY.value, aliases=["bet"], help="place a bet")
    play.add_argument("--amount", help="bet in currency units, e.g. 1.00")
    play.add_argument("--mode")
    play.add_argument("--meta", type=_jsonArg)

    sub.add_parser(Operation.END_ROUND.value, help="end the active round")

    event = sub.add_parser(Operation.EVENT.value, help="record bet progress")
    event.add_argument("--index", dest="eventIndex", type=int)

    action = sub.add_parser(Operation.ACTION.value, help="send an additional bet action")
    action.add_argument("--action")
    action.add_argument("--meta", type=_jsonArg)

    start = sub.add_parser(Operation.SESSION_START.value, help="start an operator session")
    start.add_argument("--token")
    start.add_argument("--balance", type=int, help="starting balance in API units")
    start.add_argument("--set-balance", dest="setBalance", action="store_true", default=None)

    search = sub.add_parser(Operation.SEARCH.value, aliases=["force-result"], help="search outcomes")
    search.add_argument("--mode")
    search.add_argument("--book-id", dest="bookID", type=int)
    search.add_argument("--kind", type=int)
    search.add_argument("--symbol")
    search.add_argument("--has-wild", dest="hasWild", action="store_true", default=None)
    search.add_argument("--wild-mult", dest="wildMult", type=float)
    search.add_argument("--game-type", dest="gameType")

    return parser


ALIASES = {"bet": Operation.PLAY, "force-result": Operation.SEARCH}


def argsFor(ns: argparse.Namespace) -> tuple[Operation, CallArgs]:
    """Convert parsed command line arguments into an operation and its args."""
    op = ALIASES.get(ns.operation) or Operation(ns.operation)
    session = dict(
        sessionId=ns.sessionId, serviceHost=ns.serviceHost, locale=ns.locale, currency=ns.currency
    )

    match op:
        case Operation.AUTHENTICATE:
            return op, AuthenticateArgs(**session)
        case Operation.BALANCE:
            return op, BalanceArgs(**session)
        case Operation.PLAY:
            return op, PlayArgs(**session, amount=ns.amount, mode=ns.mode, meta=ns.meta)
        case Operation.END_ROUND:
            return op, EndRoundArgs(**session)
        case Operation.EVENT:
            return op, EventArgs(**session, eventIndex=ns.eventIndex)
        case Operation.ACTION:
            return op, ActionArgs(**session, action=ns.action, meta=ns.meta)
        case Operation.SESSION_START:
            balance = None
            if ns.balance is not None:
                balance = {"amount": ns.balance}

            return op, SessionStartArgs(
                **session, token=ns.token, balance=balance, setBalance=ns.setBalance
            )
        case Operation.SEARCH:
            criteria = SearchCriteria(
                bookID=ns.bookID,
                kind=ns.kind,
                symbol=ns.symbol,
                hasWild=ns.hasWild,
                wildMult=ns.wildMult,
                gameType=ns.gameType,
            )
            return op, SearchArgs(**session, mode=ns.mode, search=criteria)

    raise AssertionError(f"Unhandled operation: {op}")


def ambientFor(ns: argparse.Namespace) -> dict[str, str]:
    ambient: dict[str, str] = {}
    if ns.useEnv:
        ambient |= ambientFromEnv(ns.envFile)

    if ns.launchUrl:
        ambient |= ambientFromUrl(ns.launchUrl)

    return ambient


async def run(ns: argparse.Namespace, transport: Transport | None = None) -> int:
    op, args = argsFor(ns)
    client = RGSClient(transport or HttpxTransport(timeout=ns.timeout), ambient=ambientFor(ns))

    try:
        found = await client.dispatch(op, args)
    except RGSError as e:
        logger.error("[{}] {}", op.value, e)
        return EXIT_FAILED
    except httpx.RequestError as e:
        logger.error("[{}] Request failed: {}", op.value, e)
        return EXIT_FAILED

    print(orjson.dumps(found, option=orjson.OPT_INDENT_2).decode())

    code = statusCodeOf(found)
    if code is None or code is StatusCode.SUCCESS:
        return EXIT_OK

    description = code.description if isinstance(code, StatusCode) else "unrecognized status"
    logger.warning("[{}] {}: {}", op.value, getattr(code, "value", code), description)
    return EXIT_DOMAIN_STATUS


def main(argv: list[str] | None = None) -> int:
    ns = buildParser().parse_args(argv)
    setupLogging(ns.logLevel)
    return asyncio.run(run(ns))
