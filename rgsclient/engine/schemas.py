"""Response shapes returned by the RGS API.

These are declarations only: the client returns decoded JSON bodies unchanged,
typed as the matching ``TypedDict``. Amounts are in API integer units
(see ``amounts.API_AMOUNT_MULTIPLIER``).
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any, Final, NotRequired, TypedDict


class StatusCode(str, enum.Enum):
    """In-band status codes carried under ``status.statusCode``."""

    SUCCESS = "SUCCESS"
    ERR_SCR = "ERR_SCR"
    ERR_OPT = "ERR_OPT"
    ERR_IPB = "ERR_IPB"
    ERR_IS = "ERR_IS"
    ERR_ATE = "ERR_ATE"
    ERR_GLE = "ERR_GLE"
    ERR_BNF = "ERR_BNF"
    ERR_BE = "ERR_BE"
    ERR_UE = "ERR_UE"
    ERR_GE = "ERR_GE"

    @property
    def description(self) -> str:
        return STATUS_DESCRIPTIONS[self]


STATUS_DESCRIPTIONS: Final = {
    StatusCode.SUCCESS: "Success",
    StatusCode.ERR_SCR: "Invalid secret",
    StatusCode.ERR_OPT: "Invalid operator ID",
    StatusCode.ERR_IPB: "Insufficient player balance",
    StatusCode.ERR_IS: "Invalid session token or session timeout",
    StatusCode.ERR_ATE: "Failed user authentication or authentication token expired",
    StatusCode.ERR_GLE: "Gambling limits exceeded",
    StatusCode.ERR_BNF: "Bet not found",
    StatusCode.ERR_BE: "Player already has an active bet",
    StatusCode.ERR_UE: "General server error (unknown error)",
    StatusCode.ERR_GE: "General server error (without rollback)",
}


class StatusObject(TypedDict, total=False):
    statusCode: str
    statusMessage: str


class BalanceObject(TypedDict):
    amount: int
    currency: str


class RoundDetail(TypedDict, total=False):
    roundID: int
    amount: int
    payout: float
    payoutMultiplier: float
    active: bool
    mode: str
    event: str
    # game-defined; usually a list of book events
    state: list[Any]


class BetModeConfig(TypedDict, total=False):
    mode: str
    costMultiplier: float
    feature: bool


class Jurisdiction(TypedDict):
    socialCasino: bool
    disabledFullscreen: bool
    disabledTurbo: bool
    disabledSuperTurbo: bool
    disabledAutoplay: bool
    disabledSlamstop: bool
    disabledSpacebar: bool
    disabledBuyFeature: bool
    displayNetPosition: bool
    displayRTP: bool
    displaySessionTimer: bool
    minimumRoundDuration: int


class ConfigObject(TypedDict):
    jurisdiction: Jurisdiction
    betLevels: NotRequired[list[int]]
    betModes: NotRequired[dict[str, BetModeConfig]]
    defaultBetLevel: NotRequired[int]


class AuthenticateResponse(TypedDict, total=False):
    status: StatusObject
    balance: BalanceObject
    round: RoundDetail
    config: ConfigObject
    error: Any
    message: str


class BalanceResponse(TypedDict, total=False):
    balance: BalanceObject
    status: StatusObject
    error: Any


class PlayResponse(TypedDict, total=False):
    status: StatusObject
    balance: BalanceObject
    round: RoundDetail
    error: Any


class EndRoundResponse(TypedDict, total=False):
    balance: BalanceObject
    status: StatusObject
    error: Any


class EventResponse(TypedDict, total=False):
    event: str
    status: StatusObject
    error: Any


class ActionResponse(TypedDict, total=False):
    status: StatusObject
    balance: BalanceObject
    action: RoundDetail
    error: Any


class SessionStartResponse(TypedDict, total=False):
    # game URL to load in an iframe
    url: str
    error: Any


class SearchResponse(TypedDict, total=False):
    balance: BalanceObject
    round: RoundDetail
    error: Any


def statusCodeOf(response: Mapping[str, Any]) -> StatusCode | str | None:
    """Return the in-band status code of a response, if it carries one.

    Known codes come back as StatusCode members; codes this client doesn't
    know yet are returned as the raw string so callers can still see them.
    """
    status = response.get("status")
    if not isinstance(status, Mapping):
        return None

    code = status.get("statusCode")
    if code is None:
        return None

    try:
        return StatusCode(code)
    except ValueError:
        return code


def isSuccess(response: Mapping[str, Any]) -> bool:
    """True only when the response explicitly reports SUCCESS."""
    return statusCodeOf(response) is StatusCode.SUCCESS
