"""Session configuration resolution.

A game client is launched with its session parameters in the launch URL's
query string (``?sessionID=...&rgs_url=...&lang=en&currency=USD``). Every
operation needs some of those values, and callers may also pass them directly.

``resolve()`` merges the two: explicit values win, the ambient mapping fills
the gaps. The ambient mapping is always passed in, so any dict can stand in
for the launch context in tests.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Final, TypeAlias
from urllib.parse import parse_qsl, urlsplit

from dotenv import dotenv_values

from rgsclient.engine.errors import MissingConfig

AmbientSource: TypeAlias = Mapping[str, str | None]

# ambient key names, matching the launch URL query parameters
AMBIENT_SESSION_ID: Final = "sessionID"
AMBIENT_SERVICE_HOST: Final = "rgs_url"
AMBIENT_LOCALE: Final = "lang"
AMBIENT_CURRENCY: Final = "currency"

DEFAULT_LOCALE: Final = "en"
DEFAULT_CURRENCY: Final = "USD"

# environment variable -> ambient key
ENV_KEYS: Final = {
    "RGS_SESSION_ID": AMBIENT_SESSION_ID,
    "RGS_URL": AMBIENT_SERVICE_HOST,
    "RGS_LANG": AMBIENT_LOCALE,
    "RGS_CURRENCY": AMBIENT_CURRENCY,
}

DEFAULT_ENV_FILE: Final = ".env.rgsclient"


@dataclasses.dataclass(slots=True, frozen=True)
class PartialConfig:
    """Session parameters supplied explicitly by a caller.

    Any field left as None (or empty) is looked up in the ambient source.
    """

    sessionId: str | None = None
    serviceHost: str | None = None
    locale: str | None = None
    currency: str | None = None


@dataclasses.dataclass(slots=True, frozen=True)
class SessionContext:
    """Fully resolved session parameters for a single call."""

    sessionId: str
    serviceHost: str
    locale: str
    currency: str


def _pick(explicit: str | None, ambient: AmbientSource, key: str) -> str | None:
    # empty strings count as "not provided" for both sources
    if explicit:
        return explicit

    return ambient.get(key) or None


def resolve(
    explicit: PartialConfig | None,
    ambient: AmbientSource | None = None,
    *,
    requireSession: bool = True,
) -> SessionContext:
    """Build a SessionContext from explicit values, falling back to ``ambient``.

    Raises MissingConfig if serviceHost (or sessionId, when ``requireSession``)
    is still missing after both sources are consulted. Locale and currency
    fall back to "en" and "USD".

    When ``requireSession`` is False a missing sessionId resolves to "".
    """
    explicit = explicit or PartialConfig()
    ambient = ambient or {}

    sessionId = _pick(explicit.sessionId, ambient, AMBIENT_SESSION_ID)
    serviceHost = _pick(explicit.serviceHost, ambient, AMBIENT_SERVICE_HOST)
    locale = _pick(explicit.locale, ambient, AMBIENT_LOCALE) or DEFAULT_LOCALE
    currency = _pick(explicit.currency, ambient, AMBIENT_CURRENCY) or DEFAULT_CURRENCY

    if requireSession and not sessionId:
        raise MissingConfig("sessionId")

    if not serviceHost:
        raise MissingConfig("serviceHost")

    return SessionContext(
        sessionId=sessionId or "",
        serviceHost=serviceHost,
        locale=locale,
        currency=currency,
    )


def ambientFromUrl(url: str) -> dict[str, str]:
    """Extract the ambient mapping from a game launch URL.

    Accepts a full URL or just its query string (with or without the leading '?').
    Repeated parameters keep their first value.
    """
    query = urlsplit(url).query if "://" in url else url.lstrip("?")

    found: dict[str, str] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        found.setdefault(key, value)

    return found


def ambientFromEnv(
    envFile: str | os.PathLike | None = DEFAULT_ENV_FILE,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Build the ambient mapping from RGS_* settings.

    Values in the process environment override values in ``envFile``.
    A missing envFile is not an error.
    """
    environ = os.environ if environ is None else environ

    config = {**(dotenv_values(envFile) if envFile else {}), **environ}

    return {key: config[env] for env, key in ENV_KEYS.items() if config.get(env)}  # type: ignore
