"""Typed asyncio client for the Stake Engine RGS (Remote Gaming Server) API.

Library use is silent: loguru output from this package is disabled on import.
Call ``logger.enable("rgsclient")`` (the CLI does) to see request logging.
"""

from loguru import logger

from rgsclient.engine import *  # noqa: F401,F403
from rgsclient.engine import __all__ as _engine_all

__version__ = "1.0.0"

metadata = {
    "name": "rgsclient",
    "version": __version__,
    "description": "Typed asyncio client for RGS API communication",
}

logger.disable("rgsclient")

__all__ = [*_engine_all, "__version__", "metadata"]
