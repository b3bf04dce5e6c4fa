"""
Configuration helpers for the Bounty Board MCP server.

This module centralizes base URL selection, the HTTP timeout, and logging
settings. Everything is read from the environment once at import time and
collected in a dataclass so callers (and tests) can build their own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Default connection settings
DEFAULT_BASE_URL = os.getenv("BOUNTY_BOARD_BASE_URL", "https://bounty.owockibot.xyz")


def _load_timeout() -> float:
    raw_timeout = os.getenv("BOUNTY_BOARD_HTTP_TIMEOUT")
    if raw_timeout:
        try:
            return float(raw_timeout)
        except ValueError:
            return 10.0
    return 10.0


DEFAULT_TIMEOUT = _load_timeout()

LOG_LEVEL = os.getenv("BOUNTY_BOARD_MCP_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("BOUNTY_BOARD_MCP_LOG_FORMAT", "json")  # json or plain

MCP_SERVER_NAME = "bounty-board"
MCP_SERVER_VERSION = "1.0.0"


@dataclass(slots=True)
class BountyBoardConfig:
    """Runtime configuration for bounty board access."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT


default_config = BountyBoardConfig()
