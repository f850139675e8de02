from __future__ import annotations

import os


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


BASE_PATH = "https://marketcap.backend.currency.com"
API_NAME = "/api"
API_VERSION = "/v1"

MCAP_BASE_URL = _env_str("MCAP_BASE_URL", BASE_PATH + API_NAME + API_VERSION)
MCAP_USER_AGENT = os.getenv("MCAP_USER_AGENT")
MCAP_LOG_LEVEL = _env_str("MCAP_LOG_LEVEL", "INFO")
# Level for request/response lines from mcap.transport, independent of MCAP_LOG_LEVEL.
MCAP_HTTP_LOG_LEVEL = _env_str("MCAP_HTTP_LOG_LEVEL", "WARNING")
# Empty disables the daily log file.
MCAP_LOG_DIR = os.getenv("MCAP_LOG_DIR", "logs")

# Default number of candles the CLI asks for when LIMIT is unset.
CLI_DEFAULT_LIMIT = _env_int("MCAP_CLI_DEFAULT_LIMIT", 100)
