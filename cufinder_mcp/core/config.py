# =============================================================================
# core/config.py  —  Gateway Settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the handful of values the gateway needs (API key, base URL, log
#   level) from the environment and freezes them into a Settings object.
#   The Settings object is built once and handed to the HTTP client; nothing
#   else reads the environment.
#
# ENVIRONMENT VARIABLES:
#   CUFINDER_API_KEY      Static credential sent as the x-api-key header
#   CUFINDER_BASE_URL     Provider base URL (default: https://api.cufinder.io/v2)
#   CUFINDER_LOG_LEVEL    Logging level for the server (default: INFO)
#                         An unknown level name falls back to INFO.
#
#   A .env file in the working directory is loaded first, so local
#   development doesn't need exported variables.
#
# TIMEOUT:
#   The provider timeout is fixed at 60 seconds and is not configurable.
# =============================================================================

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.cufinder.io/v2"
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_USER_AGENT = "cufinder-mcp/1.0.0"


@dataclass(frozen=True)
class Settings:
    """Process-wide, read-only configuration for the provider client."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    api_key = os.getenv("CUFINDER_API_KEY", "").strip()
    base_url = os.getenv("CUFINDER_BASE_URL", "").strip().rstrip("/") or DEFAULT_BASE_URL
    log_level = os.getenv("CUFINDER_LOG_LEVEL", "INFO").strip().upper() or "INFO"

    if not api_key:
        logger.warning("CUFINDER_API_KEY is not configured; provider requests will be rejected.")
    if not isinstance(logging.getLevelName(log_level), int):
        logger.warning("CUFINDER_LOG_LEVEL=%s is not a logging level; using INFO.", log_level)
        log_level = "INFO"

    return Settings(
        api_key=api_key,
        base_url=base_url,
        log_level=log_level,
    )
