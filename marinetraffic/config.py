# =============================================================================
# marinetraffic/config.py  —  Settings from the Environment
# =============================================================================
#
# All configuration comes from environment variables (main.py loads a .env
# file first, so a local .env works too):
#
#   MARINETRAFFIC_API_KEY    → the API credential (required to make calls)
#   MARINETRAFFIC_BASE_URL   → override the API root (default: production)
#   MARINETRAFFIC_TIMEOUT    → per-request timeout in seconds (default: 10)
#   MARINETRAFFIC_LOG_LEVEL  → logging level for the server (default: INFO)
#
# Settings are read ONCE at startup and never change afterwards.  The API key
# is allowed to be missing here: the client refuses to be built without it,
# and that's where the MissingCredential error belongs.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BASE_URL = "https://services.marinetraffic.com/api"
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the current environment."""
    return Settings(
        api_key=os.environ.get("MARINETRAFFIC_API_KEY") or None,
        base_url=os.environ.get("MARINETRAFFIC_BASE_URL", DEFAULT_BASE_URL),
        timeout=float(os.environ.get("MARINETRAFFIC_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)),
        log_level=os.environ.get("MARINETRAFFIC_LOG_LEVEL", "INFO").upper(),
    )
