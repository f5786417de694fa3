"""
slpstatus - Settings

Centralized environment configuration for the decode service and CLI.
"""

import logging
import os

# =============================================================================
# API
# =============================================================================

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8080"))
API_TOKEN = os.getenv("API_TOKEN", "")
API_AUTH_DISABLED = os.getenv("API_AUTH_DISABLED", "").lower() in ("1", "true", "yes")

# =============================================================================
# Limits
# =============================================================================

# Protocol maximum for the status string; the decoder itself enforces no limit
MAX_STATUS_LENGTH = int(os.getenv("MAX_STATUS_LENGTH", "32767"))

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the service or CLI process."""
    effective = (level or LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, effective, logging.INFO), format=LOG_FORMAT)
