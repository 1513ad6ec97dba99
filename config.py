"""
Server configuration.

Everything the calculator server needs to know about itself lives here:
service identity, the widget template URI and the listening address.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv

# Load .env early (if present) so downstream getenv lookups work.
load_dotenv(override=False)

logger = logging.getLogger(__name__)

SERVICE_NAME = "calculator-mcp"
SERVICE_VERSION = "1.0.0"
SERVICE_DESCRIPTION = "MCP calculator widget with Apps SDK integration"

TEMPLATE_URI = "ui://widgets/calculator"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def get_port() -> int:
    raw = os.getenv("PORT")
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric PORT=%r, using %d", raw, DEFAULT_PORT)
        return DEFAULT_PORT


def get_host() -> str:
    return os.getenv("HOST", DEFAULT_HOST)


def iso_timestamp() -> str:
    """Current UTC time as JavaScript's toISOString() prints it (millisecond precision, Z suffix)."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for the server processes.

    Args:
        level: Log level name. Falls back to LOG_LEVEL, then INFO.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(levelname)s: %(name)s: %(message)s",
    )

    # Per-request access lines drown out the dispatcher's own logging.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
