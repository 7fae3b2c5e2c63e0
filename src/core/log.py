"""Logging setup shared by the API and the scripts."""

import logging
import sys

from core.config import LOG_LEVEL

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure root logging once. Later calls are no-ops."""
    global _configured
    if _configured:
        return

    level_name = (level or LOG_LEVEL or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # Reduce noise from third-party libs
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("openpyxl").setLevel(logging.WARNING)
    _configured = True
