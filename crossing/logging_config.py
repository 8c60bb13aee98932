"""Root logger setup shared by the CLI and the API server."""

import logging
import os
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging; level defaults to $CROSSING_LOG_LEVEL or INFO."""

    if level is None:
        level = os.getenv("CROSSING_LOG_LEVEL", "INFO")
    level = level.upper()

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=DEFAULT_FORMAT)
    root_logger.setLevel(level)
