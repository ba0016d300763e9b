"""
Logging helpers.

`setup_logging` is called once from the application entrypoint; every other
module just does `logger = get_logger(__name__)`.
"""

import logging
import sys
from typing import Optional

from jobtracker.config import Config

_configured = False


def setup_logging(config: Optional[Config] = None) -> None:
    """Configure the root logger from LOG_LEVEL / LOG_FORMAT."""
    global _configured
    if _configured:
        return

    level_name = (config.LOG_LEVEL if config else "INFO").upper()
    log_format = config.LOG_FORMAT if config else "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(log_format))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, level_name, logging.INFO))

    # httpx logs every request at INFO, which includes the Gemini URL
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
