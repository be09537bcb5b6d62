"""
Logging setup.

One stdout handler on the root logger; every line carries the request's
correlation id and, during an analysis, its session id.

Dependencies: logging (stdlib), visual_rag.observability.correlation
System role: Centralized logging configuration
"""

import logging
import sys

from visual_rag.observability.correlation import RequestContextFilter

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(correlation_id)s|%(session_id)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# SDK and driver loggers that are chatty at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "sqlalchemy.engine", "asyncpg")


def configure_logging(level: str = "INFO") -> None:
    """
    Install the stdout handler, replacing handlers from earlier calls.

    Args:
        level: Root level name; unknown names fall back to INFO
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root.addHandler(handler)
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
