from __future__ import annotations

import logging
import sys

from testserver_bdd.core.logger import LOG_FORMATS, configure_structlog

# Request-level chatter stays at WARNING or above.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO", log_format: str = "json") -> None:
    log_level = getattr(logging, str(level or "INFO").upper(), logging.INFO)
    fmt = str(log_format or "json").strip().lower()
    if fmt not in LOG_FORMATS:
        fmt = "json"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
    configure_structlog(fmt)
