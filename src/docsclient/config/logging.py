"""structlog output for the docsclient loggers.

docsclient is a library, so configuration never touches the root logger or
handlers the host application installed. :func:`configure_logging` attaches
one structlog-formatted handler to the ``docsclient`` logger and to the HTTP
client loggers used by the remote backend, and replaces it on later calls.

Two renderers:
- console (default): key/value lines, colored when the stream is a TTY
- JSON (``log_json=True``): one object per line, tracebacks as dicts

Modules keep logging through ``logging.getLogger(__name__)``; stdlib records
pass through ``foreign_pre_chain`` and gain the same fields as structlog
events (level, logger name, timestamp).
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

PACKAGE_LOGGER = "docsclient"

# Loggers of the remote backend's HTTP stack; only warnings get through.
HTTP_LOGGERS = ("httpx", "httpcore")

_HANDLER_NAME = "docsclient-structlog"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderers(log_json: bool, stream: TextIO) -> list[structlog.types.Processor]:
    if log_json:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    colors = hasattr(stream, "isatty") and stream.isatty()
    return [structlog.dev.ConsoleRenderer(colors=colors)]


def _install(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    logger.handlers = [h for h in logger.handlers if h.get_name() != _HANDLER_NAME]
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route docsclient log records through structlog.

    Args:
        verbose: DEBUG for the ``docsclient`` loggers; WARNING otherwise.
        log_json: Render JSON lines instead of console lines.
        stream: Output stream, ``sys.stderr`` when omitted.
    """
    out = stream if stream is not None else sys.stderr
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(out)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderers(log_json, out),
            ],
        )
    )

    _install(logging.getLogger(PACKAGE_LOGGER), handler, logging.DEBUG if verbose else logging.WARNING)
    for name in HTTP_LOGGERS:
        _install(logging.getLogger(name), handler, logging.WARNING)
