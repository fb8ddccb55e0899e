from __future__ import annotations

"""
Structured logging setup for the resolution SDK.

The library itself only emits debug-level events through **structlog**; it never
configures handlers on import. Applications (or tests) that want to see those
events call `setup_logging()` once at process start.

Quick start
-----------
    from resolution.logging import setup_logging, get_logger

    setup_logging(level="DEBUG", log_format="console")
    log = get_logger(__name__)
    log.debug("route_selected", domain="brad.crypto", service="CNS")

Environment
-----------
- RESOLUTION_LOG_LEVEL: one of DEBUG, INFO, WARNING, ERROR (default: WARNING)
- RESOLUTION_LOG_FORMAT: "json" (default) or "console"
"""

import logging
import os
from typing import Any, Dict, Iterable, Optional

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import JSONRenderer


# ------------------------------ Redaction ------------------------------------


REDACT_KEYS = {"authorization", "token", "api_key", "project_secret"}


def _redact_secrets(_: logging.Logger, __: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Processor that redacts sensitive values for well-known keys.
    """
    for k in list(event_dict.keys()):
        if k.lower() in REDACT_KEYS and event_dict[k] is not None:
            event_dict[k] = "***"
    return event_dict


# ------------------------------ Setup ----------------------------------------


def _base_processors() -> Iterable:
    yield structlog.stdlib.add_log_level
    yield structlog.processors.TimeStamper(fmt="iso", utc=True)
    yield merge_contextvars
    yield structlog.processors.StackInfoRenderer()
    yield structlog.processors.format_exc_info
    yield _redact_secrets
    yield structlog.processors.UnicodeDecoder()


def setup_logging(
    *,
    level: Optional[str | int] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Configure structlog + stdlib logging. Safe to call more than once.

    Parameters
    ----------
    level: str|int
        Log level (e.g., "DEBUG"). Defaults to $RESOLUTION_LOG_LEVEL or WARNING.
    log_format: str
        "json" (default) or "console". Defaults to $RESOLUTION_LOG_FORMAT.
    """
    env_level = os.getenv("RESOLUTION_LOG_LEVEL", "").upper() or None
    env_format = os.getenv("RESOLUTION_LOG_FORMAT", "").lower() or None

    level = level or env_level or "WARNING"
    log_format = (log_format or env_format or "json").lower()

    processors = list(_base_processors())

    if log_format == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=True, sort_keys=False)
    else:
        renderer = JSONRenderer(sort_keys=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=[structlog.stdlib.add_log_level, *processors],
        )
    )

    root = logging.getLogger("resolution")
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.propagate = False

    logging.getLogger("httpcore").setLevel(os.getenv("RESOLUTION_LOG_LEVEL_HTTPCORE", "WARNING"))
    logging.getLogger("httpx").setLevel(os.getenv("RESOLUTION_LOG_LEVEL_HTTPX", "WARNING"))


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Return a structlog logger wrapping the stdlib logger `name`.

    Until `setup_logging()` runs, events go through stdlib logging unconfigured,
    so debug output from the library stays silent by default.
    """
    return structlog.wrap_logger(logging.getLogger(name or "resolution"))


__all__ = ["setup_logging", "get_logger"]
