"""
Logging setup for Mailhub: structlog rendering on top of stdlib logging.

Modules keep using logging.getLogger(__name__); their records are routed
through structlog's ProcessorFormatter so the API and the workspace wrappers
share one output format. Console output by default, one JSON object per line
when MAILHUB_LOG_FORMAT=json.

Google access tokens travel in Authorization headers and occasionally end up
in exception text from aiohttp. The redaction step masks them before
rendering.

Usage:
    from mailhub.logging_config import setup_logging
    setup_logging()
"""

from __future__ import annotations

import logging
import os
import re
import sys
from typing import Any

import structlog

from mailhub import __version__


_BEARER_RE = re.compile(r"(Bearer\s+)[A-Za-z0-9._\-]+")
_OAUTH_TOKEN_RE = re.compile(r"ya29\.[A-Za-z0-9._\-]+")

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("aiohttp.access", "httpx", "anthropic")


def redact_tokens(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask bearer and Google OAuth access tokens in string values."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            value = _BEARER_RE.sub(r"\1[REDACTED]", value)
            event_dict[key] = _OAUTH_TOKEN_RE.sub("[REDACTED]", value)
    return event_dict


def add_service_info(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", "mailhub")
    event_dict.setdefault("version", __version__)
    return event_dict


def _shared_processors(json_output: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        redact_tokens,
    ]
    if json_output:
        processors.append(add_service_info)
    return processors


def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """
    Install a single stderr handler on the root logger.

    Args:
        level: Log level name (defaults to MAILHUB_LOG_LEVEL, then INFO)
        json_output: JSON lines instead of console output (defaults to
            MAILHUB_LOG_FORMAT == "json")
    """
    level = level or os.environ.get("MAILHUB_LOG_LEVEL", "INFO")
    if json_output is None:
        json_output = os.environ.get("MAILHUB_LOG_FORMAT", "").lower() == "json"

    shared = _shared_processors(json_output)
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging"]
