"""Structured logging setup for Scrubby.

Records are JSON lines carrying ``ts``, ``level``, ``component`` and ``msg``
plus whatever context the caller bound. They are written to stderr because
stdout carries sanitized text and reports. String context values are passed
through the redactor before rendering, so a clipboard fragment that slips
into a log field is written out as placeholders.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import IO, Dict, MutableMapping

import structlog

from .redactor import sanitize

LEVEL_ENV = "SCRUBBY_LOG_LEVEL"
_DEFAULT_LEVEL = "warning"
_LEVELS: Dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}
_UNSCRUBBED = frozenset({"ts", "level", "component", "msg", "exception", "stack"})

EventDict = MutableMapping[str, object]


def resolve_level(level: str | None = None) -> int:
    name = (level or os.environ.get(LEVEL_ENV) or _DEFAULT_LEVEL).strip().lower()
    return _LEVELS.get(name, logging.WARNING)


def configure_logging(level: str | None = None, *, stream: IO[str] | None = None) -> None:
    """Route structlog through stdlib logging at ``level``.

    ``level`` falls back to ``$SCRUBBY_LOG_LEVEL`` and then to ``warning``.
    """
    numeric_level = resolve_level(level)
    logging.basicConfig(
        level=numeric_level,
        handlers=[logging.StreamHandler(stream or sys.stderr)],
        format="%(message)s",
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.stdlib.add_log_level,
            _add_component,
            _event_as_msg,
            _scrub_context,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )


def _add_component(logger: logging.Logger, _name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("component", getattr(logger, "name", None) or "scrubby")
    return event_dict


def _event_as_msg(_logger: logging.Logger, _name: str, event_dict: EventDict) -> EventDict:
    if "msg" not in event_dict:
        event_dict["msg"] = event_dict.pop("event", "")
    return event_dict


def _scrub_context(_logger: logging.Logger, _name: str, event_dict: EventDict) -> EventDict:
    for key, value in list(event_dict.items()):
        if key in _UNSCRUBBED or not isinstance(value, str):
            continue
        event_dict[key] = sanitize(value).text
    return event_dict


__all__ = ["LEVEL_ENV", "configure_logging", "resolve_level"]
