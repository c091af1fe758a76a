"""Logging configuration.

Everything is written to STDERR: asdf reads plugin results from STDOUT.
"""
import datetime
import json
import logging
import sys
from typing import Any, List

import structlog
from structlog.types import EventDict, Processor

DEFAULT_LOG_LEVEL = "INFO"
CALLER_KEYS = ("module", "line", "file")


def add_timestamp(_, __, event_dict: EventDict) -> EventDict:
    """Add ISO timestamp to the event dict."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.datetime.now(datetime.timezone.utc).isoformat()
    return event_dict


def unpack_event(_, __, event_dict: EventDict) -> EventDict:
    """Flatten ``logger.info({"event": ..., **data})`` style calls."""
    event = event_dict.get("event")
    if isinstance(event, dict):
        data = dict(event)
        event_dict["event"] = data.pop("event", "")
        for key, value in data.items():
            event_dict.setdefault(key, value)
    return event_dict


class CompactJSONRenderer:
    """Single-line JSON renderer with minimal output."""
    def __call__(self, _: Any, __: str, event_dict: EventDict) -> str:
        items = {
            "ts": event_dict.pop("timestamp", None),
            "lvl": event_dict.pop("level", "???"),
            "msg": event_dict.pop("event", ""),
            **{k: v for k, v in event_dict.items() if k in CALLER_KEYS}
        }
        if other := {k: v for k, v in event_dict.items() if k not in CALLER_KEYS}:
            items["data"] = other
        return json.dumps(items, separators=(",", ":"), default=str)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structured logging for the plugin.

    - TTY: colored console output
    - otherwise: one compact JSON object per line
    """
    level = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level, logging.INFO),
        force=True,
    )

    shared_processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        unpack_event,
        structlog.stdlib.add_log_level,
    ]

    if sys.stderr.isatty():
        renderer_processors: List[Processor] = [
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        renderer_processors = [
            add_timestamp,
            structlog.processors.CallsiteParameterAdder(
                {
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.FILENAME,
                }
            ),
            rename_callsite,
            CompactJSONRenderer(),
        ]

    structlog.configure(
        processors=shared_processors + renderer_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def rename_callsite(_, __, event_dict: EventDict) -> EventDict:
    """Map structlog callsite keys onto the compact renderer's names."""
    if "func_name" in event_dict:
        event_dict["module"] = event_dict.pop("func_name")
    if "lineno" in event_dict:
        event_dict["line"] = event_dict.pop("lineno")
    if "filename" in event_dict:
        event_dict["file"] = event_dict.pop("filename")
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
