"""
Record renderers.

A renderer turns one processed event dict into the line written to every sink.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

import orjson
from structlog.typing import EventDict

from ..caller import UNKNOWN_FRAME, Frame

Renderer = Callable[[EventDict], str]

DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_SEPARATOR = "\t"

LEVEL_TAGS = {
    "info": "[INFO]",
    "warning": "[WARN]",
    "error": "[ERROR]",
}


def level_tag(level: str) -> str:
    """info -> [INFO], warning -> [WARN]; anything else -> [LEVEL]."""
    return LEVEL_TAGS.get(level.lower(), f"[{level.upper()}]")


def caller_tag(frame: Frame) -> str:
    return f"{frame.short_file}:{frame.line}"


def _timestamp(event_dict: EventDict) -> datetime:
    ts = event_dict.get("timestamp")
    if isinstance(ts, datetime):
        return ts
    return datetime.now().astimezone().replace(microsecond=0)


class TextFormatter:
    """Human-readable single-line layout: timestamp, level tag, caller, message."""

    def __init__(
        self,
        *,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        self.timestamp_format = timestamp_format
        self.separator = separator

    def format(self, event_dict: EventDict) -> str:
        frame = event_dict.get("caller", UNKNOWN_FRAME)
        return self.separator.join(
            [
                _timestamp(event_dict).strftime(self.timestamp_format),
                level_tag(event_dict.get("level", "info")),
                caller_tag(frame),
                str(event_dict.get("event", "")),
            ]
        )

    __call__ = format


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default).decode()


class JsonFormatter:
    """One JSON object per line, for machine-read sinks."""

    def format(self, event_dict: EventDict) -> str:
        frame = event_dict.get("caller", UNKNOWN_FRAME)
        return orjson_dumps(
            {
                "timestamp": _timestamp(event_dict),
                "level": str(event_dict.get("level", "info")).upper(),
                "caller": caller_tag(frame),
                "function": frame.func,
                "message": str(event_dict.get("event", "")),
            }
        )

    __call__ = format
