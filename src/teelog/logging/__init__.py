"""
Caller-aware logging facade.

Every record is rendered once and written to a fixed set of sinks:
- console: shared, lock-serialized stdout (or any text stream)
- file: plain append-mode file
- rotating file: size-rotated file with backup count, age and compression policy

Design Pattern: Strategy Pattern for sink abstraction, tee for fan-out.
Library: structlog for the processor pipeline, orjson for JSON records.
"""

from .core import (
    CALLER_SKIP,
    LogFacade,
    configure_logging,
    create_logger,
    debug,
    error,
    get_logger,
    info,
    new_logger,
    warn,
)
from .formatters import JsonFormatter, Renderer, TextFormatter
from .sinks import BaseSink, ConsoleSink, FileSink, RotatingFileSink, default_console
from .types import FileTarget, NoFile, PlainFile, RotatingFile, SinkConfig

__all__ = [
    "CALLER_SKIP",
    "BaseSink",
    "ConsoleSink",
    "FileSink",
    "FileTarget",
    "JsonFormatter",
    "LogFacade",
    "NoFile",
    "PlainFile",
    "Renderer",
    "RotatingFile",
    "RotatingFileSink",
    "SinkConfig",
    "TextFormatter",
    "configure_logging",
    "create_logger",
    "debug",
    "default_console",
    "error",
    "get_logger",
    "info",
    "new_logger",
    "warn",
]
