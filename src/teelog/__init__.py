"""
Teelog: caller-aware logging facade with console and rotating-file sinks.

Usage:
    import teelog

    log = teelog.new_logger(teelog.SinkConfig(filename="logs/app.log", max_size=10))
    log.info("service started")
"""

from .caller import UNKNOWN_FRAME, Frame, here, short_func_name
from .exceptions import ConfigurationError, LoggingError, LogIOError
from .logging import (
    ConsoleSink,
    JsonFormatter,
    LogFacade,
    NoFile,
    PlainFile,
    RotatingFile,
    SinkConfig,
    TextFormatter,
    configure_logging,
    create_logger,
    debug,
    error,
    get_logger,
    info,
    new_logger,
    warn,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "UNKNOWN_FRAME",
    "ConfigurationError",
    "ConsoleSink",
    "Frame",
    "JsonFormatter",
    "LogFacade",
    "LogIOError",
    "LoggingError",
    "NoFile",
    "PlainFile",
    "RotatingFile",
    "SinkConfig",
    "TextFormatter",
    "configure_logging",
    "create_logger",
    "debug",
    "error",
    "get_logger",
    "here",
    "info",
    "new_logger",
    "short_func_name",
    "warn",
]
