"""
Core facade construction and emission logic.
"""

from __future__ import annotations

import logging
import warnings
from datetime import datetime
from typing import TYPE_CHECKING, Any, Iterable

import structlog
from structlog.typing import EventDict, WrappedLogger

from ..caller import here
from .formatters import JsonFormatter, Renderer, TextFormatter
from .sinks import BaseSink, ConsoleSink, FileSink, RotatingFileSink, default_console
from .types import FileTarget, NoFile, PlainFile, RotatingFile, SinkConfig

if TYPE_CHECKING:
    from ..config.logging import LoggingSettings

# 0: _log, 1: public level method (or module-level helper), 2: application call site
CALLER_SKIP = 2

MIN_LEVEL = logging.INFO

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


# =============================================================================
# Fan-out
# =============================================================================


class SinkTee:
    """Wrapped logger that hands each rendered line to every sink.

    structlog calls the method named after the level with the renderer's
    output; all of them fan out the same way.
    """

    def __init__(self, sinks: Iterable[BaseSink]):
        self.sinks = tuple(sinks)

    def msg(self, line: str) -> None:
        for sink in self.sinks:
            sink.emit(line)

    debug = info = warning = warn = error = critical = exception = fatal = msg


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp the event with local time at second precision."""
    event_dict["timestamp"] = datetime.now().astimezone().replace(microsecond=0)
    return event_dict


def _render_with(renderer: Renderer):
    def render(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        return renderer(event_dict)

    return render


# =============================================================================
# Facade
# =============================================================================


class LogFacade:
    """Caller-aware logger writing every record to a fixed set of sinks."""

    def __init__(self, sinks: Iterable[BaseSink], *, renderer: Renderer | None = None):
        self._tee = SinkTee(sinks)
        self.renderer = renderer or TextFormatter()
        self._logger = structlog.wrap_logger(
            self._tee,
            processors=[
                structlog.processors.add_log_level,
                add_timestamp,
                _render_with(self.renderer),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(MIN_LEVEL),
            context_class=dict,
        ).bind()

    @property
    def sinks(self) -> tuple[BaseSink, ...]:
        return self._tee.sinks

    def _log(self, method_name: str, msg: str) -> None:
        if _LEVELS[method_name] < MIN_LEVEL:
            return
        frame = here(CALLER_SKIP)
        getattr(self._logger, method_name)(msg, caller=frame)

    def info(self, msg: str) -> None:
        self._log("info", msg)

    def warn(self, msg: str) -> None:
        self._log("warning", msg)

    warning = warn

    def error(self, msg: str) -> None:
        self._log("error", msg)

    def debug(self, msg: str) -> None:
        self._log("debug", msg)

    def close(self) -> None:
        """Close file sinks. The console stays open for other facades."""
        for sink in self.sinks:
            sink.close()


# =============================================================================
# Construction
# =============================================================================


def _file_sink(target: FileTarget) -> BaseSink | None:
    if isinstance(target, NoFile):
        return None
    if isinstance(target, PlainFile):
        return FileSink(target.path)
    if isinstance(target, RotatingFile):
        return RotatingFileSink(target.config)
    raise TypeError(f"expected NoFile, PlainFile or RotatingFile, got {type(target).__name__}")


def create_logger(
    target: FileTarget | None = None,
    *,
    console: ConsoleSink | None = None,
    renderer: Renderer | None = None,
) -> LogFacade:
    """
    Build a facade writing to the console and, optionally, one file.

    Args:
        target: NoFile() (default), PlainFile(path) or RotatingFile(config)
        console: Console sink to share; defaults to the process stdout sink
        renderer: Callable rendering an event dict to one line

    Raises:
        ConfigurationError: rotating target without a filename
        LogIOError: log directory or file cannot be created
    """
    sinks: list[BaseSink] = [console or default_console()]
    file_sink = _file_sink(NoFile() if target is None else target)
    if file_sink is not None:
        sinks.append(file_sink)
    return LogFacade(sinks, renderer=renderer)


def new_logger(*options: Any, console: ConsoleSink | None = None, renderer: Renderer | None = None) -> LogFacade:
    """
    Build a facade from loosely typed options.

    A `str` selects a plain file (empty means console only) and a `SinkConfig`
    selects a rotating file. When both are given the SinkConfig wins. Options of
    any other type are reported with a RuntimeWarning and ignored.
    """
    path: str | None = None
    config: SinkConfig | None = None

    for option in options:
        if isinstance(option, str):
            path = option
        elif isinstance(option, SinkConfig):
            config = option
        else:
            warnings.warn(f"unknown logger option type: {type(option).__name__}", RuntimeWarning, stacklevel=2)

    target: FileTarget
    if config is not None:
        target = RotatingFile(config)
    elif path:
        target = PlainFile(path)
    else:
        target = NoFile()
    return create_logger(target, console=console, renderer=renderer)


# =============================================================================
# Process-wide Facade
# =============================================================================

_default: LogFacade | None = None


def configure_logging(settings: LoggingSettings | None = None, *, console: ConsoleSink | None = None) -> LogFacade:
    """
    Build the process-wide facade from settings and install it.

    Args:
        settings: Logging settings; defaults to `teelog.config.settings.logging`
        console: Console sink to share; defaults to the process stdout sink
    """
    global _default

    if settings is None:
        from ..config import settings as app_settings

        settings = app_settings.logging

    renderer: Renderer
    if settings.format == "json":
        renderer = JsonFormatter()
    else:
        renderer = TextFormatter(timestamp_format=settings.timestamp_format, separator=settings.separator)

    facade = create_logger(settings.to_target(), console=console, renderer=renderer)

    if _default is not None:
        _default.close()
    _default = facade
    return facade


def get_logger() -> LogFacade:
    """Return the process-wide facade, creating a console-only one on first use."""
    global _default

    if _default is None:
        _default = create_logger()
    return _default


def info(msg: str) -> None:
    get_logger()._log("info", msg)


def warn(msg: str) -> None:
    get_logger()._log("warning", msg)


def error(msg: str) -> None:
    get_logger()._log("error", msg)


def debug(msg: str) -> None:
    get_logger()._log("debug", msg)
