"""
Log sink abstractions and concrete implementations.
"""

from __future__ import annotations

import gzip
import logging
import os
import shutil
import sys
import threading
import time
from abc import ABC, abstractmethod
from functools import lru_cache
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import IO

from ..exceptions import ConfigurationError, LogIOError
from .types import SinkConfig

MEGABYTE = 1024 * 1024
SECONDS_PER_DAY = 24 * 60 * 60


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks.

    `emit` never raises: a failed write is counted in `failures` and dropped,
    so one broken sink cannot stop delivery to the others.
    """

    def __init__(self) -> None:
        self.failures = 0
        self._failures_lock = threading.Lock()

    def emit(self, line: str) -> None:
        try:
            self.write(line)
        except Exception:
            with self._failures_lock:
                self.failures += 1

    @abstractmethod
    def write(self, line: str) -> None:
        """Persist one rendered record (without trailing newline)."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class ConsoleSink(BaseSink):
    """Serialized writer over a text stream.

    Args:
        stream: Output stream. When omitted, the current `sys.stdout` is looked
            up on every write so redirected stdout is honoured.
    """

    def __init__(self, stream: IO[str] | None = None):
        super().__init__()
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, line: str) -> None:
        with self._lock:
            stream = self.stream
            stream.write(line + "\n")
            stream.flush()

    def close(self) -> None:
        pass


@lru_cache(maxsize=None)
def default_console() -> ConsoleSink:
    """The stdout sink shared by every facade that is not given its own."""
    return ConsoleSink()


class FileSink(BaseSink):
    """Plain append-mode file sink."""

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LogIOError(f"failed to create log directory: {exc}", path=str(self.path.parent)) from exc
        try:
            self._file = open(self.path, "a", encoding="utf-8")
        except OSError as exc:
            raise LogIOError(f"failed to open log file: {exc}", path=str(self.path)) from exc
        self._lock = threading.Lock()

    def write(self, line: str) -> None:
        with self._lock:
            self._file.write(line + "\n")
            self._file.flush()

    def close(self) -> None:
        with self._lock:
            self._file.close()


# =============================================================================
# Rotation
# =============================================================================


def _gzip_namer(name: str) -> str:
    return name + ".gz"


def _gzip_rotator(source: str, dest: str) -> None:
    with open(source, "rb") as src, gzip.open(dest, "wb") as dst:
        shutil.copyfileobj(src, dst)
    os.remove(source)


class _RetentionRotatingFileHandler(RotatingFileHandler):
    """RotatingFileHandler that also drops backups older than `max_age` days."""

    def __init__(self, filename: str, *, max_bytes: int, backup_count: int, max_age: int, compress: bool):
        super().__init__(filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        self.max_age = max_age
        self.setFormatter(logging.Formatter("%(message)s"))
        if compress:
            self.namer = _gzip_namer
            self.rotator = _gzip_rotator

    def doRollover(self) -> None:
        super().doRollover()
        if self.max_age > 0:
            self._prune_expired()

    def backups(self) -> list[Path]:
        base = Path(self.baseFilename)
        prefix = base.name + "."
        numbered = []
        for p in base.parent.iterdir():
            if not p.name.startswith(prefix):
                continue
            index = p.name[len(prefix) :].split(".")[0]
            if index.isdigit():
                numbered.append((int(index), p))
        return [p for _, p in sorted(numbered)]

    def _prune_expired(self) -> None:
        cutoff = time.time() - self.max_age * SECONDS_PER_DAY
        for backup in self.backups():
            try:
                if backup.stat().st_mtime < cutoff:
                    backup.unlink()
            except FileNotFoundError:
                continue

    def handleError(self, record: logging.LogRecord) -> None:
        # Called from inside emit's except block; hand the error to BaseSink.emit.
        raise


class RotatingFileSink(BaseSink):
    """File sink rotated by size, with backup count, age and compression policy."""

    def __init__(self, config: SinkConfig):
        super().__init__()
        if not config.filename:
            raise ConfigurationError("filename must be specified in SinkConfig")

        self.config = config
        path = Path(config.filename)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LogIOError(f"failed to create log directory: {exc}", path=str(path.parent)) from exc
        try:
            self._handler = _RetentionRotatingFileHandler(
                str(path),
                max_bytes=config.max_size * MEGABYTE,
                backup_count=config.max_backups,
                max_age=config.max_age,
                compress=config.compress,
            )
        except OSError as exc:
            raise LogIOError(f"failed to open log file: {exc}", path=str(path)) from exc
        self._closed = False

    @property
    def path(self) -> Path:
        return Path(self._handler.baseFilename)

    def backups(self) -> list[Path]:
        """Rotated files currently on disk, ordered by backup number."""
        return self._handler.backups()

    def write(self, line: str) -> None:
        # The handler would silently reopen the file after close().
        if self._closed:
            raise ValueError(f"write to closed log sink: {self.path}")
        record = logging.makeLogRecord({"msg": line, "levelno": logging.INFO, "levelname": "INFO"})
        self._handler.handle(record)

    def close(self) -> None:
        self._closed = True
        self._handler.close()
