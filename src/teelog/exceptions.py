"""
Teelog exception hierarchy.

Construction-time failures are raised to the caller; emission never raises.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class LoggingError(Exception):
    """Root of all teelog errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(LoggingError):
    """A sink configuration is unusable (e.g. missing filename)."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)


class LogIOError(LoggingError):
    """A log directory or file could not be created or opened."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, code="LOG_IO_ERROR", details={"path": path})
        self.path = path
