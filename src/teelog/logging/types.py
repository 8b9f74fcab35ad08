"""
Sink configuration and file-target variants.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_MAX_SIZE = 1  # megabytes
DEFAULT_MAX_BACKUPS = 1


class SinkConfig(BaseModel):
    """Rotating file sink policy.

    Non-positive `max_size` / `max_backups` are normalized to their defaults
    rather than rejected. An empty `filename` is accepted here and refused when
    the sink is built, so the error surfaces at logger construction.
    """

    model_config = ConfigDict(frozen=True)

    filename: str = ""
    max_size: int = DEFAULT_MAX_SIZE  # megabytes before rotation
    max_backups: int = DEFAULT_MAX_BACKUPS
    max_age: int = 0  # days; 0 keeps backups forever
    compress: bool = False

    @field_validator("max_size")
    @classmethod
    def normalize_max_size(cls, v: int) -> int:
        return v if v > 0 else DEFAULT_MAX_SIZE

    @field_validator("max_backups")
    @classmethod
    def normalize_max_backups(cls, v: int) -> int:
        return v if v > 0 else DEFAULT_MAX_BACKUPS

    @field_validator("max_age")
    @classmethod
    def normalize_max_age(cls, v: int) -> int:
        return max(v, 0)


@dataclass(frozen=True)
class NoFile:
    """Console only."""


@dataclass(frozen=True)
class PlainFile:
    """Console plus an append-mode file at `path`."""

    path: str


@dataclass(frozen=True)
class RotatingFile:
    """Console plus a rotating file governed by `config`."""

    config: SinkConfig = field(default_factory=SinkConfig)


FileTarget = Union[NoFile, PlainFile, RotatingFile]
