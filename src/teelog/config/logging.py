"""
Logging Configuration.
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..logging.formatters import DEFAULT_SEPARATOR, DEFAULT_TIMESTAMP_FORMAT
from ..logging.types import FileTarget, NoFile, PlainFile, RotatingFile, SinkConfig


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class LoggingSettings(BaseSettings):
    """Logging infrastructure configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TEELOG_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    format: LogFormat = Field(default=LogFormat.CONSOLE, description="Record layout for every sink")
    file_path: str = Field(default="", description="Log file path; empty logs to the console only")
    rotate: bool = Field(default=False, description="Rotate the log file instead of appending forever")
    max_size: int = Field(default=1, description="Megabytes before rotation")
    max_backups: int = Field(default=1, description="Rotated files to keep")
    max_age: int = Field(default=0, description="Days to keep rotated files (0 = forever)")
    compress: bool = Field(default=False, description="Gzip rotated files")
    timestamp_format: str = Field(default=DEFAULT_TIMESTAMP_FORMAT, description="Console timestamp format")
    separator: str = Field(default=DEFAULT_SEPARATOR, description="Console column separator")

    def to_target(self) -> FileTarget:
        if not self.file_path:
            return NoFile()
        if not self.rotate:
            return PlainFile(self.file_path)
        return RotatingFile(
            SinkConfig(
                filename=self.file_path,
                max_size=self.max_size,
                max_backups=self.max_backups,
                max_age=self.max_age,
                compress=self.compress,
            )
        )
