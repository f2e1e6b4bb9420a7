"""Pydantic models for adrbridge configuration validation."""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from adrbridge.core.constants import (
    DEFAULT_ADR_SUBCOMMAND,
    DEFAULT_GIT_PATH,
    DEFAULT_MAX_OUTPUT_BYTES,
    DEFAULT_TIMEOUT_MS,
)


class AdrSettings(BaseModel):
    """How the ADR tool is invoked.

    Example in config.json:
        "adr": {
            "git_path": "/usr/local/bin/git",
            "adr_subcommand": "adr",
            "timeout_ms": 30000
        }
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    git_path: str = Field(default=DEFAULT_GIT_PATH, min_length=1)
    """Path or name of the git executable."""

    adr_subcommand: str = Field(default=DEFAULT_ADR_SUBCOMMAND, min_length=1)
    """git subcommand that provides ADR management (``git adr``)."""

    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, ge=1)
    """Per-command timeout in milliseconds."""

    max_output_bytes: int = Field(default=DEFAULT_MAX_OUTPUT_BYTES, ge=1)
    """Largest stdout or stderr accepted from a single command."""

    def override(self, **changes: Any) -> "AdrSettings":
        """Return a validated copy with the given fields replaced.

        None values are ignored so CLI flags that were not passed can be
        forwarded as-is.
        """
        updates = {key: value for key, value in changes.items() if value is not None}
        if not updates:
            return self
        return AdrSettings.model_validate({**self.model_dump(), **updates})


_LEVEL_NAMES = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class LoggingConfig(BaseModel):
    """Logging destinations and verbosity."""

    model_config = ConfigDict(extra="forbid")

    level: str = "INFO"
    """Level for the rotating log file."""

    console_level: str = "WARNING"
    """Level for stderr output."""

    log_dir: str | None = None
    """Directory for adrbridge.log. None disables file logging."""

    @field_validator("level", "console_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        name = v.upper()
        if name not in _LEVEL_NAMES:
            raise ValueError(
                f"Unknown log level {v!r}; expected one of {', '.join(sorted(_LEVEL_NAMES))}"
            )
        return name

    def level_value(self) -> int:
        return logging.getLevelName(self.level)

    def console_level_value(self) -> int:
        return logging.getLevelName(self.console_level)


class Config(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="forbid")

    adr: AdrSettings = Field(default_factory=AdrSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
