"""Configuration loading and validation."""

from adrbridge.config.loader import load_config
from adrbridge.config.schema import AdrSettings, Config, LoggingConfig

__all__ = [
    "AdrSettings",
    "Config",
    "LoggingConfig",
    "load_config",
]
