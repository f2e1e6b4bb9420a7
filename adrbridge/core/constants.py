"""Core constants and paths for adrbridge.

Single source of truth for the config directory layout and the limits
applied to external commands.
"""

from pathlib import Path

CONFIG_DIR_NAME = ".adrbridge"
CONFIG_FILE_NAME = "config.json"
LOG_FILE_NAME = "adrbridge.log"

DEFAULT_GIT_PATH = "git"
DEFAULT_ADR_SUBCOMMAND = "adr"
DEFAULT_TIMEOUT_MS = 15_000

# Per-stream cap on captured process output
DEFAULT_MAX_OUTPUT_BYTES = 10 * 1024 * 1024

# Decoding for process output: keep data, mark corruption
ENCODING = "utf-8"
ENCODING_ERRORS = "replace"


def get_config_dir() -> Path:
    """Get ~/.adrbridge (global config directory)."""
    return Path.home() / CONFIG_DIR_NAME


def get_default_config_path() -> Path:
    """Get the global config file path."""
    return get_config_dir() / CONFIG_FILE_NAME


def get_project_config_path(cwd: Path) -> Path:
    """Get the project-local config file path for a working directory."""
    return cwd / CONFIG_DIR_NAME / CONFIG_FILE_NAME
