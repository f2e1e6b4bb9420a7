"""Configuration loading with fail-fast behavior and layered merging.

Layers, later overriding earlier:
1. Global user config (~/.adrbridge/config.json)
2. Project local config (<cwd>/.adrbridge/config.json)

Missing layers are skipped; with no files at all the Pydantic defaults apply.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from adrbridge.config.schema import Config
from adrbridge.core.constants import get_default_config_path, get_project_config_path
from adrbridge.core.errors import ConfigError
from adrbridge.core.utils import deep_merge

logger = logging.getLogger(__name__)


def load_json_file(path: Path) -> dict[str, Any]:
    """Load and parse a JSON object from path.

    Returns:
        Parsed JSON as a dict. Returns empty dict if file is empty.

    Raises:
        ConfigError: If the file is missing or unreadable, holds invalid JSON,
            or holds something other than a JSON object.
    """
    resolved = path.resolve()

    if not resolved.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        content = resolved.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    content = content.strip()
    if not content:
        return {}

    try:
        result = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(result, dict):
        raise ConfigError(f"Expected object in {path}, got {type(result).__name__}")

    return result


def load_json_file_optional(path: Path) -> dict[str, Any] | None:
    """Like load_json_file, but return None when the file does not exist."""
    if not path.resolve().is_file():
        logger.debug("Config file not found: %s", path)
        return None

    logger.debug("Loading config file: %s", path)
    return load_json_file(path)


def load_config(path: Path | None = None, cwd: Path | None = None) -> Config:
    """Load configuration from file with layered merging.

    Args:
        path: Explicit config file path. If provided, skips layered loading.
        cwd: Working directory for the project layer. Defaults to Path.cwd().

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If any config file contains invalid JSON or the merged
            config fails validation.
    """
    if path is not None:
        data = load_json_file(path)
        try:
            return Config.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Config validation failed for {path}: {e}") from e

    effective_cwd = cwd or Path.cwd()
    merged: dict[str, Any] = {}
    loaded_from: list[Path] = []

    layers = [get_default_config_path(), get_project_config_path(effective_cwd)]
    for layer in dict.fromkeys(p.resolve() for p in layers):
        data = load_json_file_optional(layer)
        if data:
            merged = deep_merge(merged, data)
            loaded_from.append(layer)

    if not loaded_from:
        logger.debug("No config files found, using Pydantic defaults")
        return Config()

    logger.info("Config loaded from: %s", [str(p) for p in loaded_from])
    try:
        return Config.model_validate(merged)
    except ValidationError as e:
        sources = ", ".join(str(p) for p in loaded_from)
        raise ConfigError(f"Config validation failed (merged from {sources}): {e}") from e
