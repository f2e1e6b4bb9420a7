"""Logging setup for the adrbridge CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers; the CLI
decides where their records go.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from adrbridge.core.constants import LOG_FILE_NAME
from adrbridge.core.secure_io import secure_mkdir

logger = logging.getLogger(__name__)

ROOT_LOGGER_NAME = "adrbridge"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: int = logging.INFO,
    console_level: int = logging.WARNING,
    log_dir: Path | None = None,
) -> Path | None:
    """Configure handlers for the adrbridge logger namespace.

    Console output goes to stderr at console_level. When log_dir is given,
    a rotating file (5MB per file, 3 backups) also receives records at level.
    Existing handlers are replaced, so calling this twice is harmless.

    Args:
        level: Logging level for file output.
        console_level: Logging level for stderr output.
        log_dir: Directory for adrbridge.log; created with owner-only
            permissions. None disables file logging.

    Returns:
        Path to the log file, or None without file logging.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
    root_logger.addHandler(console_handler)

    if log_dir is None:
        root_logger.setLevel(console_level)
        return None

    secure_mkdir(log_dir)
    log_file = log_dir / LOG_FILE_NAME

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(file_handler)
    root_logger.setLevel(min(level, console_level))

    logger.info("Logging configured: %s", log_file)
    return log_file
