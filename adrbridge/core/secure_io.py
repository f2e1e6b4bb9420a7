"""Owner-only directory creation for adrbridge log files."""

import os
import stat
from pathlib import Path

# Owner-only permissions for log directories
SECURE_DIR_MODE: int = stat.S_IRWXU  # 0o700


def secure_mkdir(path: Path) -> None:
    """Create path (and missing parents) with 0o700 permissions.

    The final directory is chmod-ed even when it already exists, so a
    directory created earlier under a looser umask is tightened.
    """
    for parent in reversed(list(path.parents)):
        if not parent.exists():
            parent.mkdir(mode=SECURE_DIR_MODE)
            os.chmod(parent, SECURE_DIR_MODE)

    if not path.exists():
        path.mkdir(mode=SECURE_DIR_MODE)

    if os.name != "nt":
        os.chmod(path, SECURE_DIR_MODE)
