"""Allow running as ``python -m adrbridge``."""

from adrbridge.cli.main import main

main()
