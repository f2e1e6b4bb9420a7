"""Entry point for the adrbridge CLI."""

import argparse
import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from adrbridge.cli.arg_parser import parse_args
from adrbridge.cli.bootstrap import configure_logging
from adrbridge.cli.commands import EXIT_ERROR, print_error, run_command
from adrbridge.client import AdrClient
from adrbridge.config.loader import load_config
from adrbridge.core.errors import ConfigError

_COMMAND_OPTIONS = ("json", "raw", "adr_id", "title", "query", "direction")


def _command_options(args: argparse.Namespace) -> dict[str, str | bool]:
    return {
        name: getattr(args, name)
        for name in _COMMAND_OPTIONS
        if getattr(args, name, None) is not None
    }


def run(argv: Sequence[str] | None = None) -> int:
    """Parse argv, run the command, and return the exit code."""
    args = parse_args(argv)
    root = Path(args.cwd).resolve()

    try:
        config = load_config(Path(args.config) if args.config else None, cwd=root)
        settings = config.adr.override(
            git_path=args.git_path,
            adr_subcommand=args.adr_subcommand,
            timeout_ms=args.timeout_ms,
        )
    except ConfigError as e:
        print_error(e)
        return EXIT_ERROR
    except ValidationError as e:
        print_error(ConfigError(f"Invalid option: {e}"))
        return EXIT_ERROR

    log_dir = Path(config.logging.log_dir).expanduser() if config.logging.log_dir else None
    configure_logging(
        level=config.logging.level_value(),
        console_level=logging.DEBUG if args.verbose else config.logging.console_level_value(),
        log_dir=log_dir,
    )

    client = AdrClient(settings)
    return asyncio.run(run_command(client, root, args.command, **_command_options(args)))


def main() -> None:
    """Console script entry point."""
    try:
        exit_code = run()
    except KeyboardInterrupt:
        exit_code = 130
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
