"""Argument parsing for the adrbridge CLI."""

import argparse
from collections.abc import Sequence


def add_invocation_args(parser: argparse.ArgumentParser) -> None:
    """Add flags that override how the ADR tool is invoked."""
    parser.add_argument(
        "--git-path",
        dest="git_path",
        help="git executable to use (default: from config, else 'git')",
    )
    parser.add_argument(
        "--subcommand",
        dest="adr_subcommand",
        help="git subcommand providing ADRs (default: from config, else 'adr')",
    )
    parser.add_argument(
        "--timeout-ms",
        dest="timeout_ms",
        type=int,
        help="Per-command timeout in milliseconds (default: 15000)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adrbridge",
        description="Work with git-adr architectural decision records",
    )
    parser.add_argument(
        "--cwd",
        default=".",
        help="Workspace root (default: current directory)",
    )
    parser.add_argument(
        "--config",
        help="Explicit config file (skips ~/.adrbridge and project layers)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log commands and diagnostics to stderr",
    )
    add_invocation_args(parser)

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "capabilities",
        help="Show whether git, the repository and git-adr are usable",
    )
    subparsers.add_parser("init", help="Initialize ADR tracking in the repository")

    new_parser = subparsers.add_parser("new", help="Create a new ADR")
    new_parser.add_argument("title", help="Title of the new ADR")

    list_parser = subparsers.add_parser("list", help="List ADRs")
    list_format = list_parser.add_mutually_exclusive_group()
    list_format.add_argument(
        "--json",
        action="store_true",
        help="Print normalized records as JSON",
    )
    list_format.add_argument(
        "--raw",
        action="store_true",
        help="Print the tool's plain-text listing unchanged",
    )

    show_parser = subparsers.add_parser("show", help="Print an ADR document")
    show_parser.add_argument("adr_id", help="ADR identifier")

    edit_parser = subparsers.add_parser("edit", help="Edit an ADR")
    edit_parser.add_argument("adr_id", help="ADR identifier")

    search_parser = subparsers.add_parser("search", help="Search ADRs")
    search_parser.add_argument("query", help="Search query")

    sync_parser = subparsers.add_parser("sync", help="Synchronize ADRs with the remote")
    sync_parser.add_argument(
        "direction",
        choices=["pull", "push"],
        help="pull fetches remote ADRs, push publishes local ones",
    )

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)
