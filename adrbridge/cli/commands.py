"""CLI command implementations.

Thin wrappers around AdrClient. Each coroutine prints its result through the
shared rich consoles and returns a process exit code.
"""

import json
from pathlib import Path

from adrbridge.client import AdrClient
from adrbridge.core.errors import AdrBridgeError, CommandError
from adrbridge.display.console import get_console, get_error_console
from adrbridge.display.records import records_table
from adrbridge.display.text_safety import sanitize_for_display, strip_terminal_escapes

EXIT_OK = 0
EXIT_ERROR = 1


def print_error(error: AdrBridgeError) -> None:
    """Print an error (and any captured stderr) to the error console."""
    console = get_error_console()
    label = f"Error [{error.kind.value}]" if isinstance(error, CommandError) else "Error"
    console.print(
        f"[bold red]{sanitize_for_display(label)}:[/bold red] {sanitize_for_display(error.message)}"
    )
    stderr = error.stderr if isinstance(error, CommandError) else None
    if stderr and stderr.strip() and stderr.strip() not in error.message:
        console.print(f"[dim]{sanitize_for_display(stderr.strip())}[/dim]")


def print_text(text: str) -> None:
    """Print tool output verbatim (minus terminal escapes)."""
    if text:
        get_console().print(strip_terminal_escapes(text), markup=False, soft_wrap=True)


def _flag(value: bool) -> str:
    return "[green]yes[/green]" if value else "[red]no[/red]"


async def cmd_capabilities(client: AdrClient, root: Path) -> int:
    capabilities = await client.capabilities(root)
    console = get_console()
    settings = client.settings
    console.print(f"git ({sanitize_for_display(settings.git_path)}): {_flag(capabilities.has_runtime)}")
    console.print(f"repository: {_flag(capabilities.is_repository)}")
    console.print(
        f"git-{sanitize_for_display(settings.adr_subcommand)}: "
        f"{_flag(capabilities.has_companion_tool)}"
    )
    return EXIT_OK if capabilities.available else EXIT_ERROR


async def cmd_list(client: AdrClient, root: Path, as_json: bool = False, raw: bool = False) -> int:
    """List records as a table, as normalized JSON, or as the tool's raw text."""
    if raw:
        print_text(await client.list(root))
        return EXIT_OK

    records = await client.list_records(root)
    console = get_console()
    if as_json:
        payload = json.dumps([record.to_dict() for record in records], indent=2)
        console.print(payload, markup=False, highlight=False, soft_wrap=True)
    elif not records:
        console.print("[dim]No ADRs found[/dim]")
    else:
        console.print(records_table(records))
    return EXIT_OK


async def cmd_show(client: AdrClient, root: Path, adr_id: str) -> int:
    body = await client.show(root, adr_id)
    if body:
        get_console().print(
            strip_terminal_escapes(body), markup=False, soft_wrap=True, end=""
        )
    return EXIT_OK


async def run_command(client: AdrClient, root: Path, command: str, **options: str | bool) -> int:
    """Dispatch one parsed CLI command, converting adrbridge errors to exit codes."""
    try:
        if command == "capabilities":
            return await cmd_capabilities(client, root)
        if command == "list":
            return await cmd_list(
                client, root, as_json=bool(options.get("json")), raw=bool(options.get("raw"))
            )
        if command == "show":
            return await cmd_show(client, root, str(options["adr_id"]))

        if command == "init":
            output = await client.init(root)
        elif command == "new":
            output = await client.new(root, str(options["title"]))
        elif command == "edit":
            output = await client.edit(root, str(options["adr_id"]))
        elif command == "search":
            output = await client.search(root, str(options["query"]))
        elif command == "sync":
            if options["direction"] == "pull":
                output = await client.sync_pull(root)
            else:
                output = await client.sync_push(root)
        else:
            raise ValueError(f"Unknown command: {command}")
    except AdrBridgeError as e:
        print_error(e)
        return EXIT_ERROR

    print_text(output)
    return EXIT_OK
