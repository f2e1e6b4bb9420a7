"""Async facade over the ``git adr`` command-line tool.

Every operation follows the same sequence:

1. probe the workspace root (cached) and fail fast with
   RuntimeNotFoundError, NotARepositoryError or CompanionToolNotFoundError
2. build the argument vector ``<git> <subcommand> <action> [args...]``
3. run it through the CommandRunner with the configured timeout
4. post-process the output (strip, or parse into DecisionRecord values)

Runner errors are propagated unchanged. Nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from adrbridge.config.schema import AdrSettings
from adrbridge.core.errors import (
    CommandError,
    CompanionToolNotFoundError,
    NotARepositoryError,
    RuntimeNotFoundError,
)
from adrbridge.core.types import DecisionRecord, WorkspaceCapabilities
from adrbridge.execution.probe import CapabilityCache, CapabilityProbe
from adrbridge.execution.runner import CommandRunner, ProcessRunner
from adrbridge.parsing.json_output import parse_records_json
from adrbridge.parsing.text_output import parse_records_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingStrategy:
    """One way of obtaining the record list: its own fetch plus its parser."""

    name: str
    action_args: tuple[str, ...]
    parse: Callable[[str], list[DecisionRecord]]


JSON_LISTING = ListingStrategy("json", ("list", "-f", "json"), parse_records_json)
TEXT_LISTING = ListingStrategy("text", ("list",), parse_records_text)

# Tried in order; the first to succeed wins.
DEFAULT_LISTING_STRATEGIES: tuple[ListingStrategy, ...] = (JSON_LISTING, TEXT_LISTING)


async def first_successful_listing(
    strategies: Sequence[ListingStrategy],
    fetch: Callable[[tuple[str, ...]], Awaitable[str]],
) -> tuple[str, list[DecisionRecord]]:
    """Run strategies in order until one fetches and parses successfully.

    Args:
        strategies: Ordered strategies; must not be empty.
        fetch: Coroutine returning stdout for a strategy's action arguments.

    Returns:
        (strategy name, records) from the first success.

    Raises:
        CommandError: The first strategy's failure, when every strategy
            failed. Later failures are only logged.
    """
    if not strategies:
        raise ValueError("At least one listing strategy is required")

    failures: list[tuple[str, CommandError]] = []
    for strategy in strategies:
        try:
            output = await fetch(strategy.action_args)
            records = strategy.parse(output)
        except CommandError as e:
            logger.info("ADR list via %s failed: %s", strategy.name, e.message)
            failures.append((strategy.name, e))
            continue
        logger.info("ADR list source = %s", strategy.name)
        return strategy.name, records

    for name, error in failures:
        logger.warning("ADR list strategy %s failed: [%s] %s", name, error.kind.value, error.message)
    raise failures[0][1]


class AdrClient:
    """Async client for ``git adr`` operations in a workspace root.

    Usage:
        client = AdrClient()
        records = await client.list_records("/path/to/repo")
        body = await client.show("/path/to/repo", records[0].id)

    Settings given to the constructor apply to every call; each method also
    accepts ``settings=`` to replace them for that call only.
    """

    def __init__(
        self,
        settings: AdrSettings | None = None,
        runner: CommandRunner | None = None,
        cache: CapabilityCache | None = None,
        listing_strategies: Sequence[ListingStrategy] = DEFAULT_LISTING_STRATEGIES,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Default invocation settings. Defaults to AdrSettings().
            runner: Command runner. Defaults to a ProcessRunner capped at
                settings.max_output_bytes.
            cache: Capability cache; a private one is created if omitted.
            listing_strategies: Ordered strategies for list_records().
        """
        self._settings = settings or AdrSettings()
        self._runner = runner or ProcessRunner(max_output_bytes=self._settings.max_output_bytes)
        self._probe = CapabilityProbe(self._runner, cache)
        self._listing_strategies = tuple(listing_strategies)

    @property
    def settings(self) -> AdrSettings:
        return self._settings

    @property
    def cache(self) -> CapabilityCache:
        return self._probe.cache

    # === Capabilities ===

    async def capabilities(
        self, root: str | Path, *, settings: AdrSettings | None = None
    ) -> WorkspaceCapabilities:
        """Probe (or return cached) capabilities for root."""
        return await self._probe.probe(root, settings or self._settings)

    def invalidate(self, root: str | Path) -> None:
        """Forget cached capabilities for one workspace root."""
        self._probe.invalidate(root)

    def invalidate_all(self) -> None:
        self._probe.invalidate_all()

    async def _require_tooling(self, root: str | Path, settings: AdrSettings) -> None:
        capabilities = await self._probe.probe(root, settings)
        if not capabilities.has_runtime:
            raise RuntimeNotFoundError(settings.git_path)
        if not capabilities.is_repository:
            raise NotARepositoryError(str(root))
        if not capabilities.has_companion_tool:
            raise CompanionToolNotFoundError(settings.adr_subcommand)

    async def _run_adr(
        self, root: str | Path, action_args: Sequence[str], settings: AdrSettings
    ) -> str:
        """Run ``<git> <subcommand> *action_args`` in root and return stdout."""
        outcome = await self._runner.run(
            settings.git_path,
            [settings.adr_subcommand, *action_args],
            str(root),
            settings.timeout_ms,
        )
        return outcome.stdout

    async def _gated(
        self,
        root: str | Path,
        action_args: Sequence[str],
        settings: AdrSettings | None,
    ) -> str:
        effective = settings or self._settings
        await self._require_tooling(root, effective)
        return await self._run_adr(root, action_args, effective)

    # === Operations ===

    async def init(self, root: str | Path, *, settings: AdrSettings | None = None) -> str:
        """Initialize ADR tracking in the repository.

        Cached capabilities for root are dropped afterwards, even on failure.
        """
        try:
            stdout = await self._gated(root, ["init"], settings)
        finally:
            self.invalidate(root)
        return stdout.rstrip()

    async def new(
        self, root: str | Path, title: str, *, settings: AdrSettings | None = None
    ) -> str:
        """Create a new decision record titled title."""
        return (await self._gated(root, ["new", title], settings)).rstrip()

    async def list(self, root: str | Path, *, settings: AdrSettings | None = None) -> str:
        """Return the plain-text record listing."""
        return (await self._gated(root, ["list"], settings)).rstrip()

    async def list_records(
        self, root: str | Path, *, settings: AdrSettings | None = None
    ) -> list[DecisionRecord]:
        """List records as typed values, preferring JSON output.

        Falls back to the plain-text listing when the JSON fetch or parse
        fails. If both fail, the JSON-path error is raised.
        """
        effective = settings or self._settings
        await self._require_tooling(root, effective)

        async def fetch(action_args: tuple[str, ...]) -> str:
            return await self._run_adr(root, action_args, effective)

        _source, records = await first_successful_listing(self._listing_strategies, fetch)
        return records

    async def show(
        self, root: str | Path, adr_id: str, *, settings: AdrSettings | None = None
    ) -> str:
        """Return the full record document, unmodified."""
        return await self._gated(root, ["show", adr_id], settings)

    async def edit(
        self, root: str | Path, adr_id: str, *, settings: AdrSettings | None = None
    ) -> str:
        return (await self._gated(root, ["edit", adr_id], settings)).rstrip()

    async def search(
        self, root: str | Path, query: str, *, settings: AdrSettings | None = None
    ) -> str:
        return (await self._gated(root, ["search", query], settings)).rstrip()

    async def sync_pull(self, root: str | Path, *, settings: AdrSettings | None = None) -> str:
        """Fetch records from the remote."""
        return (await self._gated(root, ["sync", "--pull"], settings)).rstrip()

    async def sync_push(self, root: str | Path, *, settings: AdrSettings | None = None) -> str:
        """Publish records to the remote."""
        return (await self._gated(root, ["sync", "--push"], settings)).rstrip()
