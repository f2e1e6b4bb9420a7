"""Workspace capability probing with an explicit per-root cache.

A probe runs three gates in order and stops at the first failure:

1. runtime         ``git --version``
2. repository      ``git rev-parse --git-dir`` (inside the root)
3. companion tool  ``git adr --version``

Gate failures are logged and folded into the returned WorkspaceCapabilities;
probe() itself never raises a command error.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from adrbridge.config.schema import AdrSettings
from adrbridge.core.errors import CommandError
from adrbridge.core.types import WorkspaceCapabilities
from adrbridge.execution.runner import CommandRunner

logger = logging.getLogger(__name__)


def cache_key(root: str | Path) -> str:
    """Canonical cache key for a workspace root."""
    return str(Path(root).resolve())


class CapabilityCache:
    """In-memory capabilities keyed by canonical workspace root.

    Entries never expire on their own; callers invalidate after anything
    that changes the environment (installing tools, ``git adr init``).
    """

    def __init__(self) -> None:
        self._entries: dict[str, WorkspaceCapabilities] = {}

    def get(self, root: str | Path) -> WorkspaceCapabilities | None:
        return self._entries.get(cache_key(root))

    def set(self, root: str | Path, capabilities: WorkspaceCapabilities) -> None:
        self._entries[cache_key(root)] = capabilities

    def invalidate(self, root: str | Path) -> None:
        """Drop the entry for one root, if any."""
        self._entries.pop(cache_key(root), None)

    def invalidate_all(self) -> None:
        self._entries.clear()

    def __contains__(self, root: object) -> bool:
        if not isinstance(root, (str, Path)):
            return False
        return cache_key(root) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(frozen=True)
class _Gate:
    """One probe step: the flag it sets and the command proving it."""

    flag: str
    describe: Callable[[AdrSettings, str], str]
    args: Callable[[AdrSettings], list[str]]


_GATES: tuple[_Gate, ...] = (
    _Gate(
        flag="has_runtime",
        describe=lambda s, root: f"Git not found ({s.git_path})",
        args=lambda s: ["--version"],
    ),
    _Gate(
        flag="is_repository",
        describe=lambda s, root: f"Not a git repository: {root}",
        args=lambda s: ["rev-parse", "--git-dir"],
    ),
    _Gate(
        flag="has_companion_tool",
        describe=lambda s, root: f"git-{s.adr_subcommand} not found",
        args=lambda s: [s.adr_subcommand, "--version"],
    ),
)


class CapabilityProbe:
    """Determines and caches what tooling is usable per workspace root."""

    def __init__(self, runner: CommandRunner, cache: CapabilityCache | None = None) -> None:
        self._runner = runner
        self._cache = cache if cache is not None else CapabilityCache()

    @property
    def cache(self) -> CapabilityCache:
        return self._cache

    async def probe(self, root: str | Path, settings: AdrSettings) -> WorkspaceCapabilities:
        """Return capabilities for root, running the gates on a cache miss.

        Args:
            root: Workspace root directory.
            settings: Executable path, subcommand and timeout for the checks.

        Returns:
            A complete WorkspaceCapabilities; failed and skipped gates are False.
        """
        cached = self._cache.get(root)
        if cached is not None:
            return cached

        cwd = str(root)
        passed: dict[str, bool] = {}
        for gate in _GATES:
            try:
                await self._runner.run(
                    settings.git_path, gate.args(settings), cwd, settings.timeout_ms
                )
            except CommandError as e:
                logger.info("%s (%s)", gate.describe(settings, cwd), e.message)
                break
            passed[gate.flag] = True

        capabilities = WorkspaceCapabilities(**passed)
        self._cache.set(root, capabilities)
        return capabilities

    def invalidate(self, root: str | Path) -> None:
        self._cache.invalidate(root)

    def invalidate_all(self) -> None:
        self._cache.invalidate_all()
