"""Shared pytest fixtures and configuration for pytest."""

import sys
from typing import Any

import pytest

from adrbridge.core.types import CommandOutcome


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for platform-specific tests."""
    config.addinivalue_line("markers", "windows: mark test to run only on Windows")
    config.addinivalue_line("markers", "unix_only: mark test to run only on Unix")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Auto-skip tests based on platform markers."""
    skip_windows = pytest.mark.skip(reason="Windows-only test")
    skip_unix = pytest.mark.skip(reason="Unix-only test")

    for item in items:
        if "windows" in item.keywords and sys.platform != "win32":
            item.add_marker(skip_windows)
        if "unix_only" in item.keywords and sys.platform == "win32":
            item.add_marker(skip_unix)


class ScriptedRunner:
    """CommandRunner fake answering by full command line ("git adr list").

    Unscripted commands succeed with empty output. Every call is recorded.
    """

    def __init__(self) -> None:
        self._responses: dict[str, CommandOutcome | BaseException] = {}
        self.calls: list[dict[str, Any]] = []

    def respond(self, command: str, stdout: str = "", stderr: str = "") -> None:
        self._responses[command] = CommandOutcome(stdout=stdout, stderr=stderr)

    def fail(self, command: str, error: BaseException) -> None:
        self._responses[command] = error

    def ready(self, git: str = "git", subcommand: str = "adr") -> None:
        """Script all three capability gates to pass."""
        self.respond(f"{git} --version", stdout="git version 2.43.0")
        self.respond(f"{git} rev-parse --git-dir", stdout=".git")
        self.respond(f"{git} {subcommand} --version", stdout="git-adr 1.0.0")

    @property
    def commands(self) -> list[str]:
        return [call["command"] for call in self.calls]

    async def run(
        self,
        executable: str,
        args: list[str],
        cwd: str,
        timeout_ms: int,
    ) -> CommandOutcome:
        command = " ".join([executable, *args])
        self.calls.append(
            {"command": command, "cwd": cwd, "timeout_ms": timeout_ms}
        )
        response = self._responses.get(command, CommandOutcome(stdout="", stderr=""))
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def scripted_runner() -> ScriptedRunner:
    """A ScriptedRunner with nothing scripted."""
    return ScriptedRunner()


@pytest.fixture
def ready_runner() -> ScriptedRunner:
    """A ScriptedRunner whose capability gates all pass."""
    runner = ScriptedRunner()
    runner.ready()
    return runner
