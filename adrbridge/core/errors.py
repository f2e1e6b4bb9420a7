"""Typed exception hierarchy for adrbridge.

Command errors form a closed set. Every variant carries a class-level
``kind`` tag plus only the fields that apply to it, so callers can match on
``err.kind`` (or on the class) without probing for optional attributes.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class AdrBridgeError(Exception):
    """Base class for all adrbridge errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(AdrBridgeError):
    """Raised for configuration issues (invalid JSON, validation failure)."""


class ErrorKind(Enum):
    """Tag identifying which command error variant was raised."""

    RUNTIME_NOT_FOUND = "runtime_not_found"
    NOT_A_REPOSITORY = "not_a_repository"
    COMPANION_TOOL_NOT_FOUND = "companion_tool_not_found"
    TIMEOUT_EXCEEDED = "timeout_exceeded"
    EXECUTABLE_NOT_FOUND = "executable_not_found"
    COMMAND_FAILED = "command_failed"
    MALFORMED_OUTPUT = "malformed_output"
    UNEXPECTED_SHAPE = "unexpected_shape"


class CommandError(AdrBridgeError):
    """Base class for failures running or interpreting the ADR tool."""

    kind: ClassVar[ErrorKind]
    machine_code: ClassVar[str | None] = None

    @property
    def code(self) -> str | None:
        """Short machine-readable code for this failure."""
        return self.machine_code

    @property
    def stderr(self) -> str | None:
        """Captured standard error, when the failure produced any."""
        return None


# === Capability gate failures ===


class RuntimeNotFoundError(CommandError):
    """The version-control runtime (git) is not installed or not runnable."""

    kind = ErrorKind.RUNTIME_NOT_FOUND
    machine_code = "RUNTIME_NOT_FOUND"

    def __init__(self, executable: str = "git") -> None:
        self.executable = executable
        super().__init__(
            f"Git executable not found ({executable}). "
            "Please install Git and ensure it is in your PATH."
        )


class NotARepositoryError(CommandError):
    """The workspace root is not inside a git repository."""

    kind = ErrorKind.NOT_A_REPOSITORY
    machine_code = "NOT_A_REPO"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Not a git repository: {path}")


class CompanionToolNotFoundError(CommandError):
    """The ``git adr`` subcommand is not available."""

    kind = ErrorKind.COMPANION_TOOL_NOT_FOUND
    machine_code = "COMPANION_TOOL_NOT_FOUND"

    def __init__(self, subcommand: str = "adr") -> None:
        self.subcommand = subcommand
        super().__init__(
            f"git-{subcommand} not found. "
            "Please install git-adr: https://github.com/zircote/git-adr"
        )


# === Process execution failures ===


class TimeoutExceededError(CommandError):
    """The process did not finish in time and was terminated."""

    kind = ErrorKind.TIMEOUT_EXCEEDED
    machine_code = "TIMEOUT"

    def __init__(self, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(f"Command timed out after {timeout_ms}ms")


class ExecutableNotFoundError(CommandError):
    """The OS could not locate the executable."""

    kind = ErrorKind.EXECUTABLE_NOT_FOUND
    machine_code = "ENOENT"

    def __init__(self, executable: str) -> None:
        self.executable = executable
        super().__init__(f"Command not found: {executable}")


class CommandFailedError(CommandError):
    """The process exited abnormally or could not be run.

    Attributes:
        exit_code: Process exit status, or None when the process never
            produced one (spawn failure, oversized output).
    """

    kind = ErrorKind.COMMAND_FAILED

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        stderr: str | None = None,
    ) -> None:
        self.exit_code = exit_code
        self._stderr = stderr
        super().__init__(message)

    @property
    def code(self) -> str | None:
        return str(self.exit_code) if self.exit_code is not None else None

    @property
    def stderr(self) -> str | None:
        return self._stderr


# === Output interpretation failures ===


class MalformedOutputError(CommandError):
    """Tool output claimed to be JSON but could not be parsed."""

    kind = ErrorKind.MALFORMED_OUTPUT
    machine_code = "MALFORMED_OUTPUT"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Malformed JSON output: {detail}")


class UnexpectedShapeError(CommandError):
    """Tool output was valid JSON but not the expected top-level array."""

    kind = ErrorKind.UNEXPECTED_SHAPE
    machine_code = "UNEXPECTED_SHAPE"

    def __init__(self, found: str) -> None:
        self.found = found
        super().__init__(f"Expected a JSON array of records, got {found}")
