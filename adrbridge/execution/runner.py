"""Async execution of external commands with timeouts and bounded capture.

The runner is the only place adrbridge touches the OS process API. It turns
every way a child can go wrong into one of the typed errors from
adrbridge.core.errors:

- TimeoutExceededError: the child outlived its timeout and was killed
- ExecutableNotFoundError: the OS could not find the program
- CommandFailedError: non-zero exit, spawn failure, or runaway output

Known limitation: cancelling the task awaiting run() does not terminate the
child. Only the runner's own timeout kills processes.
"""

import asyncio
import logging
import shlex
from asyncio.subprocess import Process
from pathlib import Path
from typing import Protocol

from adrbridge.core.constants import DEFAULT_MAX_OUTPUT_BYTES, ENCODING, ENCODING_ERRORS
from adrbridge.core.errors import (
    CommandFailedError,
    ExecutableNotFoundError,
    TimeoutExceededError,
)
from adrbridge.core.process import (
    GRACEFUL_TIMEOUT,
    isolated_group_kwargs,
    terminate_process_tree,
)
from adrbridge.core.types import CommandOutcome

logger = logging.getLogger(__name__)

_READ_CHUNK_SIZE = 64 * 1024


class CommandRunner(Protocol):
    """Anything that can run a command and return its decoded output."""

    async def run(
        self,
        executable: str,
        args: list[str],
        cwd: str,
        timeout_ms: int,
    ) -> CommandOutcome:
        ...


class _OutputLimitExceeded(Exception):
    def __init__(self, stream_name: str, limit: int) -> None:
        self.stream_name = stream_name
        self.limit = limit
        super().__init__(f"{stream_name} exceeded {limit} bytes")


async def _read_bounded(
    stream: asyncio.StreamReader | None,
    limit: int,
    stream_name: str,
) -> bytes:
    """Read a pipe to EOF, failing as soon as it grows past limit bytes."""
    if stream is None:
        return b""
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await stream.read(_READ_CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise _OutputLimitExceeded(stream_name, limit)
        chunks.append(chunk)
    return b"".join(chunks)


def _decode(data: bytes) -> str:
    return data.decode(ENCODING, errors=ENCODING_ERRORS)


class ProcessRunner:
    """Runs executables without a shell and captures their output.

    Usage:
        runner = ProcessRunner()
        outcome = await runner.run("git", ["adr", "list"], "/repo", 15000)
        print(outcome.stdout)
    """

    def __init__(
        self,
        max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
        graceful_timeout: float = GRACEFUL_TIMEOUT,
    ) -> None:
        """Initialize the runner.

        Args:
            max_output_bytes: Largest stdout or stderr accepted per command.
                Commands producing more are killed and reported as failed.
            graceful_timeout: Seconds between the polite and forceful kill
                when tearing down a timed-out command.
        """
        self._max_output_bytes = max_output_bytes
        self._graceful_timeout = graceful_timeout

    @property
    def max_output_bytes(self) -> int:
        return self._max_output_bytes

    async def run(
        self,
        executable: str,
        args: list[str],
        cwd: str,
        timeout_ms: int,
    ) -> CommandOutcome:
        """Run executable with args in cwd and wait for it to finish.

        Args:
            executable: Program name or path, resolved through PATH.
            args: Argument vector; passed through verbatim, never via a shell.
            cwd: Working directory for the child.
            timeout_ms: Wall-clock limit in milliseconds.

        Returns:
            CommandOutcome with decoded stdout and stderr.

        Raises:
            TimeoutExceededError: The limit expired; the process tree was killed.
            ExecutableNotFoundError: The executable could not be located.
            CommandFailedError: Anything else, including a non-zero exit.
        """
        logger.info("Running: %s (cwd: %s)", shlex.join([executable, *args]), cwd)

        if not Path(cwd).is_dir():
            raise CommandFailedError(f"Working directory not found: {cwd}")

        try:
            process = await asyncio.create_subprocess_exec(
                executable,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                **isolated_group_kwargs(),
            )
        except FileNotFoundError as e:
            raise ExecutableNotFoundError(executable) from e
        except (OSError, ValueError) as e:
            # ValueError: NUL byte in the executable or an argument
            raise CommandFailedError(f"Failed to execute {executable}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(
                self._collect(process),
                timeout=timeout_ms / 1000,
            )
        except TimeoutError:
            await terminate_process_tree(process, self._graceful_timeout)
            raise TimeoutExceededError(timeout_ms) from None
        except _OutputLimitExceeded as e:
            await terminate_process_tree(process, self._graceful_timeout)
            raise CommandFailedError(
                f"Command output too large: {e.stream_name} exceeded "
                f"{e.limit} bytes ({shlex.join([executable, *args])})"
            ) from None

        if process.returncode != 0:
            stderr_text = _decode(stderr)
            detail = stderr_text.strip()
            message = f"Command failed (exit {process.returncode}): {shlex.join([executable, *args])}"
            if detail:
                message = f"{message}\n{detail}"
            raise CommandFailedError(
                message,
                exit_code=process.returncode,
                stderr=stderr_text,
            )

        return CommandOutcome(stdout=_decode(stdout), stderr=_decode(stderr))

    async def _collect(self, process: Process) -> tuple[bytes, bytes]:
        """Drain both pipes concurrently, then reap the process."""
        readers = [
            asyncio.ensure_future(
                _read_bounded(process.stdout, self._max_output_bytes, "stdout")
            ),
            asyncio.ensure_future(
                _read_bounded(process.stderr, self._max_output_bytes, "stderr")
            ),
        ]
        try:
            stdout, stderr = await asyncio.gather(*readers)
        except BaseException:
            for reader in readers:
                reader.cancel()
            raise
        await process.wait()
        return stdout, stderr
