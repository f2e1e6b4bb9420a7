"""Unit tests for ProcessRunner error mapping and bounded reads."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from adrbridge.core.errors import CommandFailedError, ErrorKind, ExecutableNotFoundError
from adrbridge.execution.runner import ProcessRunner, _OutputLimitExceeded, _read_bounded


def _stream(data: bytes) -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    reader.feed_eof()
    return reader


class TestReadBounded:
    @pytest.mark.asyncio
    async def test_reads_to_eof(self):
        assert await _read_bounded(_stream(b"hello"), 10, "stdout") == b"hello"

    @pytest.mark.asyncio
    async def test_exactly_at_limit(self):
        assert await _read_bounded(_stream(b"12345"), 5, "stdout") == b"12345"

    @pytest.mark.asyncio
    async def test_over_limit(self):
        with pytest.raises(_OutputLimitExceeded) as exc_info:
            await _read_bounded(_stream(b"123456"), 5, "stderr")
        assert exc_info.value.stream_name == "stderr"
        assert exc_info.value.limit == 5

    @pytest.mark.asyncio
    async def test_missing_stream(self):
        assert await _read_bounded(None, 5, "stdout") == b""


class TestProcessRunnerErrors:
    @pytest.mark.asyncio
    async def test_missing_working_directory(self, tmp_path: Path):
        missing = tmp_path / "gone"
        with patch("asyncio.create_subprocess_exec", new_callable=AsyncMock) as spawn:
            with pytest.raises(CommandFailedError) as exc_info:
                await ProcessRunner().run("git", ["--version"], str(missing), 1000)

        spawn.assert_not_called()
        assert "Working directory not found" in exc_info.value.message
        assert exc_info.value.exit_code is None

    @pytest.mark.asyncio
    async def test_executable_not_found(self, tmp_path: Path):
        with patch(
            "asyncio.create_subprocess_exec",
            new_callable=AsyncMock,
            side_effect=FileNotFoundError(2, "No such file"),
        ):
            with pytest.raises(ExecutableNotFoundError) as exc_info:
                await ProcessRunner().run("no-such-git", ["--version"], str(tmp_path), 1000)

        assert exc_info.value.kind is ErrorKind.EXECUTABLE_NOT_FOUND
        assert exc_info.value.code == "ENOENT"
        assert exc_info.value.executable == "no-such-git"

    @pytest.mark.asyncio
    async def test_other_spawn_failure(self, tmp_path: Path):
        with patch(
            "asyncio.create_subprocess_exec",
            new_callable=AsyncMock,
            side_effect=PermissionError(13, "Permission denied"),
        ):
            with pytest.raises(CommandFailedError) as exc_info:
                await ProcessRunner().run("./git", ["--version"], str(tmp_path), 1000)

        assert "Failed to execute ./git" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_invalid_argument_value(self, tmp_path: Path):
        with patch(
            "asyncio.create_subprocess_exec",
            new_callable=AsyncMock,
            side_effect=ValueError("embedded null byte"),
        ):
            with pytest.raises(CommandFailedError) as exc_info:
                await ProcessRunner().run("git", ["adr", "new", "a\x00b"], str(tmp_path), 1000)

        assert "embedded null byte" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test_spawn_arguments(self, tmp_path: Path):
        with patch(
            "asyncio.create_subprocess_exec",
            new_callable=AsyncMock,
            side_effect=FileNotFoundError(),
        ) as spawn:
            with pytest.raises(ExecutableNotFoundError):
                await ProcessRunner().run(
                    "git", ["adr", "new", "Title with spaces"], str(tmp_path), 1000
                )

        args, kwargs = spawn.call_args
        assert args == ("git", "adr", "new", "Title with spaces")
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["stdin"] == asyncio.subprocess.DEVNULL
        assert "shell" not in kwargs

    def test_default_output_cap(self):
        assert ProcessRunner().max_output_bytes == 10 * 1024 * 1024
        assert ProcessRunner(max_output_bytes=64).max_output_bytes == 64
