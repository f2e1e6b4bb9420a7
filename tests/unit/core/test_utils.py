"""Tests for deep_merge and secure_mkdir."""

import stat
import sys
from pathlib import Path

import pytest

from adrbridge.core.secure_io import secure_mkdir
from adrbridge.core.utils import deep_merge


class TestDeepMerge:
    def test_override_scalar(self):
        assert deep_merge({"a": 1}, {"a": 2}) == {"a": 2}

    def test_nested_dicts_merged(self):
        base = {"adr": {"git_path": "git", "timeout_ms": 15000}}
        override = {"adr": {"timeout_ms": 500}}

        assert deep_merge(base, override) == {"adr": {"git_path": "git", "timeout_ms": 500}}

    def test_lists_replaced(self):
        assert deep_merge({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}

    def test_inputs_not_mutated(self):
        base = {"adr": {"timeout_ms": 1}}
        override = {"adr": {"timeout_ms": 2}}

        deep_merge(base, override)

        assert base == {"adr": {"timeout_ms": 1}}
        assert override == {"adr": {"timeout_ms": 2}}


class TestSecureMkdir:
    def test_creates_nested(self, tmp_path: Path):
        target = tmp_path / "a" / "b"
        secure_mkdir(target)
        assert target.is_dir()

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_owner_only_permissions(self, tmp_path: Path):
        target = tmp_path / "logs"
        secure_mkdir(target)
        assert stat.S_IMODE(target.stat().st_mode) == 0o700

    def test_existing_directory_ok(self, tmp_path: Path):
        secure_mkdir(tmp_path)
        assert tmp_path.is_dir()
