"""Tests for the single-call filesystem wrappers."""

import errno
import os
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from linkprobe import fsops


class TestFsOps:
    def test_remove_missing_returns_error(self, tmp_path):
        result = fsops.remove(tmp_path / "nope.txt")
        assert not result.ok
        assert result.errno == errno.ENOENT

    def test_create_exclusive(self, tmp_path):
        path = tmp_path / "file.txt"
        first = fsops.create_exclusive(path)
        assert first.ok
        fsops.close(first.value)

        second = fsops.create_exclusive(path)
        assert not second.ok
        assert second.errno == errno.EEXIST

    def test_create_mode_respects_umask(self, tmp_path):
        old = os.umask(0o022)
        try:
            result = fsops.create_exclusive(tmp_path / "file.txt")
            fsops.close(result.value)
        finally:
            os.umask(old)
        assert (tmp_path / "file.txt").stat().st_mode & 0o777 == 0o644

    def test_read_once_is_bounded(self, tmp_path):
        path = tmp_path / "data.txt"
        path.write_bytes(b"x" * 100)
        fd = fsops.open_read(path).value
        try:
            assert fsops.seek_start(fd).value == 0
            result = fsops.read_once(fd, 40)
        finally:
            fsops.close(fd)
        assert result.value == b"x" * 40

    def test_hard_link_to_existing_target_fails(self, tmp_path):
        (tmp_path / "a").write_text("a")
        (tmp_path / "b").write_text("b")
        result = fsops.hard_link(tmp_path / "a", tmp_path / "b")
        assert result.errno == errno.EEXIST
        assert (tmp_path / "b").read_text() == "b"

    def test_stat_and_fstat_agree(self, tmp_path):
        path = tmp_path / "a"
        path.write_text("abc")
        fd = fsops.open_read(path).value
        try:
            assert fsops.fstat(fd).value.st_ino == fsops.stat_path(path).value.st_ino
        finally:
            fsops.close(fd)

    def test_describe(self, tmp_path):
        failed = fsops.open_read(tmp_path / "missing")
        assert "failed" in failed.describe()
        assert f"errno {errno.ENOENT}" in failed.describe()

        (tmp_path / "present").write_text("")
        ok = fsops.stat_path(tmp_path / "present")
        assert ok.describe().startswith("stat(")
