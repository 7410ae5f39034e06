from __future__ import annotations

import os
import sys
import tempfile

import pytest
from result import Ok

from fsshape.models.scan import CustomRoots
from fsshape.scan import traverse


def _write(path: str, size: int) -> None:
    with open(path, "wb") as f:
        f.write(b"x" * size)


def test_real_tree_basic() -> None:
    with tempfile.TemporaryDirectory() as tmpdir:
        os.makedirs(os.path.join(tmpdir, "full"))
        os.makedirs(os.path.join(tmpdir, "empty"))
        _write(os.path.join(tmpdir, "big.bin"), 1500)
        _write(os.path.join(tmpdir, "full", "small.txt"), 10)
        _write(os.path.join(tmpdir, "full", "zero.txt"), 0)

        result = traverse(CustomRoots.of(tmpdir))

        assert isinstance(result, Ok)
        report = result.unwrap()
        assert report.roots[0].path == tmpdir
        assert report.stats.dir_depths == {0: 2}
        assert report.stats.file_sizes == {10: 1, 3: 1}
        assert report.stats.file_counts == {1: 2, 0: 1}
        assert report.issues == []


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
def test_real_tree_does_not_follow_symlinks() -> None:
    with tempfile.TemporaryDirectory() as tmpdir:
        target = os.path.join(tmpdir, "target")
        os.makedirs(target)
        _write(os.path.join(target, "data.bin"), 64)
        os.symlink(target, os.path.join(tmpdir, "loop"))
        os.symlink(os.path.join(target, "data.bin"), os.path.join(tmpdir, "alias.bin"))
        os.symlink(os.path.join(tmpdir, "missing"), os.path.join(tmpdir, "broken"))

        stats = traverse(CustomRoots.of(tmpdir)).unwrap().stats

        assert stats.dir_depths == {0: 1}
        assert stats.file_depths == {1: 1}
        assert stats.subdir_counts == {1: 1, 0: 1}
        assert stats.file_counts == {0: 1, 1: 1}


@pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0, reason="root can list any directory")
def test_real_tree_permission_denied_is_reported() -> None:
    with tempfile.TemporaryDirectory() as tmpdir:
        locked = os.path.join(tmpdir, "locked")
        os.makedirs(locked)
        _write(os.path.join(locked, "hidden.bin"), 8)
        os.chmod(locked, 0)
        try:
            report = traverse(CustomRoots.of(tmpdir)).unwrap()
        finally:
            os.chmod(locked, 0o755)

        assert report.stats.dir_depths == {0: 1}
        assert report.stats.file_depths == {}
        assert [issue.path for issue in report.issues] == [locked]
