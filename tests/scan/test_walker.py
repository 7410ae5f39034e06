from __future__ import annotations

from result import Err, Ok

from fsshape.models.scan import CustomRoots, DefaultRoots, Root, ScanErrorCode, ScanOptions
from fsshape.scan import TreeWalker, traverse
from tests.fs_mock import MemoryFileSystem


def _scenario_fs() -> MemoryFileSystem:
    return (
        MemoryFileSystem()
        .add_dir("/root")
        .add_file("/root/big.bin", size=1500)
        .add_dir("/root/full")
        .add_file("/root/full/small.txt", size=10)
        .add_dir("/root/empty")
    )


def test_two_level_tree_distributions() -> None:
    result = traverse(CustomRoots.of("/root"), fs=_scenario_fs())

    assert isinstance(result, Ok)
    stats = result.unwrap().stats
    assert stats.dir_depths == {0: 2}
    assert stats.file_depths == {0: 1, 1: 1}
    assert stats.file_sizes == {10: 1, 3: 1}
    assert stats.file_bytes == {10: 1500, 3: 10}
    assert stats.byte_depths == {0: 1500, 1: 10}
    assert stats.subdir_counts == {2: 1, 0: 2}
    assert stats.file_counts == {1: 2, 0: 1}
    assert stats.cooked is False


def test_report_counts_and_roots() -> None:
    report = traverse(CustomRoots.of("/root"), fs=_scenario_fs()).unwrap()

    assert report.directories == 2
    assert report.files == 2
    assert report.issues == []
    assert [root.path for root in report.roots] == ["/root"]


def test_totals_agree_across_distributions() -> None:
    fs = MemoryFileSystem().add_dir("/t")
    for i in range(3):
        for j in range(i + 1):
            fs.add_file(f"/t/d{i}/e{j}/f.dat", size=100 * (j + 1))
        fs.add_file(f"/t/d{i}/top.dat", size=7)

    stats = traverse(CustomRoots.of("/t"), fs=fs).unwrap().stats

    assert stats.dir_depths.total() == 3 + 6
    assert stats.dir_depths.total() == stats.subdir_counts.weighted_total()
    assert stats.file_depths.total() == stats.file_counts.weighted_total() == 9
    assert stats.subdir_counts.total() == stats.file_counts.total() == 10
    assert stats.file_sizes.total() == stats.file_depths.total()
    assert stats.file_bytes.total() == stats.byte_depths.total()


def test_zero_byte_file_is_excluded_everywhere() -> None:
    fs = MemoryFileSystem().add_dir("/root").add_file("/root/sub/empty.log", size=0)

    stats = traverse(CustomRoots.of("/root"), fs=fs).unwrap().stats

    assert stats.file_sizes == {}
    assert stats.file_bytes == {}
    assert stats.file_depths == {}
    assert stats.byte_depths == {}
    assert stats.file_counts == {0: 2}


def test_iso_images_are_excluded_case_insensitively() -> None:
    fs = (
        MemoryFileSystem()
        .add_dir("/root")
        .add_file("/root/disk.iso", size=4096)
        .add_file("/root/DISK2.ISO", size=4096)
        .add_file("/root/notes.txt", size=64)
    )

    stats = traverse(CustomRoots.of("/root"), fs=fs).unwrap().stats

    assert stats.file_depths == {0: 1}
    assert stats.file_counts == {1: 1}
    assert stats.file_sizes == {6: 1}


def test_configurable_excluded_extensions() -> None:
    fs = MemoryFileSystem().add_dir("/root").add_file("/root/a.img", size=8).add_file("/root/b.iso", size=8)
    options = ScanOptions(excluded_extensions=frozenset({"IMG"}))

    stats = traverse(CustomRoots.of("/root"), options=options, fs=fs).unwrap().stats

    assert stats.file_sizes == {3: 1}


def test_symlinks_and_special_files_are_ignored() -> None:
    fs = (
        MemoryFileSystem()
        .add_dir("/root")
        .add_other("/root/link-to-dir")
        .add_other("/root/socket", size=0)
        .add_file("/root/real.bin", size=2)
    )

    stats = traverse(CustomRoots.of("/root"), fs=fs).unwrap().stats

    assert stats.dir_depths == {}
    assert stats.subdir_counts == {0: 1}
    assert stats.file_counts == {1: 1}


def test_starting_depth_offsets_all_depth_keys() -> None:
    fs = MemoryFileSystem().add_dir("/root").add_file("/root/sub/f.bin", size=1)

    stats = traverse(CustomRoots((Root("/root", 3),)), fs=fs).unwrap().stats

    assert stats.dir_depths == {3: 1}
    assert stats.file_depths == {4: 1}
    assert stats.byte_depths == {4: 1}


def test_multiple_roots_accumulate_into_one_record() -> None:
    fs = MemoryFileSystem().add_file("/a/x/f.bin", size=4).add_file("/b/g.bin", size=4)

    stats = traverse(CustomRoots.of("/a", "/b"), fs=fs).unwrap().stats

    assert stats.dir_depths == {0: 1}
    assert stats.file_depths == {1: 1, 0: 1}
    assert stats.file_sizes == {2: 2}
    assert stats.subdir_counts == {1: 1, 0: 2}


def test_deep_tree_does_not_recurse() -> None:
    fs = MemoryFileSystem()
    path = "/deep"
    for _ in range(1200):
        path += "/d"
    fs.add_file(path + "/leaf.bin", size=1)

    stats = traverse(CustomRoots.of("/deep"), fs=fs).unwrap().stats

    assert stats.dir_depths.total() == 1200
    assert stats.file_depths == {1200: 1}


def test_unlistable_directory_is_reported_and_treated_as_empty() -> None:
    fs = (
        MemoryFileSystem()
        .add_dir("/root")
        .add_file("/root/locked/secret.bin", size=100)
        .add_file("/root/open/visible.bin", size=100)
        .deny_listing("/root/locked")
    )

    report = traverse(CustomRoots.of("/root"), fs=fs).unwrap()

    assert report.stats.dir_depths == {0: 2}
    assert report.stats.file_depths == {1: 1}
    assert report.stats.file_counts == {0: 2, 1: 1}
    assert len(report.issues) == 1
    assert report.issues[0].path == "/root/locked"
    assert "cannot list" in report.issues[0].message.lower()


def test_unstattable_entry_is_reported() -> None:
    fs = MemoryFileSystem().add_dir("/root").add_file("/root/ok.bin", size=10).add_file("/root/gone.bin", size=10)
    fs.deny_stat("/root/gone.bin")

    report = traverse(CustomRoots.of("/root"), fs=fs).unwrap()

    assert report.files == 1
    assert [issue.path for issue in report.issues] == ["/root/gone.bin"]


def test_missing_custom_root_returns_error() -> None:
    result = traverse(CustomRoots.of("/does-not-exist"), fs=MemoryFileSystem())

    assert isinstance(result, Err)
    error = result.unwrap_err()
    assert error.code is ScanErrorCode.NOT_FOUND
    assert "does not exist" in error.message.lower()


def test_file_custom_root_returns_error() -> None:
    fs = MemoryFileSystem().add_file("/data.bin", size=3)

    result = traverse(CustomRoots.of("/data.bin"), fs=fs)

    assert isinstance(result, Err)
    assert result.unwrap_err().code is ScanErrorCode.NOT_DIRECTORY


def test_missing_default_roots_are_skipped_with_issue() -> None:
    fs = MemoryFileSystem().add_file("/etc/hosts", size=20)

    result = traverse(DefaultRoots(("/etc", "/srv")), fs=fs)

    assert isinstance(result, Ok)
    report = result.unwrap()
    assert [root.path for root in report.roots] == ["/etc"]
    assert [issue.path for issue in report.issues] == ["/srv"]
    assert report.stats.file_depths == {0: 1}


def test_no_usable_default_roots_returns_error() -> None:
    result = traverse(DefaultRoots(("/nope",)), fs=MemoryFileSystem())

    assert isinstance(result, Err)
    assert result.unwrap_err().code is ScanErrorCode.NO_ROOTS


def test_progress_callback_invoked() -> None:
    fs = MemoryFileSystem().add_dir("/root")
    for idx in range(150):
        fs.add_file(f"/root/f{idx}.bin", size=1)

    calls: list[tuple[str, int, int]] = []

    def on_progress(path: str, files: int, dirs: int) -> None:
        calls.append((path, files, dirs))

    walker = TreeWalker(options=ScanOptions(progress_interval=100), fs=fs)
    result = walker.walk(CustomRoots.of("/root"), progress_callback=on_progress)

    assert isinstance(result, Ok)
    assert calls == [("/root", 150, 0)]
