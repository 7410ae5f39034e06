from __future__ import annotations

import os

from result import Err, Ok

from fsshape.models.scan import (
    CustomRoots,
    DefaultRoots,
    ProgressCallback,
    Root,
    RootSet,
    ScanError,
    ScanErrorCode,
    ScanIssue,
    ScanOptions,
    ScanReport,
    ScanResult,
)
from fsshape.models.stats import StatisticsRecord
from fsshape.services.buckets import size_bucket
from fsshape.services.fs import DEFAULT_FS, DirEntry, FileSystem


def resolve_root(path: str, fs: FileSystem) -> str | ScanError:
    """Validate and resolve a scan root path.

    Returns the resolved absolute path, or a ``ScanError`` on failure.
    """
    expanded = fs.expanduser(path)
    if not fs.exists(expanded):
        return ScanError(
            code=ScanErrorCode.NOT_FOUND,
            path=expanded,
            message="Path does not exist",
        )

    resolved = fs.absolute(expanded)
    try:
        root_stat = fs.stat(resolved)
    except OSError as exc:
        return ScanError(
            code=ScanErrorCode.ROOT_STAT_FAILED,
            path=resolved,
            message=f"Cannot stat root: {exc}",
        )
    if not root_stat.is_dir:
        return ScanError(
            code=ScanErrorCode.NOT_DIRECTORY,
            path=resolved,
            message="Path is not a directory",
        )
    return resolved


def normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


class TreeWalker:
    """Single-threaded walker that fills a raw ``StatisticsRecord``.

    Directories are processed from an explicit worklist, so tree depth is
    bounded by memory rather than by the interpreter's recursion limit.
    """

    def __init__(self, options: ScanOptions | None = None, fs: FileSystem = DEFAULT_FS) -> None:
        self._options = options or ScanOptions()
        self._excluded = frozenset(normalize_extension(ext) for ext in self._options.excluded_extensions)
        self._interval = max(1, self._options.progress_interval)
        self._fs = fs

    def _resolve_roots(self, roots: RootSet, issues: list[ScanIssue]) -> list[Root] | ScanError:
        resolved_roots: list[Root] = []
        match roots:
            case DefaultRoots(paths=paths):
                for path in paths:
                    resolved = resolve_root(path, self._fs)
                    if isinstance(resolved, ScanError):
                        issues.append(
                            ScanIssue(path=resolved.path, message=f"Skipped default root: {resolved.message}")
                        )
                        continue
                    resolved_roots.append(Root(resolved, 0))
            case CustomRoots(roots=custom):
                for root in custom:
                    resolved = resolve_root(root.path, self._fs)
                    if isinstance(resolved, ScanError):
                        return resolved
                    resolved_roots.append(Root(resolved, root.depth))
        if not resolved_roots:
            return ScanError(
                code=ScanErrorCode.NO_ROOTS,
                path="",
                message="No usable scan roots",
            )
        return resolved_roots

    def _is_excluded(self, entry: DirEntry, size: int) -> bool:
        if size == 0:
            return True
        return os.path.splitext(entry.name)[1].lower() in self._excluded

    def walk(self, roots: RootSet, progress_callback: ProgressCallback | None = None) -> ScanResult:
        issues: list[ScanIssue] = []
        resolved_roots = self._resolve_roots(roots, issues)
        if isinstance(resolved_roots, ScanError):
            return Err(resolved_roots)

        stats = StatisticsRecord()
        report = ScanReport(stats=stats, roots=resolved_roots, issues=issues)
        worklist: list[tuple[str, int]] = [(root.path, root.depth) for root in reversed(resolved_roots)]
        seen = 0

        while worklist:
            path, depth = worklist.pop()
            try:
                entries = list(self._fs.scandir(path))
            except OSError as exc:
                # listed as empty, reported as an issue
                issues.append(ScanIssue(path=path, message=f"Cannot list directory: {exc}"))
                entries = []

            subdirs = 0
            files = 0
            for entry in entries:
                st = entry.stat
                if st is None:
                    issues.append(ScanIssue(path=entry.path, message="Cannot stat entry"))
                    continue
                if st.is_dir:
                    stats.dir_depths.add(depth)
                    worklist.append((entry.path, depth + 1))
                    subdirs += 1
                elif st.is_file:
                    if self._is_excluded(entry, st.size):
                        continue
                    files += 1
                    bucket = size_bucket(st.size)
                    stats.file_depths.add(depth)
                    stats.file_sizes.add(bucket)
                    stats.file_bytes.add(bucket, st.size)
                    stats.byte_depths.add(depth, st.size)

            stats.subdir_counts.add(subdirs)
            stats.file_counts.add(files)
            report.directories += subdirs
            report.files += files

            if progress_callback is not None:
                prev = seen
                seen += len(entries)
                if seen // self._interval > prev // self._interval:
                    progress_callback(path, report.files, report.directories)

        return Ok(report)


def traverse(
    roots: RootSet,
    options: ScanOptions | None = None,
    fs: FileSystem = DEFAULT_FS,
    progress_callback: ProgressCallback | None = None,
) -> ScanResult:
    """Walk *roots* and return the raw statistics for every directory below them."""
    return TreeWalker(options=options, fs=fs).walk(roots, progress_callback=progress_callback)
