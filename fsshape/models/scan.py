from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, TypeAlias

from result import Result

from fsshape.models.stats import StatisticsRecord

ProgressCallback = Callable[[str, int, int], None]

DEFAULT_ROOT_PATHS: tuple[str, ...] = (
    "/boot",
    "/etc",
    "/home",
    "/opt",
    "/root",
    "/srv",
    "/usr",
)

DEFAULT_EXCLUDED_EXTENSIONS: frozenset[str] = frozenset({".iso"})


@dataclass(slots=True, frozen=True)
class Root:
    path: str
    depth: int = 0


@dataclass(slots=True, frozen=True)
class DefaultRoots:
    """The curated top-level directories, each seeded at depth 0.

    Pseudo filesystems, mount points, volatile trees and the ``/bin``-style
    symlinks into ``/usr`` are left out.  Entries missing on this host are
    reported as scan issues and skipped.
    """

    paths: tuple[str, ...] = DEFAULT_ROOT_PATHS


@dataclass(slots=True, frozen=True)
class CustomRoots:
    """Caller-supplied roots; any invalid root fails the scan."""

    roots: tuple[Root, ...]

    @classmethod
    def of(cls, *paths: str) -> CustomRoots:
        return cls(tuple(Root(path) for path in paths))


RootSet: TypeAlias = DefaultRoots | CustomRoots


@dataclass(slots=True)
class ScanOptions:
    excluded_extensions: frozenset[str] = DEFAULT_EXCLUDED_EXTENSIONS
    progress_interval: int = 100


@dataclass(slots=True, frozen=True)
class ScanIssue:
    path: str
    message: str


@dataclass(slots=True)
class ScanReport:
    stats: StatisticsRecord
    roots: list[Root] = field(default_factory=list)
    issues: list[ScanIssue] = field(default_factory=list)
    directories: int = 0
    files: int = 0


class ScanErrorCode(str, Enum):
    NOT_FOUND = "not_found"
    NOT_DIRECTORY = "not_directory"
    ROOT_STAT_FAILED = "root_stat_failed"
    NO_ROOTS = "no_roots"


@dataclass(slots=True, frozen=True)
class ScanError:
    code: ScanErrorCode
    path: str
    message: str


ScanResult = Result[ScanReport, ScanError]
