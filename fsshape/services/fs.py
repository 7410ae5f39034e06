from __future__ import annotations

import os
import stat as statmod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

from fsshape.models.enums import EntryKind


@dataclass(slots=True, frozen=True)
class StatResult:
    size: int
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE


@dataclass(slots=True, frozen=True)
class DirEntry:
    path: str
    name: str
    stat: StatResult | None = None


class FileSystem(Protocol):
    def expanduser(self, path: str) -> str: ...

    def exists(self, path: str) -> bool: ...

    def absolute(self, path: str) -> str: ...

    def stat(self, path: str) -> StatResult: ...

    def scandir(self, path: str) -> Iterable[DirEntry]: ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str: ...

    def write_text(self, path: str, text: str, encoding: str = "utf-8") -> None: ...

    def makedirs(self, path: str) -> None: ...


def _kind_of(mode: int) -> EntryKind:
    if statmod.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if statmod.S_ISREG(mode):
        return EntryKind.FILE
    return EntryKind.OTHER


class OsFileSystem:
    """Real filesystem access.  Symlinks are never followed."""

    def expanduser(self, path: str) -> str:
        return str(Path(path).expanduser())

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def absolute(self, path: str) -> str:
        return str(Path(path).absolute())

    def stat(self, path: str) -> StatResult:
        st = os.stat(path, follow_symlinks=False)
        return StatResult(size=st.st_size, kind=_kind_of(st.st_mode))

    def scandir(self, path: str) -> Iterable[DirEntry]:
        with os.scandir(path) as entries:
            for e in entries:
                try:
                    st = e.stat(follow_symlinks=False)
                    sr = StatResult(size=st.st_size, kind=_kind_of(st.st_mode))
                except OSError:
                    sr = None
                yield DirEntry(path=e.path, name=e.name, stat=sr)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return Path(path).read_text(encoding=encoding)

    def write_text(self, path: str, text: str, encoding: str = "utf-8") -> None:
        Path(path).write_text(text, encoding=encoding)

    def makedirs(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)


DEFAULT_FS: FileSystem = OsFileSystem()
