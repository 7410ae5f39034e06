from __future__ import annotations

from enum import Enum


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


class StatsField(str, Enum):
    DIR_DEPTHS = "dir_depths"
    SUBDIR_COUNTS = "subdir_counts"
    FILE_COUNTS = "file_counts"
    FILE_SIZES = "file_sizes"
    FILE_BYTES = "file_bytes"
    FILE_DEPTHS = "file_depths"
    BYTE_DEPTHS = "byte_depths"
