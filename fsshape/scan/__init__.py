from __future__ import annotations

from fsshape.scan.walker import TreeWalker, normalize_extension, resolve_root, traverse

__all__ = [
    "TreeWalker",
    "normalize_extension",
    "resolve_root",
    "traverse",
]
