"""Filesystem access used by the tree builder and the config loader.

Everything that touches the disk goes through the :class:`FileSystem`
protocol so tests can swap in an in-memory implementation.
"""

from __future__ import annotations

import os
import stat as statmod
from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True, frozen=True)
class StatResult:
    is_dir: bool
    size: int


@dataclass(slots=True, frozen=True)
class DirEntry:
    name: str
    is_dir: bool
    size: int


class FileSystem(Protocol):
    def expanduser(self, path: str) -> str: ...

    def absolute(self, path: str) -> str: ...

    def exists(self, path: str) -> bool: ...

    def stat(self, path: str) -> StatResult: ...

    def list_entries(self, path: str) -> list[DirEntry]:
        """One directory listing.  Raises ``OSError`` when *path* cannot be read."""
        ...

    def read_text(self, path: str) -> str: ...


class OsFileSystem:
    def expanduser(self, path: str) -> str:
        return os.path.expanduser(path)

    def absolute(self, path: str) -> str:
        return os.path.abspath(path)

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def stat(self, path: str) -> StatResult:
        st = os.stat(path)
        is_dir = statmod.S_ISDIR(st.st_mode)
        return StatResult(is_dir=is_dir, size=0 if is_dir else st.st_size)

    def list_entries(self, path: str) -> list[DirEntry]:
        entries: list[DirEntry] = []
        with os.scandir(path) as it:
            for entry in it:
                # Symlinks are not followed: a link to a directory is listed
                # as a leaf with the link's own size.
                st = entry.stat(follow_symlinks=False)
                is_dir = statmod.S_ISDIR(st.st_mode)
                entries.append(DirEntry(name=entry.name, is_dir=is_dir, size=0 if is_dir else st.st_size))
        return entries

    def read_text(self, path: str) -> str:
        with open(path, encoding="utf-8") as f:
            return f.read()


DEFAULT_FS: FileSystem = OsFileSystem()
