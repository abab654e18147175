from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from result import Err, Ok, Result

from duru.models.enums import SortOrder
from duru.models.node import DirNode, FileNode, Node, RootNode
from duru.models.scan import ScanError, ScanErrorCode


@dataclass(slots=True, frozen=True)
class FileRecord:
    name: str
    path: str
    size: int

    @property
    def full_path(self) -> str:
        return os.path.join(self.path, self.name)

    @classmethod
    def from_node(cls, node: Node) -> Result[FileRecord, ScanError]:
        match node:
            case FileNode(name=name, path=path, size=size):
                return Ok(cls(name=name, path=path, size=size))
            case DirNode(path=path) | RootNode(path=path):
                return Err(ScanError(code=ScanErrorCode.NOT_A_FILE, path=path, message="Node is not a file"))


class FileList:
    """Ordered, sortable collection of :class:`FileRecord`."""

    __slots__ = ("_files",)

    def __init__(self, files: Iterable[FileRecord] = ()) -> None:
        self._files: list[FileRecord] = list(files)

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self._files)

    def __getitem__(self, index: int) -> FileRecord:
        return self._files[index]

    def __repr__(self) -> str:
        return f"FileList({self._files!r})"

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self._files)

    def sort_by_size(self, order: SortOrder) -> None:
        # Descending is ascending + reverse, so equal sizes come out in the
        # reverse of their flatten order.
        self._files.sort(key=lambda f: f.size)
        if order is SortOrder.DESCENDING:
            self._files.reverse()

    def head(self, n: int) -> FileList:
        if n < 0:
            msg = f"head() needs a non-negative count, got {n}"
            raise ValueError(msg)
        return FileList(self._files[:n])
