from __future__ import annotations

import os
from dataclasses import dataclass

from duru.models.enums import NodeKind


@dataclass(slots=True, frozen=True)
class FileNode:
    """A regular file.  *path* is the directory that contains it."""

    name: str
    path: str
    size: int

    @property
    def full_path(self) -> str:
        return os.path.join(self.path, self.name)


@dataclass(slots=True)
class DirNode:
    """A directory below the scan root.

    ``children is None`` means the directory has not been expanded yet; an
    expanded empty directory has ``children == []``.
    """

    name: str
    path: str
    size: int | None = None
    children: list[Node] | None = None


@dataclass(slots=True)
class RootNode:
    path: str
    children: list[Node] | None = None


type Node = FileNode | DirNode | RootNode


def node_kind(node: Node) -> NodeKind:
    match node:
        case FileNode():
            return NodeKind.FILE
        case DirNode():
            return NodeKind.DIRECTORY
        case RootNode():
            return NodeKind.ROOT


def is_expanded(node: Node) -> bool:
    match node:
        case FileNode():
            return False
        case DirNode(children=children) | RootNode(children=children):
            return children is not None
