from __future__ import annotations

from collections.abc import Iterator

from result import Err, Ok, Result

from duru.models.files import FileList, FileRecord
from duru.models.node import DirNode, FileNode, Node, RootNode, node_kind
from duru.models.scan import ScanError, ScanErrorCode


def _collect(children: list[Node]) -> Result[list[FileRecord], ScanError]:
    """Pre-order walk over *children* into a list owned by this call.

    One iterator per open directory level lives on an explicit stack, so the
    depth of the tree is not bounded by the interpreter's recursion limit.
    """
    records: list[FileRecord] = []
    stack: list[Iterator[Node]] = [iter(children)]
    while stack:
        child = next(stack[-1], None)
        match child:
            case None:
                stack.pop()
            case RootNode(path=path):
                return Err(
                    ScanError(
                        code=ScanErrorCode.ROOT_CANT_BE_CHILD,
                        path=path,
                        message="A scan root cannot appear inside the tree",
                    )
                )
            case DirNode(children=None):
                continue
            case DirNode(children=list() as nested):
                stack.append(iter(nested))
            case FileNode(name=name, path=path, size=size):
                records.append(FileRecord(name=name, path=path, size=size))
    return Ok(records)


def file_list(node: Node) -> Result[FileList, ScanError]:
    """Flatten an expanded tree into a :class:`FileList` in traversal order.

    Fails without a partial list if *node* is not a root, has not been
    expanded, or contains a nested root.
    """
    match node:
        case RootNode(children=None, path=path):
            return Err(ScanError(code=ScanErrorCode.NO_CHILDREN, path=path, message="Root has not been expanded"))
        case RootNode(children=list() as children):
            collected = _collect(children)
            if isinstance(collected, Err):
                return collected
            return Ok(FileList(collected.ok_value))
        case DirNode(path=path) | FileNode(path=path):
            return Err(
                ScanError(
                    code=ScanErrorCode.NOT_ROOT,
                    path=path,
                    message=f"Only a scan root can be flattened, got a {node_kind(node).value}",
                )
            )
