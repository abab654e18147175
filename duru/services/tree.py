from __future__ import annotations

import logging
import os

from result import Err, Ok, Result

from duru.models.enums import ErrorPolicy
from duru.models.node import DirNode, FileNode, Node, RootNode, is_expanded
from duru.models.scan import ScanError, ScanErrorCode, ScanStats
from duru.services.fs import DirEntry, FileSystem

logger = logging.getLogger(__name__)

# Stands in for names that cannot be represented as UTF-8 text.
PLACEHOLDER_NAME = "UNDEFINED"


def display_name(raw: str) -> str:
    """Return *raw*, or the placeholder if it holds undecodable bytes.

    ``os.scandir`` maps undecodable bytes to lone surrogates, which fail to
    encode as UTF-8.
    """
    try:
        raw.encode("utf-8")
    except UnicodeEncodeError:
        logger.warning("Undecodable file name %r replaced with %s", raw, PLACEHOLDER_NAME)
        return PLACEHOLDER_NAME
    return raw


def make_nodes(entries: list[DirEntry], parent_path: str) -> list[Node]:
    """Classify directory entries into child nodes, keeping listing order."""
    nodes: list[Node] = []
    for entry in entries:
        name = display_name(entry.name)
        if entry.is_dir:
            # The real OS path is kept even when the name is a placeholder.
            nodes.append(DirNode(name=name, path=os.path.join(parent_path, entry.name)))
        else:
            nodes.append(FileNode(name=name, path=parent_path, size=entry.size))
    return nodes


def list_children(node: Node, fs: FileSystem) -> Result[list[Node], ScanError]:
    """Populate the immediate children of *node*.

    A node that already has children is returned unchanged; expansion
    happens at most once per node.
    """
    match node:
        case FileNode():
            return Err(ScanError(code=ScanErrorCode.IS_LEAF, path=node.full_path, message="Files have no children"))
        case DirNode(children=list() as children) | RootNode(children=list() as children):
            return Ok(children)
        case DirNode(path=path) | RootNode(path=path):
            try:
                entries = fs.list_entries(path)
            except OSError as exc:
                return Err(
                    ScanError(
                        code=ScanErrorCode.DIRECTORY_UNREADABLE,
                        path=path,
                        message=f"Cannot read directory: {exc}",
                    )
                )
            children = make_nodes(entries, path)
            node.children = children
            logger.debug("Listed %s: %d entries", path, len(children))
            return Ok(children)


def apply_policy(
    node: DirNode | RootNode,
    error: ScanError,
    policy: ErrorPolicy,
    stats: ScanStats | None = None,
) -> Result[list[Node], ScanError]:
    """Resolve a listing failure: propagate it, or mark *node* as empty."""
    if policy is ErrorPolicy.ABORT:
        return Err(error)
    logger.warning("Skipping %s: %s", error.path, error.message)
    node.children = []
    if stats is not None:
        stats.access_errors += 1
    return Ok(node.children)


def count_children(stats: ScanStats, children: list[Node]) -> None:
    for child in children:
        if isinstance(child, DirNode):
            stats.directories += 1
        else:
            stats.files += 1


def expand(
    node: Node,
    fs: FileSystem,
    policy: ErrorPolicy = ErrorPolicy.ABORT,
    stats: ScanStats | None = None,
) -> Result[Node, ScanError]:
    """Expand *node* and every directory below it, depth-first.

    Nodes that are already expanded are not listed again, but their
    directory children are still visited.
    """
    if isinstance(node, FileNode):
        return Ok(node)

    stack: list[DirNode | RootNode] = [node]
    while stack:
        current = stack.pop()
        fresh = not is_expanded(current)
        listed = list_children(current, fs)
        if isinstance(listed, Err):
            listed = apply_policy(current, listed.err_value, policy, stats)
            if isinstance(listed, Err):
                return listed
        children = listed.ok_value
        if fresh and stats is not None:
            count_children(stats, children)
        # Reversed so the first child is expanded first.
        stack.extend(child for child in reversed(children) if isinstance(child, DirNode))
    return Ok(node)

