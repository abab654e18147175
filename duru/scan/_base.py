# Tree builder base class and root validation.
#
# Builders turn a user-supplied path into a fully expanded RootNode.  The base
# class owns the lifecycle; subclasses decide how the directory tree below the
# root gets expanded (one thread, or a pool of workers).
#
# Lifecycle (build method):
#   1. Validate root path -> create RootNode.
#   2. _expand_tree populates every reachable directory exactly once.
#   3. Return a frozen ScanSnapshot wrapping the completed tree.

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from result import Err, Ok, Result

from duru.models.enums import ErrorPolicy
from duru.models.node import RootNode
from duru.models.scan import ScanError, ScanErrorCode, ScanResult, ScanSnapshot, ScanStats
from duru.services.fs import DEFAULT_FS, FileSystem

logger = logging.getLogger(__name__)


def resolve_root(path: str, fs: FileSystem) -> str | ScanError:
    """Expand ``~`` in *path* and make it absolute.

    The result must name an existing directory; anything else comes back as
    a ``ScanError`` describing why it cannot be scanned.
    """
    candidate = fs.expanduser(path)
    if not fs.exists(candidate):
        return ScanError(ScanErrorCode.NOT_FOUND, candidate, "Path does not exist")

    absolute = fs.absolute(candidate)
    try:
        is_dir = fs.stat(absolute).is_dir
    except OSError as exc:
        return ScanError(ScanErrorCode.ROOT_STAT_FAILED, absolute, f"Cannot stat root: {exc}")
    if is_dir:
        return absolute
    return ScanError(ScanErrorCode.NOT_DIRECTORY, absolute, "Path is not a directory")


class TreeBuilderBase(ABC):
    """Template Method base for tree builders.

    Subclasses implement ``_expand_tree``; this class handles root
    validation, statistics and snapshot creation.
    """

    def __init__(self, policy: ErrorPolicy = ErrorPolicy.ABORT, fs: FileSystem = DEFAULT_FS) -> None:
        self._policy = policy
        self._fs = fs

    @abstractmethod
    def _expand_tree(self, root: RootNode, stats: ScanStats) -> Result[None, ScanError]:
        """Expand *root* and every directory below it, updating *stats*."""

    def build(self, path: str) -> ScanResult:
        resolved = resolve_root(path, self._fs)
        if isinstance(resolved, ScanError):
            return Err(resolved)

        root = RootNode(path=resolved)
        stats = ScanStats(files=0, directories=1, access_errors=0)
        logger.debug("Building tree under %s with %s", resolved, type(self).__name__)

        expanded = self._expand_tree(root, stats)
        if isinstance(expanded, Err):
            return expanded

        logger.debug(
            "Built tree under %s: %d files, %d directories, %d skipped",
            resolved,
            stats.files,
            stats.directories,
            stats.access_errors,
        )
        return Ok(ScanSnapshot(root=root, stats=stats))
