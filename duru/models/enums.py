from __future__ import annotations

from enum import Enum


class NodeKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    ROOT = "root"


class SortOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class ErrorPolicy(str, Enum):
    """What the builder does when a directory cannot be listed."""

    ABORT = "abort"
    SKIP = "skip"
