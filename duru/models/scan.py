from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from result import Result

from duru.models.node import RootNode


@dataclass(slots=True)
class ScanStats:
    files: int = 0
    directories: int = 0
    access_errors: int = 0


@dataclass(slots=True, frozen=True)
class ScanSnapshot:
    root: RootNode
    stats: ScanStats


class ScanErrorCode(str, Enum):
    NOT_FOUND = "not_found"
    NOT_DIRECTORY = "not_directory"
    ROOT_STAT_FAILED = "root_stat_failed"
    DIRECTORY_UNREADABLE = "directory_unreadable"
    NO_CHILDREN = "no_children"
    ROOT_CANT_BE_CHILD = "root_cant_be_child"
    NOT_A_FILE = "not_a_file"
    IS_LEAF = "is_leaf"
    NOT_ROOT = "not_root"


@dataclass(slots=True, frozen=True)
class ScanError:
    code: ScanErrorCode
    path: str
    message: str


ScanResult = Result[ScanSnapshot, ScanError]
