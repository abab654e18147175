from __future__ import annotations

from duru.models.enums import ErrorPolicy
from duru.scan._base import TreeBuilderBase, resolve_root
from duru.scan.serial_builder import SerialBuilder
from duru.scan.threaded_builder import ThreadedBuilder
from duru.services.fs import DEFAULT_FS, FileSystem


def create_builder(
    workers: int = 1,
    policy: ErrorPolicy = ErrorPolicy.ABORT,
    fs: FileSystem = DEFAULT_FS,
) -> TreeBuilderBase:
    """Return the serial builder for one worker, the threaded one otherwise.

    Raises ``ValueError`` for a worker count below 1.
    """
    if workers < 1:
        msg = f"Invalid worker count: {workers}. Use 1 or more."
        raise ValueError(msg)
    if workers == 1:
        return SerialBuilder(policy=policy, fs=fs)
    return ThreadedBuilder(workers=workers, policy=policy, fs=fs)


__all__ = [
    "SerialBuilder",
    "ThreadedBuilder",
    "TreeBuilderBase",
    "create_builder",
    "resolve_root",
]
