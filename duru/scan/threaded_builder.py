# Threaded tree builder.
#
# Each directory node is handed to exactly one worker by the work queue.  The
# worker lists it, assigns node.children in listing order and enqueues the
# child directories.  Since no two workers ever own the same node, the tree
# itself needs no lock; wait_drained() is the only barrier before flattening.
# Sibling order is preserved, so the flattened order matches SerialBuilder.

from __future__ import annotations

import collections
import threading
from typing import override

from result import Err, Ok, Result

from duru.models.enums import ErrorPolicy
from duru.models.node import DirNode, RootNode
from duru.models.scan import ScanError, ScanStats
from duru.scan._base import TreeBuilderBase
from duru.services.fs import DEFAULT_FS, FileSystem
from duru.services.tree import apply_policy, list_children

type _Task = DirNode | RootNode


class _WorkQueue:
    """FIFO of directories waiting to be listed.

    ``pending`` counts directories pushed but not yet finished; ``drained``
    is set the moment it reaches zero.  ``close`` wakes every idle worker
    so it can exit.
    """

    __slots__ = ("_items", "_cond", "_pending", "_drained", "_closed")

    def __init__(self) -> None:
        self._items: collections.deque[_Task] = collections.deque()
        self._cond = threading.Condition(threading.Lock())
        self._pending = 0
        self._drained = threading.Event()
        self._closed = False

    def push(self, *tasks: _Task) -> None:
        if not tasks:
            return
        with self._cond:
            self._items.extend(tasks)
            self._pending += len(tasks)
            self._cond.notify(len(tasks))

    def pop(self) -> _Task | None:
        """Next directory, or None once the queue is closed and empty."""
        with self._cond:
            while not self._items and not self._closed:
                self._cond.wait()
            return self._items.popleft() if self._items else None

    def finish(self) -> None:
        with self._cond:
            self._pending -= 1
            if not self._pending:
                self._drained.set()

    def wait_drained(self) -> None:
        self._drained.wait()

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()



class ThreadedBuilder(TreeBuilderBase):
    """Expands sibling directories concurrently on a pool of worker threads."""

    def __init__(
        self,
        workers: int = 4,
        policy: ErrorPolicy = ErrorPolicy.ABORT,
        fs: FileSystem = DEFAULT_FS,
    ) -> None:
        super().__init__(policy=policy, fs=fs)
        self._workers = max(1, workers)

    @override
    def _expand_tree(self, root: RootNode, stats: ScanStats) -> Result[None, ScanError]:
        q = _WorkQueue()
        q.push(root)

        stats_lock = threading.Lock()
        failed = threading.Event()
        failures: list[ScanError] = []
        crashes: list[BaseException] = []

        def run_worker() -> None:
            # Per-worker counters, flushed under stats_lock once per directory.
            local = ScanStats()

            def _flush_local() -> None:
                if local.files or local.directories or local.access_errors:
                    with stats_lock:
                        stats.files += local.files
                        stats.directories += local.directories
                        stats.access_errors += local.access_errors
                    local.files = local.directories = local.access_errors = 0

            while True:
                node = q.pop()
                if node is None:
                    break

                if failed.is_set():
                    q.finish()
                    continue

                try:
                    listed = list_children(node, self._fs)
                    if isinstance(listed, Err):
                        listed = apply_policy(node, listed.err_value, self._policy, local)
                    if isinstance(listed, Err):
                        with stats_lock:
                            failures.append(listed.err_value)
                        failed.set()
                        continue
                    dirs = [child for child in listed.ok_value if isinstance(child, DirNode)]
                    local.directories += len(dirs)
                    local.files += len(listed.ok_value) - len(dirs)
                    q.push(*dirs)
                except Exception as exc:  # noqa: BLE001
                    # Re-raised on the calling thread after the pool drains.
                    with stats_lock:
                        crashes.append(exc)
                    failed.set()
                finally:
                    _flush_local()
                    q.finish()

        threads = [threading.Thread(target=run_worker, daemon=True) for _ in range(self._workers)]
        for thread in threads:
            thread.start()
        # Every pushed directory must finish before close() releases idle workers.
        q.wait_drained()
        q.close()
        for thread in threads:
            thread.join(timeout=0.3)

        if crashes:
            raise crashes[0]
        if failures:
            return Err(failures[0])
        return Ok(None)
