from __future__ import annotations

from typing import override

from result import Err, Ok, Result

from duru.models.node import RootNode
from duru.models.scan import ScanError, ScanStats
from duru.scan._base import TreeBuilderBase
from duru.services.tree import expand


class SerialBuilder(TreeBuilderBase):
    """Single-threaded depth-first builder; the reference behaviour."""

    @override
    def _expand_tree(self, root: RootNode, stats: ScanStats) -> Result[None, ScanError]:
        expanded = expand(root, self._fs, self._policy, stats)
        if isinstance(expanded, Err):
            return expanded
        return Ok(None)
