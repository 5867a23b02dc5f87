"""Placeholder graph used only as a reference for traversal sources."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gremlin_remote.process.source import TraversalSource


class Graph:
    """An empty graph object. The real graph lives on the remote engine."""

    def traversal(self) -> TraversalSource:
        """Return a traversal source with an empty strategy registry."""

        from gremlin_remote.process.registry import TraversalStrategies
        from gremlin_remote.process.source import TraversalSource

        return TraversalSource(self, TraversalStrategies())

    def __str__(self) -> str:
        return "graph[]"
