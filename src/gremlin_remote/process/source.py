"""Traversal source: the context that owns a strategy registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gremlin_remote.process.bytecode import Bytecode
from gremlin_remote.process.registry import TraversalStrategies
from gremlin_remote.process.remote import RemoteConnection, RemoteStrategy
from gremlin_remote.process.strategies import TraversalStrategy
from gremlin_remote.process.traversal import Traversal

if TYPE_CHECKING:
    from gremlin_remote.structure.graph import Graph


class TraversalSource:
    """Spawns traversals that share this source's strategy registry.

    The ``with_*`` methods never touch the current source; they return a
    new source whose registry is branched from this one.
    """

    def __init__(
        self,
        graph: Graph | None,
        strategies: TraversalStrategies,
        bytecode: Bytecode | None = None,
    ) -> None:
        self.graph = graph
        self.strategies = strategies
        self.bytecode = bytecode if bytecode is not None else Bytecode()

    def _branch(self) -> TraversalSource:
        return TraversalSource(self.graph, TraversalStrategies(self.strategies), Bytecode(self.bytecode))

    def with_strategies(self, *strategies: TraversalStrategy) -> TraversalSource:
        """Branch and add ``strategies`` ahead of any client-side dispatch strategy.

        Dispatch strategies (``RemoteStrategy``) always stay at the end of
        the chain so they see every other strategy's effect.
        """
        source = self._branch()
        dispatchers = [s for s in source.strategies if not s.sent_to_remote]
        for dispatcher in dispatchers:
            source.strategies.remove_strategy(dispatcher)
        for strategy in strategies:
            source.strategies.add_strategy(strategy)
        for dispatcher in dispatchers:
            source.strategies.add_strategy(dispatcher)
        return source

    def without_strategies(self, *strategies: TraversalStrategy) -> TraversalSource:
        source = self._branch()
        for strategy in strategies:
            source.strategies.remove_strategy(strategy)
        return source

    def with_remote(self, connection: RemoteConnection) -> TraversalSource:
        return self.with_strategies(RemoteStrategy(connection))

    def _spawn(self, operator: str, *arguments: Any) -> Traversal:
        traversal = Traversal(self.graph, self.strategies, Bytecode(self.bytecode))
        return traversal.add_step(operator, *arguments)

    def V(self, *ids: Any) -> Traversal:  # noqa: N802
        return self._spawn("V", *ids)

    def E(self, *ids: Any) -> Traversal:  # noqa: N802
        return self._spawn("E", *ids)

    def inject(self, *values: Any) -> Traversal:
        return self._spawn("inject", *values)

    def __str__(self) -> str:
        return f"graphtraversalsource[{self.graph}]"
