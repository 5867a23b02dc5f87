"""Minimal traversal object consumed by the strategy pipeline."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from gremlin_remote.process.bytecode import Bytecode

if TYPE_CHECKING:
    from gremlin_remote.process.registry import TraversalStrategies
    from gremlin_remote.structure.graph import Graph


class Traverser(BaseModel):
    """A result object together with how many traversers it stands for."""

    object: Any = None
    bulk: int = 1


class Traversal:
    """A not-yet-executed sequence of steps bound to a strategy registry.

    Traversals built without a registry (anonymous child traversals) are
    only ever lowered into bytecode, never applied.
    """

    def __init__(
        self,
        graph: Graph | None = None,
        strategies: TraversalStrategies | None = None,
        bytecode: Bytecode | None = None,
    ) -> None:
        self.graph = graph
        self.strategies = strategies
        self.bytecode = bytecode if bytecode is not None else Bytecode()
        self.traversers: list[Traverser] | None = None
        self._strategies_task: asyncio.Future[None] | None = None
        self._results: list[Any] | None = None

    def add_step(self, operator: str, *arguments: Any) -> Traversal:
        """Append a step. Traversal arguments are lowered to bytecode first."""
        lowered = [a.lower() if isinstance(a, Traversal) else a for a in arguments]
        self.bytecode.add_step(operator, *lowered)
        return self

    def lower(self) -> Bytecode:
        """Return a copy of this traversal's compiled step sequence."""
        return Bytecode(self.bytecode)

    async def apply_strategies(self) -> None:
        """Run the registry against this traversal once.

        Later and concurrent callers await the same chain, so a failed
        chain re-raises its error rather than running again.
        """
        if self.strategies is None:
            return
        if self._strategies_task is None:
            self._strategies_task = asyncio.ensure_future(self.strategies.apply_strategies(self))
        await asyncio.shield(self._strategies_task)

    async def to_list(self) -> list[Any]:
        await self.apply_strategies()
        return list(self._expand())

    async def iterate(self) -> Traversal:
        """Apply strategies for their side effects and discard the results."""
        await self.apply_strategies()
        self._results = []
        return self

    async def next(self) -> Any:
        await self.apply_strategies()
        if self._results is None:
            self._results = list(self._expand())
        if not self._results:
            raise StopAsyncIteration
        return self._results.pop(0)

    def __aiter__(self) -> Traversal:
        return self

    async def __anext__(self) -> Any:
        return await self.next()

    def _expand(self) -> list[Any]:
        results: list[Any] = []
        for traverser in self.traversers or []:
            results.extend([traverser.object] * traverser.bulk)
        return results

    def __str__(self) -> str:
        return str(self.bytecode)
