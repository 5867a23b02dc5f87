"""Ordered strategy registry and the sequential application driver."""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from gremlin_remote.process.strategies import TraversalStrategy
    from gremlin_remote.process.traversal import Traversal

logger = logging.getLogger(__name__)


class TraversalStrategies:
    """An ordered, mutable list of strategy descriptors.

    Order is exactly insertion order minus removals. Nothing is sorted or
    de-duplicated here; the remote engine receives the strategies in the
    order they were registered.

    Args:
        parent: Registry to branch from. The new registry starts with a
            copy of the parent's list; the descriptors themselves are
            shared.
    """

    def __init__(self, parent: TraversalStrategies | None = None) -> None:
        self._strategies: list[TraversalStrategy] = (
            list(parent._strategies) if parent is not None else []
        )

    def add_strategy(self, strategy: TraversalStrategy) -> None:
        self._strategies.append(strategy)

    def remove_strategy(self, strategy: TraversalStrategy) -> TraversalStrategy | None:
        """Remove the first entry with the same ``fqcn``.

        Returns the removed descriptor, or None when nothing matched.
        """
        for index, registered in enumerate(self._strategies):
            if registered.fqcn == strategy.fqcn:
                return self._strategies.pop(index)
        return None

    @property
    def strategies(self) -> tuple[TraversalStrategy, ...]:
        return tuple(self._strategies)

    @property
    def fqcns(self) -> list[str]:
        return [s.fqcn for s in self._strategies]

    async def apply_strategies(self, traversal: Traversal) -> None:
        """Apply every strategy to ``traversal`` strictly in order.

        Each strategy's apply (sync or async) completes before the next one
        starts. The first failure aborts the chain and propagates unchanged;
        the traversal keeps whatever the failing strategy left behind.
        """
        chain = list(self._strategies)
        for position, strategy in enumerate(chain):
            logger.debug("Applying strategy %d/%d: %s", position + 1, len(chain), strategy.name)
            try:
                result = strategy.apply(traversal)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.warning(
                    "Strategy %s failed; skipping %d remaining strategies",
                    strategy.name,
                    len(chain) - position - 1,
                )
                raise

    def __iter__(self) -> Iterator[TraversalStrategy]:
        return iter(tuple(self._strategies))

    def __len__(self) -> int:
        return len(self._strategies)

    def __contains__(self, strategy: object) -> bool:
        return strategy in self._strategies

    def __repr__(self) -> str:
        return f"TraversalStrategies({self._strategies!r})"
