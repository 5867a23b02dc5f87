"""Dispatch contract between the strategy pipeline and a remote engine.

The transport itself lives elsewhere; it only has to satisfy
``RemoteConnection``. What crosses the boundary is the lowered bytecode
plus the ordered ``(fqcn, configuration)`` records of every strategy
that is meant for the engine.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from gremlin_remote.process.strategies import StrategyKind, StrategyRecord, TraversalStrategy
from gremlin_remote.process.traversal import Traversal, Traverser

logger = logging.getLogger(__name__)


class RemoteRequest(BaseModel):
    bytecode: dict[str, Any]
    strategies: list[StrategyRecord] = Field(default_factory=list)


class RemoteResult(BaseModel):
    traversers: list[Traverser] = Field(default_factory=list)


@runtime_checkable
class RemoteConnection(Protocol):
    """Protocol for transports that can execute a traversal remotely."""

    async def submit(self, request: RemoteRequest) -> RemoteResult: ...


def build_request(traversal: Traversal) -> RemoteRequest:
    """Build the request for ``traversal`` from its bytecode and registry."""
    records = [
        strategy.to_record()
        for strategy in (traversal.strategies or ())
        if strategy.sent_to_remote
    ]
    return RemoteRequest(bytecode=traversal.lower().to_wire(), strategies=records)


class RemoteStrategy(TraversalStrategy):
    """Client-side strategy that submits the traversal to a remote engine.

    ``TraversalSource`` keeps it at the end of the chain, including when
    strategies are added after ``with_remote``, so every other strategy
    has been applied before anything is sent.
    """

    sent_to_remote = False

    def __init__(self, connection: RemoteConnection) -> None:
        super().__init__(StrategyKind.REMOTE)
        self.connection = connection

    async def apply(self, traversal: Traversal) -> None:
        if traversal.traversers is not None:
            return
        request = build_request(traversal)
        logger.debug(
            "Submitting %d step(s) with %d strategies",
            len(request.bytecode["step"]),
            len(request.strategies),
        )
        result = await self.connection.submit(request)
        traversal.traversers = list(result.traversers)
