"""Traversal process layer: bytecode, strategies and remote dispatch."""

from gremlin_remote.process.bytecode import Bytecode, Instruction
from gremlin_remote.process.registry import TraversalStrategies
from gremlin_remote.process.remote import (
    RemoteConnection,
    RemoteRequest,
    RemoteResult,
    RemoteStrategy,
)
from gremlin_remote.process.source import TraversalSource
from gremlin_remote.process.strategies import (
    StrategyKind,
    StrategyRecord,
    TraversalStrategy,
    create_strategy,
)
from gremlin_remote.process.traversal import Traversal, Traverser

__all__ = [
    "Bytecode",
    "Instruction",
    "RemoteConnection",
    "RemoteRequest",
    "RemoteResult",
    "RemoteStrategy",
    "StrategyKind",
    "StrategyRecord",
    "Traversal",
    "TraversalSource",
    "TraversalStrategies",
    "TraversalStrategy",
    "Traverser",
    "create_strategy",
]
