"""Traversal strategy descriptors.

A strategy is identified by its kind, whose value is the fully-qualified
class name the remote engine knows it by, and carries an optional
configuration mapping. Configuration is validated against the options
model registered for the kind in ``CONFIGURATION_SCHEMAS``; kinds without
an entry take no configuration at all.

Nested traversals found in the configuration are lowered to bytecode
when the descriptor is built, so a stored descriptor only ever holds
wire-representable values.
"""

from __future__ import annotations

import copy
import logging
from enum import StrEnum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, ValidationError
from pydantic.alias_generators import to_camel

from gremlin_remote.core.config import StrategyConfig
from gremlin_remote.core.errors import StrategyConfigurationError
from gremlin_remote.process.traversal import Traversal

logger = logging.getLogger(__name__)

_DECORATION = "org.apache.tinkerpop.gremlin.process.traversal.strategy.decoration"
_FINALIZATION = "org.apache.tinkerpop.gremlin.process.traversal.strategy.finalization"
_OPTIMIZATION = "org.apache.tinkerpop.gremlin.process.traversal.strategy.optimization"
_VERIFICATION = "org.apache.tinkerpop.gremlin.process.traversal.strategy.verification"


class StrategyKind(StrEnum):
    """Every strategy the client can describe, keyed by remote class name."""

    CONNECTIVE = f"{_DECORATION}.ConnectiveStrategy"
    ELEMENT_ID = f"{_DECORATION}.ElementIdStrategy"
    HALTED_TRAVERSER = f"{_DECORATION}.HaltedTraverserStrategy"
    OPTIONS = f"{_DECORATION}.OptionsStrategy"
    PARTITION = f"{_DECORATION}.PartitionStrategy"
    SUBGRAPH = f"{_DECORATION}.SubgraphStrategy"
    SEED = f"{_DECORATION}.SeedStrategy"
    VERTEX_PROGRAM = (
        "org.apache.tinkerpop.gremlin.process.computer.traversal.strategy.decoration.VertexProgramStrategy"
    )
    REMOTE = "org.apache.tinkerpop.gremlin.process.remote.traversal.strategy.decoration.RemoteStrategy"
    MATCH_ALGORITHM = f"{_FINALIZATION}.MatchAlgorithmStrategy"
    PRODUCTIVE_BY = f"{_OPTIMIZATION}.ProductiveByStrategy"
    ADJACENT_TO_INCIDENT = f"{_OPTIMIZATION}.AdjacentToIncidentStrategy"
    FILTER_RANKING = f"{_OPTIMIZATION}.FilterRankingStrategy"
    IDENTITY_REMOVAL = f"{_OPTIMIZATION}.IdentityRemovalStrategy"
    INCIDENT_TO_ADJACENT = f"{_OPTIMIZATION}.IncidentToAdjacentStrategy"
    INLINE_FILTER = f"{_OPTIMIZATION}.InlineFilterStrategy"
    LAZY_BARRIER = f"{_OPTIMIZATION}.LazyBarrierStrategy"
    MATCH_PREDICATE = f"{_OPTIMIZATION}.MatchPredicateStrategy"
    ORDER_LIMIT = f"{_OPTIMIZATION}.OrderLimitStrategy"
    PATH_PROCESSOR = f"{_OPTIMIZATION}.PathProcessorStrategy"
    PATH_RETRACTION = f"{_OPTIMIZATION}.PathRetractionStrategy"
    COUNT = f"{_OPTIMIZATION}.CountStrategy"
    REPEAT_UNROLL = f"{_OPTIMIZATION}.RepeatUnrollStrategy"
    GRAPH_FILTER = f"{_OPTIMIZATION}.GraphFilterStrategy"
    EARLY_LIMIT = f"{_OPTIMIZATION}.EarlyLimitStrategy"
    LAMBDA_RESTRICTION = f"{_VERIFICATION}.LambdaRestrictionStrategy"
    READ_ONLY = f"{_VERIFICATION}.ReadOnlyStrategy"
    EDGE_LABEL_VERIFICATION = f"{_VERIFICATION}.EdgeLabelVerificationStrategy"
    RESERVED_KEYS_VERIFICATION = f"{_VERIFICATION}.ReservedKeysVerificationStrategy"

    @property
    def class_name(self) -> str:
        return self.value.rsplit(".", 1)[1]


# ---------------------------------------------------------------------------
# Options models
# ---------------------------------------------------------------------------

class StrategyOptions(BaseModel):
    """Base for per-kind options. Accepts snake_case or camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class HaltedTraverserOptions(StrategyOptions):
    halted_traverser_factory: str | None = None


class FreeformOptions(StrategyOptions):
    model_config = ConfigDict(extra="allow")


class PartitionOptions(StrategyOptions):
    partition_key: str | None = None
    write_partition: str | None = None
    read_partitions: list[str] | None = None
    include_meta_properties: StrictBool | None = None


class SubgraphOptions(StrategyOptions):
    """Filter traversals for each element type; each is lowered on its own."""

    vertices: Any = None
    edges: Any = None
    vertex_properties: Any = None
    check_adjacent_vertices: StrictBool | None = None


class ProductiveByOptions(StrategyOptions):
    productive_keys: list[str] | None = None


class VertexProgramOptions(StrategyOptions):
    model_config = ConfigDict(extra="allow")

    graph_computer: str | None = None
    workers: StrictInt | None = None
    persist: str | None = None
    result: str | None = None
    vertices: Any = None
    edges: Any = None
    configuration: dict[str, Any] | None = None


class MatchAlgorithmOptions(StrategyOptions):
    match_algorithm: str | None = None


class EdgeLabelVerificationOptions(StrategyOptions):
    log_warnings: StrictBool = False
    throw_exception: StrictBool = False


class ReservedKeysVerificationOptions(EdgeLabelVerificationOptions):
    keys: list[str] = Field(default_factory=lambda: list(StrategyConfig().reserved_keys))


class SeedOptions(StrategyOptions):
    seed: StrictInt


CONFIGURATION_SCHEMAS: dict[StrategyKind, type[StrategyOptions]] = {
    StrategyKind.HALTED_TRAVERSER: HaltedTraverserOptions,
    StrategyKind.OPTIONS: FreeformOptions,
    StrategyKind.PARTITION: PartitionOptions,
    StrategyKind.SUBGRAPH: SubgraphOptions,
    StrategyKind.PRODUCTIVE_BY: ProductiveByOptions,
    StrategyKind.VERTEX_PROGRAM: VertexProgramOptions,
    StrategyKind.MATCH_ALGORITHM: MatchAlgorithmOptions,
    StrategyKind.EDGE_LABEL_VERIFICATION: EdgeLabelVerificationOptions,
    StrategyKind.RESERVED_KEYS_VERIFICATION: ReservedKeysVerificationOptions,
    StrategyKind.SEED: SeedOptions,
}

# Kinds whose options have defaults worth sending even when none are given.
_ALWAYS_CONFIGURED = {
    StrategyKind.EDGE_LABEL_VERIFICATION,
    StrategyKind.RESERVED_KEYS_VERIFICATION,
    StrategyKind.SEED,
}


# ---------------------------------------------------------------------------
# Lowering
# ---------------------------------------------------------------------------

def lower(value: Any) -> Any:
    """Replace a traversal with its bytecode. Anything else is returned as is."""
    if isinstance(value, Traversal):
        return value.lower()
    return value


def lower_configuration(options: Mapping[str, Any]) -> dict[str, Any]:
    """Lower every top-level value independently and take ownership of the rest."""
    return {key: _own(value) for key, value in options.items()}


def _own(value: Any) -> Any:
    if isinstance(value, Traversal):
        return lower(value)
    return copy.deepcopy(value)


def resolve_kind(kind: StrategyKind | str) -> StrategyKind:
    """Look up a kind by enum, fully-qualified name, class name or short name.

    Short names are the member names in any case, e.g. ``"subgraph"`` or
    ``"reserved-keys-verification"``.
    """
    if isinstance(kind, StrategyKind):
        return kind
    try:
        return StrategyKind(kind)
    except ValueError:
        pass
    for member in StrategyKind:
        if kind == member.class_name:
            return member
    normalized = kind.replace("-", "_").upper()
    if normalized in StrategyKind.__members__:
        return StrategyKind[normalized]
    available = ", ".join(sorted(m.name.lower() for m in StrategyKind))
    raise StrategyConfigurationError(kind, f"Unknown strategy. Available: {available}")


def build_configuration(
    kind: StrategyKind, options: Mapping[str, Any] | None
) -> dict[str, Any] | None:
    """Validate ``options`` for ``kind`` and return the owned, lowered mapping.

    Raises:
        StrategyConfigurationError: If the options do not fit the kind.
    """
    options = dict(options or {})
    schema = CONFIGURATION_SCHEMAS.get(kind)
    if schema is None:
        if options:
            raise StrategyConfigurationError(
                kind.value, f"takes no configuration, got {sorted(options)}"
            )
        return None
    if not options and kind not in _ALWAYS_CONFIGURED:
        return None

    try:
        validated = schema.model_validate(lower_configuration(options))
    except ValidationError as exc:
        raise StrategyConfigurationError(kind.value, str(exc)) from exc

    if schema is FreeformOptions:
        # Free-form options pass through as given, explicit None included.
        dumped = validated.model_dump(by_alias=True, exclude_unset=True)
    else:
        dumped = validated.model_dump(by_alias=True, exclude_none=True)
    return lower_configuration(dumped)


# ---------------------------------------------------------------------------
# Descriptor
# ---------------------------------------------------------------------------

class StrategyRecord(BaseModel):
    """The logical wire shape of one strategy: identifier plus configuration."""

    model_config = ConfigDict(frozen=True)

    fqcn: str
    configuration: dict[str, Any] | None = None


class TraversalStrategy:
    """One named, optionally configured modifier applied before dispatch.

    Descriptors compare and hash by ``fqcn``. The stored configuration is
    never handed out directly; ``configuration`` returns a copy.
    """

    # False for strategies that act on the client and are not sent remotely.
    sent_to_remote: bool = True

    def __init__(
        self,
        kind: StrategyKind | str,
        configuration: Mapping[str, Any] | None = None,
    ) -> None:
        self._kind = resolve_kind(kind)
        self._configuration = build_configuration(self._kind, configuration)

    @property
    def kind(self) -> StrategyKind:
        return self._kind

    @property
    def fqcn(self) -> str:
        return self._kind.value

    @property
    def name(self) -> str:
        return self._kind.class_name

    @property
    def configuration(self) -> dict[str, Any] | None:
        return copy.deepcopy(self._configuration)

    async def apply(self, traversal: Traversal) -> None:
        """Apply this strategy to ``traversal``.

        The base implementation does nothing: the remote engine applies
        the strategy once it receives the descriptor.
        """

    def to_record(self) -> StrategyRecord:
        return StrategyRecord(fqcn=self.fqcn, configuration=self.configuration)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TraversalStrategy) and self.fqcn == other.fqcn

    def __hash__(self) -> int:
        return hash(self.fqcn)

    def __repr__(self) -> str:
        if self._configuration is None:
            return f"{self.name}()"
        return f"{self.name}({self._configuration!r})"


def create_strategy(kind: StrategyKind | str, **options: Any) -> TraversalStrategy:
    """Factory: build a strategy descriptor from a kind and keyword options.

    Raises:
        StrategyConfigurationError: If the kind is unknown or the options
            do not fit it.
    """
    strategy = TraversalStrategy(kind, options)
    logger.debug("Created strategy %s with options %s", strategy.name, sorted(options))
    return strategy
