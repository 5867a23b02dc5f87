"""Tests for strategy descriptors: kinds, configuration validation and lowering."""

from __future__ import annotations

import pytest

from gremlin_remote.core.errors import StrategyConfigurationError
from gremlin_remote.process.bytecode import Bytecode
from gremlin_remote.process.strategies import (
    CONFIGURATION_SCHEMAS,
    StrategyKind,
    StrategyRecord,
    TraversalStrategy,
    create_strategy,
    lower,
    resolve_kind,
)
from gremlin_remote.process.traversal import Traversal


def _person_filter() -> Traversal:
    return Traversal().add_step("hasLabel", "person")


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

class TestIdentity:
    def test_fqcn_is_remote_class_name(self):
        strategy = create_strategy(StrategyKind.READ_ONLY)
        assert strategy.fqcn == (
            "org.apache.tinkerpop.gremlin.process.traversal.strategy.verification.ReadOnlyStrategy"
        )
        assert strategy.name == "ReadOnlyStrategy"

    def test_fqcns_are_unique(self):
        values = [kind.value for kind in StrategyKind]
        assert len(values) == len(set(values))

    def test_equality_by_fqcn(self):
        first = create_strategy("partition", partition_key="_p", write_partition="a")
        second = create_strategy("partition", partition_key="_p", write_partition="b")
        assert first == second
        assert hash(first) == hash(second)
        assert first != create_strategy("subgraph")

    @pytest.mark.parametrize(
        "name",
        [
            "subgraph",
            "SUBGRAPH",
            "SubgraphStrategy",
            "org.apache.tinkerpop.gremlin.process.traversal.strategy.decoration.SubgraphStrategy",
        ],
    )
    def test_resolve_kind_accepts_names(self, name):
        assert resolve_kind(name) is StrategyKind.SUBGRAPH

    def test_resolve_kind_accepts_dashes(self):
        assert resolve_kind("reserved-keys-verification") is StrategyKind.RESERVED_KEYS_VERIFICATION

    def test_unknown_kind_raises(self):
        with pytest.raises(StrategyConfigurationError, match="Unknown strategy"):
            create_strategy("nope")


# ---------------------------------------------------------------------------
# Zero-configuration kinds
# ---------------------------------------------------------------------------

ZERO_CONFIG_KINDS = [kind for kind in StrategyKind if kind not in CONFIGURATION_SCHEMAS]


class TestZeroConfiguration:
    @pytest.mark.parametrize("kind", ZERO_CONFIG_KINDS)
    def test_no_configuration(self, kind):
        assert create_strategy(kind).configuration is None

    def test_options_rejected(self):
        with pytest.raises(StrategyConfigurationError, match="takes no configuration"):
            create_strategy(StrategyKind.COUNT, threshold=3)

    def test_optimization_toggles_present(self):
        names = {kind.name for kind in ZERO_CONFIG_KINDS}
        assert {
            "ADJACENT_TO_INCIDENT", "FILTER_RANKING", "IDENTITY_REMOVAL",
            "INCIDENT_TO_ADJACENT", "INLINE_FILTER", "LAZY_BARRIER",
            "MATCH_PREDICATE", "ORDER_LIMIT", "PATH_PROCESSOR", "PATH_RETRACTION",
            "COUNT", "REPEAT_UNROLL", "GRAPH_FILTER", "EARLY_LIMIT",
            "LAMBDA_RESTRICTION", "READ_ONLY", "CONNECTIVE", "ELEMENT_ID",
        } <= names


# ---------------------------------------------------------------------------
# Parameterized kinds
# ---------------------------------------------------------------------------

class TestParameterized:
    def test_partition(self):
        strategy = create_strategy(
            "partition",
            partition_key="_partition",
            write_partition="a",
            read_partitions=["a", "b"],
            include_meta_properties=True,
        )
        assert strategy.configuration == {
            "partitionKey": "_partition",
            "writePartition": "a",
            "readPartitions": ["a", "b"],
            "includeMetaProperties": True,
        }

    def test_camel_case_options_accepted(self):
        strategy = create_strategy("partition", partitionKey="_p")
        assert strategy.configuration == {"partitionKey": "_p"}

    def test_unknown_option_on_fixed_shape_rejected(self):
        with pytest.raises(StrategyConfigurationError):
            create_strategy("partition", partition="a")

    def test_partition_flag_must_be_bool(self):
        with pytest.raises(StrategyConfigurationError):
            create_strategy("partition", include_meta_properties="yes")

    def test_halted_traverser(self):
        strategy = create_strategy("halted_traverser", halted_traverser_factory="com.example.Factory")
        assert strategy.configuration == {"haltedTraverserFactory": "com.example.Factory"}

    def test_halted_traverser_without_factory(self):
        assert create_strategy("halted_traverser").configuration is None

    def test_match_algorithm(self):
        strategy = create_strategy("match_algorithm", match_algorithm="greedy")
        assert strategy.configuration == {"matchAlgorithm": "greedy"}

    def test_productive_by(self):
        strategy = create_strategy("productive_by", productive_keys=["name"])
        assert strategy.configuration == {"productiveKeys": ["name"]}

    def test_options_bag_is_free_form(self):
        strategy = create_strategy("options", evaluationTimeout=500, custom={"a": 1})
        assert strategy.configuration == {"evaluationTimeout": 500, "custom": {"a": 1}}

    def test_options_bag_keeps_explicit_none(self):
        strategy = create_strategy("options", evaluationTimeout=None, batchSize=64)
        assert strategy.configuration == {"evaluationTimeout": None, "batchSize": 64}

    def test_vertex_program(self):
        strategy = create_strategy(
            "vertex_program",
            graph_computer="org.example.SparkGraphComputer",
            workers=4,
            vertices=_person_filter(),
        )
        config = strategy.configuration
        assert config["graphComputer"] == "org.example.SparkGraphComputer"
        assert config["workers"] == 4
        assert isinstance(config["vertices"], Bytecode)

    def test_vertex_program_workers_must_be_int(self):
        with pytest.raises(StrategyConfigurationError):
            create_strategy("vertex_program", workers="4")

    def test_seed(self):
        assert create_strategy("seed", seed=999).configuration == {"seed": 999}

    def test_seed_required(self):
        with pytest.raises(StrategyConfigurationError, match="SeedStrategy"):
            create_strategy("seed")

    def test_seed_must_be_int(self):
        with pytest.raises(StrategyConfigurationError):
            create_strategy("seed", seed="999")


class TestVerification:
    def test_edge_label_defaults(self):
        strategy = create_strategy("edge_label_verification")
        assert strategy.configuration == {"logWarnings": False, "throwException": False}

    def test_edge_label_flags(self):
        strategy = create_strategy("edge_label_verification", log_warnings=True, throw_exception=True)
        assert strategy.configuration == {"logWarnings": True, "throwException": True}

    def test_edge_label_flags_must_be_bool(self):
        with pytest.raises(StrategyConfigurationError):
            create_strategy("edge_label_verification", log_warnings="yes")

    def test_reserved_keys_default(self):
        strategy = create_strategy("reserved_keys_verification")
        assert strategy.configuration["keys"] == ["id", "label"]
        assert strategy.configuration["logWarnings"] is False

    def test_reserved_keys_custom(self):
        strategy = create_strategy("reserved_keys_verification", keys=["id", "name"], throw_exception=True)
        assert strategy.configuration == {
            "logWarnings": False,
            "throwException": True,
            "keys": ["id", "name"],
        }

    def test_reserved_keys_default_from_environment(self, monkeypatch):
        monkeypatch.setenv("GREMLIN_REMOTE_STRATEGY_RESERVED_KEYS", '["id", "label", "uuid"]')
        strategy = create_strategy("reserved_keys_verification")
        assert strategy.configuration["keys"] == ["id", "label", "uuid"]


# ---------------------------------------------------------------------------
# Lowering and ownership
# ---------------------------------------------------------------------------

class TestLowering:
    def test_subgraph_stores_lowered_vertices(self):
        vertices = _person_filter()
        strategy = create_strategy("subgraph", vertices=vertices)
        stored = strategy.configuration["vertices"]
        assert isinstance(stored, Bytecode)
        assert not isinstance(stored, Traversal)
        assert stored == vertices.bytecode
        assert stored is not vertices.bytecode

    def test_each_field_lowered_independently(self):
        edges = Traversal().add_step("has", "weight", 0.5)
        strategy = create_strategy(
            "subgraph",
            vertices=_person_filter(),
            edges=edges,
            vertex_properties="already-compiled",
            check_adjacent_vertices=False,
        )
        config = strategy.configuration
        assert config["vertices"] == _person_filter().bytecode
        assert config["edges"] == edges.bytecode
        assert config["vertexProperties"] == "already-compiled"
        assert config["checkAdjacentVertices"] is False

    def test_bytecode_passes_through(self):
        bytecode = _person_filter().lower()
        strategy = create_strategy("subgraph", vertices=bytecode)
        assert strategy.configuration["vertices"] == bytecode

    def test_unset_fields_omitted(self):
        strategy = create_strategy("subgraph", edges=_person_filter())
        assert set(strategy.configuration) == {"edges"}

    def test_later_changes_to_traversal_not_seen(self):
        vertices = _person_filter()
        strategy = create_strategy("subgraph", vertices=vertices)
        vertices.add_step("has", "age")
        assert len(strategy.configuration["vertices"].step_instructions) == 1

    def test_lower_helper(self):
        traversal = _person_filter()
        assert lower(traversal) == traversal.bytecode
        assert lower("x") == "x"


class TestOwnership:
    def test_caller_mapping_copied(self):
        options = {"custom": {"nested": [1]}}
        strategy = TraversalStrategy(StrategyKind.OPTIONS, options)
        options["custom"]["nested"].append(2)
        options["extra"] = True
        assert strategy.configuration == {"custom": {"nested": [1]}}

    def test_returned_configuration_is_a_copy(self):
        strategy = create_strategy("reserved_keys_verification")
        strategy.configuration["keys"].append("name")
        assert strategy.configuration["keys"] == ["id", "label"]

    def test_to_record(self):
        record = create_strategy("seed", seed=1).to_record()
        assert record == StrategyRecord(fqcn=StrategyKind.SEED.value, configuration={"seed": 1})

    def test_repr(self):
        assert repr(create_strategy("count")) == "CountStrategy()"
        assert repr(create_strategy("seed", seed=1)) == "SeedStrategy({'seed': 1})"

    @pytest.mark.asyncio
    async def test_default_apply_leaves_traversal_untouched(self):
        traversal = _person_filter()
        await create_strategy("read_only").apply(traversal)
        assert traversal.bytecode == _person_filter().bytecode
