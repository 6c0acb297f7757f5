# ============================================================
# tests/unit/test_graph.py - KnowledgeGraph tests
# ============================================================
# pytest -v tests/unit/test_graph.py
# ============================================================

import threading

import pytest

from bomgraph.exceptions import UnknownClassError
from bomgraph.ontology import (
    BASE_URI,
    RDF_TYPE,
    XSD_DATE,
    XSD_STRING,
    KnowledgeGraph,
    Literal,
    NodeRef,
)

URI = BASE_URI + "Material_X1"


class TestNodes:
    """Node creation and type tags"""

    def test_get_or_create_does_not_duplicate(self, graph):
        first = graph.get_or_create(URI, types=["Material"])
        second = graph.get_or_create(URI, types=["ComponentItem"])
        assert first is second
        assert len(graph) == 1
        assert graph.types_of(URI) == {"Material", "ComponentItem"}

    def test_unknown_type_rejected_with_schema(self, graph):
        with pytest.raises(UnknownClassError):
            graph.get_or_create(URI, types=["Gearbox"])

    def test_any_type_without_schema(self):
        graph = KnowledgeGraph()
        graph.get_or_create(URI, types=["Gearbox"])
        assert graph.get(URI).has_type("Gearbox")

    def test_local_name(self, graph):
        node = graph.get_or_create(URI)
        assert node.local_name == "Material_X1"
        assert node.ref == NodeRef(URI)
        assert node.ref.local_name == "Material_X1"

    def test_nodes_of_type(self, graph):
        graph.get_or_create(URI, types=["Material"])
        graph.get_or_create(BASE_URI + "Material_X2", types=["Material", "MasterItem"])
        assert len(graph.nodes_of_type("Material")) == 2
        assert [n.uri for n in graph.nodes_of_type("MasterItem")] == [BASE_URI + "Material_X2"]

    def test_remove_type(self, graph):
        graph.get_or_create(URI, types=["Material", "MasterItem"])
        graph.remove_type(URI, "MasterItem")
        assert graph.types_of(URI) == {"Material"}

    def test_types_of_returns_copy(self, graph):
        graph.get_or_create(URI, types=["Material"])
        graph.types_of(URI).add("MasterItem")
        assert graph.types_of(URI) == {"Material"}

    def test_missing_node_raises(self, graph):
        with pytest.raises(KeyError):
            graph.add_type(URI, "Material")
        assert graph.get(URI) is None
        assert URI not in graph


class TestValues:
    """Property values"""

    def test_add_value_idempotent(self, graph):
        graph.get_or_create(URI)
        assert graph.add_value(URI, "itemCode", Literal("X1")) is True
        assert graph.add_value(URI, "itemCode", Literal("X1")) is False
        assert graph.get(URI).values("itemCode") == [Literal("X1")]

    def test_plain_string_becomes_string_literal(self, graph):
        graph.get_or_create(URI)
        graph.add_value(URI, "itemName", "Rod")
        value = graph.get(URI).values("itemName")[0]
        assert value == Literal("Rod", XSD_STRING)

    def test_multi_valued_property_keeps_order(self, graph):
        graph.get_or_create(URI)
        graph.add_value(URI, "installation", "FA")
        graph.add_value(URI, "installation", "CA")
        assert [str(v) for v in graph.get(URI).values("installation")] == ["FA", "CA"]

    def test_functional_property_keeps_one_value(self, graph):
        graph.get_or_create(URI)
        graph.add_value(URI, "bore", "063")
        assert graph.add_value(URI, "bore", "080") is True
        assert graph.get(URI).values("bore") == [Literal("080")]

    def test_functional_not_enforced_without_schema(self):
        graph = KnowledgeGraph()
        graph.get_or_create(URI)
        graph.add_value(URI, "bore", "063")
        graph.add_value(URI, "bore", "080")
        assert len(graph.get(URI).values("bore")) == 2

    def test_datatype_distinguishes_literals(self, graph):
        graph.get_or_create(URI)
        graph.add_value(URI, "effectiveDate", Literal("2024-01-01", XSD_DATE))
        graph.add_value(URI, "effectiveDate", Literal("2024-01-01"))
        assert len(graph.get(URI).values("effectiveDate")) == 2

    def test_set_value_replaces(self, graph):
        graph.get_or_create(URI)
        graph.add_value(URI, "itemName", "Old")
        graph.set_value(URI, "itemName", "New")
        assert graph.get(URI).first_value("itemName") == "New"

    def test_remove_values(self, graph):
        graph.get_or_create(URI)
        graph.add_value(URI, "itemName", "Rod")
        graph.remove_values(URI, "itemName")
        assert graph.get(URI).first_value("itemName") is None

    def test_values_returns_copy(self, graph):
        node = graph.get_or_create(URI)
        graph.add_value(URI, "itemName", "Rod")
        node.values("itemName").append(Literal("Other"))
        assert len(node.values("itemName")) == 1

    def test_add_value_to_missing_node(self, graph):
        with pytest.raises(KeyError):
            graph.add_value(URI, "itemCode", "X1")


class TestQueries:
    """Triples, incoming references and statistics"""

    def test_triples(self, graph):
        graph.get_or_create(URI, types=["Material"])
        graph.add_value(URI, "itemCode", "X1")
        triples = list(graph.triples())
        assert (URI, RDF_TYPE, "Material") in triples
        assert (URI, "itemCode", Literal("X1")) in triples

    def test_triples_snapshot_allows_mutation(self, graph):
        graph.get_or_create(URI, types=["Material"])
        for subject, _, _ in graph.triples():
            graph.get_or_create(subject + "_copy")
        assert len(graph) == 2

    def test_incoming(self, graph):
        master = BASE_URI + "MasterItem_M1"
        graph.get_or_create(master, types=["MasterItem"])
        graph.get_or_create(URI, types=["ComponentItem"])
        graph.add_value(URI, "isUsedIn", NodeRef(master))
        assert [n.uri for n in graph.incoming(master, "isUsedIn")] == [URI]

    def test_statistics(self, graph):
        graph.get_or_create(URI, types=["Material", "ComponentItem"])
        graph.add_value(URI, "itemCode", "X1")
        stats = graph.statistics()
        assert stats["total_nodes"] == 1
        assert stats["total_type_assertions"] == 2
        assert stats["total_property_values"] == 1
        assert stats["nodes_by_type"] == {"Material": 1, "ComponentItem": 1}

    def test_to_dict(self, graph):
        graph.get_or_create(URI, types=["Material"])
        graph.add_value(URI, "itemCode", "X1")
        data = graph.to_dict()
        assert data["nodes"][0]["types"] == ["Material"]
        assert data["nodes"][0]["properties"]["itemCode"] == [{"value": "X1", "datatype": XSD_STRING}]


class TestConcurrency:
    """Concurrent writers"""

    def test_concurrent_get_or_create_single_node(self, graph):
        barrier = threading.Barrier(8)

        def worker(i):
            barrier.wait()
            graph.get_or_create(URI, types=["Material"])
            graph.add_value(URI, "itemCode", "X1")
            graph.add_value(URI, "itemSpec", f"spec-{i}")

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        node = graph.get(URI)
        assert len(graph) == 1
        assert len(node.values("itemCode")) == 1
        assert len(node.values("itemSpec")) == 8
