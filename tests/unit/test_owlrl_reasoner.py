# ============================================================
# tests/unit/test_owlrl_reasoner.py - owlrl reasoner tests
# ============================================================
# pytest -v tests/unit/test_owlrl_reasoner.py
# ============================================================

from decimal import Decimal

import pytest

from bomgraph.conversion import BomComponentRecord, BomConverter, BomRecord, MaterialRecord
from bomgraph.ontology import BASE_URI, HC_URI, KnowledgeGraph
from bomgraph.reasoning import OwlRlReasoner, ReasonerRunner, load_ruleset

MASTER = "3110A120000150Y1"

RDF_TYPE = "http://www.w3.org/1999/02/22-rdf-syntax-ns#type"


@pytest.fixture
def converted(graph, schema):
    """Cylinder master with two components"""
    converter = BomConverter(graph, schema)
    index = converter.convert_materials([
        MaterialRecord(MASTER, name="Cylinder 120/150"),
        MaterialRecord("21203A", name="Head cap"),
        MaterialRecord("21999B", name="Piston"),
    ])
    bom = BomRecord(MASTER, components=[
        BomComponentRecord(component_code="21203A", sequence=10, quantity=Decimal("1")),
        BomComponentRecord(component_code="21999B", sequence=20, quantity=Decimal("1")),
    ])
    result = converter.convert_bom_structure(bom, index=index)
    return graph, result


@pytest.fixture
def reasoner(schema):
    return OwlRlReasoner(schema)


class TestInference:
    """Closure and rule application"""

    def test_rule_classifies_cylinder(self, converted, reasoner):
        graph, result = converted
        raw = reasoner(graph, load_ruleset())
        statements = {(s["subject"], s["predicate"], s["object"]) for s in raw["inferredStatements"]}
        assert (result.master.uri, RDF_TYPE, BASE_URI + "Cylinder") in statements

    def test_value_rule_sets_flag(self, converted, reasoner):
        graph, result = converted
        raw = reasoner(graph, load_ruleset())
        flags = [
            s for s in raw["inferredStatements"]
            if s["subject"] == result.master.uri
            and s["predicate"] == BASE_URI + "requiresHeavyDutySealing"
        ]
        assert len(flags) == 1
        assert flags[0]["object"] == "true"
        assert flags[0]["category"] == "property"

    def test_no_canonical_literal_copies(self, converted, reasoner):
        graph, _ = converted
        raw = reasoner(graph, load_ruleset())
        properties = [s for s in raw["inferredStatements"] if s["category"] == "property"]
        slots = [(s["subject"], s["predicate"]) for s in properties]
        assert len(slots) == len(set(slots))
        # asserted literals (item codes, quantities) are not reported again
        predicates = {s["predicate"] for s in properties}
        assert BASE_URI + "itemCode" not in predicates
        assert BASE_URI + "quantity" not in predicates

    def test_statements_unique(self, converted, reasoner):
        graph, _ = converted
        raw = reasoner(graph, load_ruleset())
        keys = [(s["subject"], s["predicate"], s["object"]) for s in raw["inferredStatements"]]
        assert len(keys) == len(set(keys))

    def test_subclass_closure(self, converted, reasoner):
        graph, _ = converted
        raw = reasoner(graph, None)
        pairs = {(s["subclass"], s["superclass"]) for s in raw["inferredSubclasses"]}
        assert (HC_URI + "HeadEndCap", BASE_URI + "ComponentItem") in pairs
        assert all(s != o for s, o in pairs)

    def test_without_rules_no_cylinder_type(self, converted, reasoner):
        graph, result = converted
        raw = reasoner(graph, None)
        statements = {(s["subject"], s["object"]) for s in raw["inferredStatements"]}
        assert (result.master.uri, BASE_URI + "Cylinder") not in statements

    def test_mapping_ruleset_accepted(self, converted, reasoner):
        graph, result = converted
        ruleset = {"rules": [{
            "name": "Any", "kind": "code_pattern", "if_type": "Material",
            "pattern": "^2", "then_type": "Cylinder",
        }]}
        raw = reasoner(graph, ruleset)
        typed = {s["subject"] for s in raw["inferredStatements"] if s["object"] == BASE_URI + "Cylinder"}
        assert result.master.uri not in typed
        assert set(c.uri for c in result.components) <= typed

    def test_malformed_rule_skipped(self, converted, reasoner):
        graph, _ = converted
        raw = reasoner(graph, {"rules": [{"name": "Broken", "kind": "code_pattern", "if_type": "Material"}]})
        assert raw["isValid"] is True

    def test_unknown_semantics(self, schema):
        with pytest.raises(ValueError, match="Unknown semantics"):
            OwlRlReasoner(schema, semantics="DL")


class TestConsistency:
    """Disjointness and functional property checks"""

    def test_consistent_graph(self, converted, reasoner):
        graph, _ = converted
        raw = reasoner(graph, load_ruleset())
        assert raw["isValid"] is True
        assert raw["validationIssues"] == []

    def test_disjoint_classes(self, schema, reasoner):
        graph = KnowledgeGraph(schema)
        graph.get_or_create(HC_URI + "Cyl_1", types=["SmallBoreCylinder", "LargeBoreCylinder"])
        raw = reasoner(graph, None)
        assert raw["isValid"] is False
        assert raw["validationIssues"][0]["type"] == "DisjointClasses"
        assert "Cyl_1" in raw["validationIssues"][0]["description"]

    def test_functional_property(self, reasoner):
        graph = KnowledgeGraph()
        graph.get_or_create(HC_URI + "Cyl_2", types=["HydraulicCylinder"])
        graph.add_value(HC_URI + "Cyl_2", "bore", "63")
        graph.add_value(HC_URI + "Cyl_2", "bore", "80")
        raw = reasoner(graph, None)
        assert raw["isValid"] is False
        assert raw["validationIssues"][0]["type"] == "FunctionalProperty"


class TestHierarchy:
    """BOM hierarchy through the runner"""

    def test_reason_hierarchy(self, converted, schema):
        graph, result = converted
        with ReasonerRunner(OwlRlReasoner(schema), ruleset=load_ruleset()) as runner:
            report = runner.reason_hierarchy(graph, MASTER)

        assert report.valid is True
        assert report.reasoner_type == "OWL_RL"
        hierarchy = report.bom_hierarchy
        assert hierarchy.code == MASTER
        assert hierarchy.uri == result.master.uri
        assert [c.code for c in hierarchy.components] == ["21203A", "21999B"]
        assert hierarchy.components[0].name == "Head cap"
        assert hierarchy.components[0].quantity == "1"
        assert hierarchy.inferred_properties["requiresHeavyDutySealing"] == ["true"]

    def test_unknown_master_has_no_hierarchy(self, converted, reasoner):
        graph, _ = converted
        raw = reasoner(graph, None, "NOPE")
        assert "bomHierarchy" not in raw

    def test_validate_omits_hierarchy(self, converted, schema):
        graph, _ = converted
        with ReasonerRunner(OwlRlReasoner(schema)) as runner:
            report = runner.validate(graph, MASTER)
        assert report.bom_hierarchy is None
        assert report.valid is True
