# ============================================================
# tests/unit/test_completeness.py - Cardinality check tests
# ============================================================
# pytest -v tests/unit/test_completeness.py
# ============================================================

from bomgraph.classification import check_completeness, component_tags_for
from bomgraph.conversion import BomComponentRecord, BomConverter, BomRecord

COMPLETE_SET = ["CylinderBarrel", "Piston", "PistonRod", "RodSeal", "HeadEndCap", "RodEndCap"]


class TestCheckCompleteness:
    """Component counts against HydraulicCylinder axioms"""

    def test_complete_set(self, schema):
        report = check_completeness(schema, COMPLETE_SET)
        assert report.complete
        assert report.violations == []
        assert report.counts["EndCap"] == 2
        assert report.counts["SealingComponent"] == 1

    def test_subclasses_count_toward_axiom(self, schema):
        report = check_completeness(schema, COMPLETE_SET + ["WiperSeal", "PistonSeal"])
        assert report.complete
        assert report.counts["SealingComponent"] == 3

    def test_missing_end_cap(self, schema):
        tags = [t for t in COMPLETE_SET if t != "RodEndCap"]
        report = check_completeness(schema, tags)
        assert not report.complete
        assert report.violations == ["HydraulicCylinder: expected hasComponent exactly 2 EndCap, found 1"]

    def test_two_barrels(self, schema):
        report = check_completeness(schema, COMPLETE_SET + ["CylinderBarrel"])
        assert "HydraulicCylinder: expected hasComponent exactly 1 CylinderBarrel, found 2" in report.violations

    def test_no_seals(self, schema):
        tags = [t for t in COMPLETE_SET if t != "RodSeal"]
        report = check_completeness(schema, tags)
        assert report.violations == ["HydraulicCylinder: expected hasComponent at least 1 SealingComponent, found 0"]

    def test_tag_sets_and_unknown_tags(self, schema):
        entries = [{"ComponentItem", "CylinderBarrel"}, {"Piston"}, {"PistonRod", "NotAClass"},
                   "RodSeal", "HeadEndCap", "RodEndCap", "NotAClass"]
        assert check_completeness(schema, entries).complete

    def test_axioms_inherited_by_subclass(self, schema):
        report = check_completeness(schema, [], class_name="HeavyDutyCylinder")
        assert len(report.violations) == 5
        assert all(v.startswith("HeavyDutyCylinder:") for v in report.violations)


class TestComponentTagsFor:
    """Component tags from a converted BOM"""

    def test_converted_bom(self, graph, schema):
        converter = BomConverter(graph, schema)
        components = [BomComponentRecord(component_code=f"C{i}", sequence=i) for i in range(1, 7)]
        result = converter.convert_bom_structure(BomRecord("M1"), components)

        for ref, tag in zip(result.components, COMPLETE_SET):
            graph.add_type(ref.uri, tag)

        tags = component_tags_for(graph, result.master.uri)
        assert len(tags) == 6
        assert check_completeness(schema, tags).complete

    def test_untyped_components_incomplete(self, graph, schema):
        converter = BomConverter(graph, schema)
        result = converter.convert_bom_structure(
            BomRecord("M1"), [BomComponentRecord(component_code="C1", sequence=1)]
        )
        report = check_completeness(schema, component_tags_for(graph, result.master.uri))
        assert not report.complete
        assert report.counts["CylinderBarrel"] == 0

    def test_unrelated_master(self, graph):
        assert component_tags_for(graph, "urn:none") == []
