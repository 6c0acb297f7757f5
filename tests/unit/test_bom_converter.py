# ============================================================
# tests/unit/test_bom_converter.py - BomConverter tests
# ============================================================
# pytest -v tests/unit/test_bom_converter.py
# ============================================================

from datetime import date
from decimal import Decimal

import pytest

from bomgraph.conversion import (
    BomComponentRecord,
    BomConverter,
    BomRecord,
    MaterialRecord,
    component_code_window,
    is_cylinder_code,
    parse_cylinder_code,
    sanitize_code,
)
from bomgraph.ontology import BASE_URI, XSD_DATE, XSD_DECIMAL, Literal, NodeRef

# 0123456789012345
# 3110A063000150Y1
MASTER_CODE = "3110A063000150Y1"


@pytest.fixture
def converter(graph, schema):
    return BomConverter(graph, schema)


def _component(code, seq=10, **kwargs):
    return BomComponentRecord(component_code=code, sequence=seq, **kwargs)


# ============================================================
# [1] Code helpers
# ============================================================

class TestCodeHelpers:
    """Sanitizing and positional code parsing"""

    def test_sanitize_replaces_unsafe_characters(self):
        assert sanitize_code("AB 12/3") == "AB_12_3"
        assert sanitize_code("A  \tB") == "A_B"
        assert sanitize_code("ok-1.2_x") == "ok-1.2_x"
        assert sanitize_code("a#b?c") == "a_b_c"

    def test_sanitize_none(self):
        assert sanitize_code(None) == ""

    def test_is_cylinder_code(self):
        assert is_cylinder_code(MASTER_CODE)
        assert is_cylinder_code("4" + "0" * 14)
        assert not is_cylinder_code("5" + "0" * 15)
        assert not is_cylinder_code("3" + "0" * 13)  # 14 chars
        assert not is_cylinder_code("")
        assert not is_cylinder_code(None)

    def test_parse_cylinder_code_offsets(self):
        derived = parse_cylinder_code(MASTER_CODE)
        assert derived == {
            "series": MASTER_CODE[2:4],
            "cylinderType": MASTER_CODE[4:5],
            "bore": MASTER_CODE[5:8],
            "stroke": MASTER_CODE[10:14],
            "rodEndType": MASTER_CODE[14:15],
            "accessories": MASTER_CODE[15:16],
        }
        assert derived["series"] == "10"
        assert derived["cylinderType"] == "A"
        assert derived["bore"] == "063"
        assert derived["stroke"] == "0150"
        assert derived["rodEndType"] == "Y"

    def test_parse_exactly_fifteen_characters_has_no_accessories(self):
        derived = parse_cylinder_code(MASTER_CODE[:15])
        assert "accessories" not in derived
        assert derived["rodEndType"] == "Y"

    def test_parse_non_cylinder_code(self):
        assert parse_cylinder_code("30202000001") == {}
        assert parse_cylinder_code("9110A063000150Y1") == {}

    def test_component_code_window(self):
        assert component_code_window("21203X") == "203"
        assert component_code_window("2120") is None
        assert component_code_window(None) is None


# ============================================================
# [2] Record models
# ============================================================

class TestRecords:
    """ERP record parsing"""

    def test_component_from_dict(self):
        record = BomComponentRecord.from_dict({
            "component_code": "21203X",
            "sequence": "10",
            "effective_date": "2024-01-15T00:00:00",
            "quantity": "2.5",
        })
        assert record.sequence == 10
        assert record.effective_date == date(2024, 1, 15)
        assert record.expiry_date is None
        assert record.quantity == Decimal("2.5")

    def test_invalid_quantity(self):
        with pytest.raises(ValueError, match="Invalid quantity"):
            BomComponentRecord.from_dict({"component_code": "X", "sequence": 1, "quantity": "two"})

    def test_bom_record_round_trip(self):
        data = {
            "master_code": MASTER_CODE,
            "characteristic_code": "C1",
            "components": [{"component_code": "21203X", "sequence": 10, "quantity": "1"}],
        }
        record = BomRecord.from_dict(data)
        assert BomRecord.from_dict(record.to_dict()) == record


# ============================================================
# [3] Material conversion
# ============================================================

class TestConvertMaterial:
    """Item master rows"""

    def test_creates_material_node(self, converter, graph):
        ref = converter.convert_material(MaterialRecord("AB 12/3", name="Rod", spec="Ø35"))
        assert ref.uri == BASE_URI + "Material_AB_12_3"
        node = graph.get(ref.uri)
        assert node.has_type("Material")
        assert node.first_value("itemCode") == "AB 12/3"
        assert node.first_value("itemName") == "Rod"
        assert node.first_value("itemSpec") == "Ø35"

    def test_update_replaces_name(self, converter, graph):
        converter.convert_material(MaterialRecord("X1", name="Old"))
        ref = converter.convert_material(MaterialRecord("X1", name="New"))
        assert graph.get(ref.uri).values("itemName") == [Literal("New")]
        assert len(graph) == 1

    def test_registers_in_index(self, converter):
        index = converter.convert_materials([MaterialRecord("X1"), MaterialRecord("X2")])
        assert set(index) == {"X1", "X2"}

    def test_missing_code_skipped(self, converter, graph):
        assert converter.convert_material(MaterialRecord("")) is None
        assert len(graph) == 0


# ============================================================
# [4] BOM conversion
# ============================================================

class TestConvertBomStructure:
    """BOM header and component rows"""

    def test_master_attributes_from_code(self, converter, graph):
        result = converter.convert_bom_structure(BomRecord(MASTER_CODE, characteristic_code="C 1"))
        master = graph.get(result.master.uri)
        assert master.has_type("MasterItem")
        assert master.first_value("bore") == "063"
        assert master.first_value("stroke") == "0150"
        assert master.first_value("series") == "10"
        assert master.first_value("cylinderType") == "A"
        assert master.first_value("rodEndType") == "Y"
        assert master.first_value("accessories") == "1"
        # Master characteristic code is stored as given
        assert master.first_value("characteristicCode") == "C 1"
        assert result.derived_attributes["bore"] == "063"

    def test_placeholder_master_and_component(self, converter, graph):
        result = converter.convert_bom_structure(BomRecord("M1"), [_component("C1")])
        assert result.master.uri == BASE_URI + "MasterItem_M1"
        assert result.components == [NodeRef(BASE_URI + "ComponentItem_C1")]
        assert graph.get(result.master.uri).first_value("itemCode") == "M1"
        # Short code: nothing derived
        assert result.derived_attributes == {}

    def test_uses_indexed_material_nodes(self, converter, graph):
        index = converter.convert_materials([MaterialRecord(MASTER_CODE), MaterialRecord("21203X")])
        result = converter.convert_bom_structure(BomRecord(MASTER_CODE), [_component("21203X")], index)

        master = graph.get(result.master.uri)
        component = graph.get(result.components[0].uri)
        assert master.uri == BASE_URI + "Material_" + MASTER_CODE
        assert master.types == {"Material", "MasterItem"}
        assert component.types == {"Material", "ComponentItem"}

    def test_relation_node(self, converter, graph):
        component = _component(
            "21203X",
            seq=10,
            effective_date=date(2024, 1, 1),
            expiry_date=date(2030, 12, 31),
            quantity=Decimal("2"),
            characteristic_code="K 9",
        )
        result = converter.convert_bom_structure(BomRecord("M1"), [component])

        relation = graph.get(result.relations[0].uri)
        assert relation.uri == BASE_URI + "BOM_M1_10_21203X"
        assert relation.has_type("BillOfMaterial")
        assert relation.values("hasMasterItem") == [result.master]
        assert relation.values("hasComponentItem") == [result.components[0]]
        assert relation.values("effectiveDate") == [Literal("2024-01-01", XSD_DATE)]
        assert relation.values("expiryDate") == [Literal("2030-12-31", XSD_DATE)]
        assert relation.values("quantity") == [Literal("2", XSD_DECIMAL)]
        assert relation.first_value("characteristicCode") == "K_9"

    def test_component_links_back_to_master(self, converter, graph):
        result = converter.convert_bom_structure(BomRecord("M1"), [_component("C1")])
        component = graph.get(result.components[0].uri)
        assert component.values("isUsedIn") == [result.master]
        assert [n.uri for n in graph.incoming(result.master.uri, "isUsedIn")] == [component.uri]

    def test_installation_lands_on_master(self, converter, graph):
        result = converter.convert_bom_structure(BomRecord(MASTER_CODE), [_component("21203X")])
        master = graph.get(result.master.uri)
        component = graph.get(result.components[0].uri)
        assert master.first_value("installation") == "FA"
        assert component.first_value("installation") is None
        assert result.installation == ["FA"]

    def test_shaft_end_join_lands_on_master(self, converter, graph):
        result = converter.convert_bom_structure(BomRecord("M1"), [_component("21211X")])
        assert graph.get(result.master.uri).first_value("shaftEndJoin") == "Pin"
        assert result.shaft_end_join == ["Pin"]

    @pytest.mark.parametrize("window,expected", [
        ("201", "CA"), ("202", "CB"), ("203", "FA"),
        ("206", "TC"), ("207", "LA"), ("208", "LB"),
    ])
    def test_installation_table(self, converter, graph, window, expected):
        result = converter.convert_bom_structure(BomRecord("M1"), [_component(f"21{window}0")])
        assert graph.get(result.master.uri).first_value("installation") == expected

    def test_unmapped_window_adds_nothing(self, converter, graph):
        result = converter.convert_bom_structure(BomRecord("M1"), [_component("21999X"), _component("21")])
        master = graph.get(result.master.uri)
        assert master.first_value("installation") is None
        assert master.first_value("shaftEndJoin") is None

    def test_overlapping_tables_apply_both(self, graph, schema):
        class OverlapConverter(BomConverter):
            installation_codes = {"209": "CA"}

        converter = OverlapConverter(graph, schema)
        result = converter.convert_bom_structure(BomRecord("M1"), [_component("21209X")])
        master = graph.get(result.master.uri)
        assert master.first_value("installation") == "CA"
        assert master.first_value("shaftEndJoin") == "Y"

    def test_component_without_code_skipped(self, converter, graph):
        result = converter.convert_bom_structure(BomRecord("M1"), [_component("", seq=20), _component("C1")])
        assert result.skipped == ["20"]
        assert len(result.relations) == 1

    def test_master_without_code(self, converter, graph):
        assert converter.convert_bom_structure(BomRecord("")) is None
        assert len(graph) == 0

    def test_components_default_to_record(self, converter):
        bom = BomRecord("M1", components=[_component("C1"), _component("C2", seq=20)])
        result = converter.convert_bom_structure(bom)
        assert len(result.components) == 2

    def test_reconversion_is_idempotent(self, converter, graph):
        index = {}
        bom = BomRecord(MASTER_CODE, characteristic_code="C1", components=[
            _component("21203X", quantity=Decimal("1")),
            _component("21209X", seq=20),
        ])
        first = converter.convert_bom_structure(bom, index=index)
        stats_before = graph.statistics()

        second = converter.convert_bom_structure(bom, index=index)

        assert first.master == second.master
        assert first.relations == second.relations
        assert graph.statistics() == stats_before
        master = graph.get(first.master.uri)
        assert master.values("installation") == [Literal("FA")]
        component = graph.get(first.components[0].uri)
        assert len(component.values("isUsedIn")) == 1
