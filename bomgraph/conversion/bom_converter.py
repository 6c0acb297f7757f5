# ============================================================
# bomgraph/conversion/bom_converter.py - ERP BOM -> graph
# ============================================================
# Turns item master rows and BOM rows into graph individuals.
#
# Node URIs (BASE namespace):
#   - Material_<code>          item master row
#   - MasterItem_<code>        placeholder for an unseen master
#   - ComponentItem_<code>     placeholder for an unseen component
#   - BOM_<master>_<seq>_<comp> master/component relation
#
# Hydraulic-cylinder master codes (len >= 15, starting with 3/4)
# carry bore/stroke/series/type/rod end in fixed positions.
#
# Conversion is idempotent: the caller's code -> NodeRef index and
# the graph's get-or-create keep one node per code.
# ============================================================

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, MutableMapping, Optional, Sequence

from ..ontology.graph import GraphNode, KnowledgeGraph, Literal, NodeRef
from ..ontology.schema import XSD_DATE, XSD_DECIMAL, Schema
from .models import BomComponentRecord, BomRecord, MaterialRecord

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_NOT_URI_SAFE = re.compile(r"[^a-zA-Z0-9_\-.]")

CYLINDER_CODE_PREFIXES = ("3", "4")
CYLINDER_CODE_MIN_LENGTH = 15

# Component code window [2:5] lookups
INSTALLATION_CODES: Mapping[str, str] = {
    "201": "CA",
    "202": "CB",
    "203": "FA",
    "206": "TC",
    "207": "LA",
    "208": "LB",
}

SHAFT_END_JOIN_CODES: Mapping[str, str] = {
    "209": "Y",
    "210": "I",
    "211": "Pin",
}


# ============================================================
# [1] Code helpers
# ============================================================

def sanitize_code(code: Optional[str]) -> str:
    """
    Make an item code safe for use in a URI

    Whitespace runs become a single underscore, then every character
    outside [A-Za-z0-9_-.] becomes an underscore.

    Example:
        >>> sanitize_code("AB 12/3")
        'AB_12_3'
    """
    if code is None:
        return ""
    return _NOT_URI_SAFE.sub("_", _WHITESPACE.sub("_", code))


def is_cylinder_code(code: Optional[str]) -> bool:
    return bool(code) and len(code) >= CYLINDER_CODE_MIN_LENGTH and code.startswith(CYLINDER_CODE_PREFIXES)


def parse_cylinder_code(code: Optional[str]) -> Dict[str, str]:
    """
    Derive cylinder attributes from a master item code

    Returns:
        property name -> value, or {} if the code is not a cylinder code

    Example:
        >>> parse_cylinder_code("3110063A0150Y1")   # too short
        {}
        >>> parse_cylinder_code("3110A063000150Y1")["bore"]
        '063'
    """
    if not is_cylinder_code(code):
        return {}

    derived = {
        "series": code[2:4],
        "cylinderType": code[4:5],
        "bore": code[5:8],
        "stroke": code[10:14],
        "rodEndType": code[14:15],
    }
    if len(code) > 15:
        derived["accessories"] = code[15:16]
    return derived


def component_code_window(code: Optional[str]) -> Optional[str]:
    """Characters [2:5] of a component code, None if too short"""
    if not code or len(code) < 5:
        return None
    return code[2:5]


# ============================================================
# [2] Result
# ============================================================

@dataclass
class ConversionResult:
    """Summary of one BOM conversion"""
    master: NodeRef
    components: List[NodeRef] = field(default_factory=list)
    relations: List[NodeRef] = field(default_factory=list)
    derived_attributes: Dict[str, str] = field(default_factory=dict)
    installation: List[str] = field(default_factory=list)
    shaft_end_join: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "master": self.master.uri,
            "components": [c.uri for c in self.components],
            "relations": [r.uri for r in self.relations],
            "derived_attributes": dict(self.derived_attributes),
            "installation": list(self.installation),
            "shaft_end_join": list(self.shaft_end_join),
            "skipped": list(self.skipped),
        }


# ============================================================
# [3] BomConverter
# ============================================================

class BomConverter:
    """
    ERP record -> graph converter

    Stateless apart from the graph it writes to. The code -> NodeRef index
    is owned by the caller and shared across calls.

    Usage:
        converter = BomConverter(graph, schema)
        index = {}
        for item in materials:
            converter.convert_material(item, index)
        result = converter.convert_bom_structure(bom, bom.components, index)
    """

    installation_codes: Mapping[str, str] = INSTALLATION_CODES
    shaft_end_join_codes: Mapping[str, str] = SHAFT_END_JOIN_CODES

    def __init__(self, graph: KnowledgeGraph, schema: Schema):
        self.graph = graph
        self.schema = schema
        self.base_uri = schema.base_uri

    # --------------------------------------------------------
    # [3.1] Item master
    # --------------------------------------------------------

    def convert_material(
        self,
        item: MaterialRecord,
        index: Optional[MutableMapping[str, NodeRef]] = None,
    ) -> Optional[NodeRef]:
        """
        Create or update the Material node for an item master row

        Args:
            item: item master row
            index: code -> NodeRef index; the node is registered under item.code

        Returns:
            NodeRef, or None when the row has no code
        """
        if not item.code:
            logger.warning(f"Skipping material without code: {item}")
            return None

        uri = f"{self.base_uri}Material_{sanitize_code(item.code)}"
        node = self.graph.get_or_create(uri, types=["Material"])
        self.graph.add_value(uri, "itemCode", Literal(item.code))
        if item.name is not None:
            self.graph.set_value(uri, "itemName", Literal(item.name))
        if item.spec is not None:
            self.graph.set_value(uri, "itemSpec", Literal(item.spec))

        if index is not None:
            index[item.code] = node.ref
        logger.debug(f"Material converted: {item.code} -> {uri}")
        return node.ref

    def convert_materials(
        self,
        items: Iterable[MaterialRecord],
        index: Optional[MutableMapping[str, NodeRef]] = None,
    ) -> Dict[str, NodeRef]:
        """Convert item master rows, returning the (updated) index"""
        index = index if index is not None else {}
        for item in items:
            self.convert_material(item, index)
        return index

    # --------------------------------------------------------
    # [3.2] BOM structure
    # --------------------------------------------------------

    def convert_bom_structure(
        self,
        master: BomRecord,
        components: Optional[Sequence[BomComponentRecord]] = None,
        index: Optional[MutableMapping[str, NodeRef]] = None,
    ) -> Optional[ConversionResult]:
        """
        Convert a BOM header and its components

        Args:
            master: BOM header
            components: component rows (defaults to master.components)
            index: code -> NodeRef index shared with convert_material

        Returns:
            ConversionResult, or None when the master has no code
        """
        if not master.master_code:
            logger.warning("Skipping BOM without master code")
            return None

        index = index if index is not None else {}
        components = master.components if components is None else components

        master_node = self._resolve_item(master.master_code, "MasterItem", index)
        result = ConversionResult(master=master_node.ref)

        if master.characteristic_code is not None:
            self.graph.add_value(master_node.uri, "characteristicCode", Literal(master.characteristic_code))

        derived = parse_cylinder_code(master.master_code)
        for prop, value in derived.items():
            self.graph.add_value(master_node.uri, prop, Literal(value))
        result.derived_attributes = derived

        sanitized_master = sanitize_code(master.master_code)
        for component in components:
            if not component.component_code:
                logger.warning(f"Skipping component without code in BOM {master.master_code} (seq {component.sequence})")
                result.skipped.append(str(component.sequence))
                continue
            self._convert_component(master_node, sanitized_master, component, index, result)

        logger.debug(
            f"BOM converted: {master.master_code} "
            f"({len(result.relations)} relations, {len(result.skipped)} skipped)"
        )
        return result

    def _resolve_item(self, code: str, tag: str, index: MutableMapping[str, NodeRef]) -> GraphNode:
        """Indexed node with `tag` added, or a new <tag>_<code> placeholder"""
        ref = index.get(code)
        if ref is not None:
            return self.graph.get_or_create(ref.uri, types=[tag])

        uri = f"{self.base_uri}{tag}_{sanitize_code(code)}"
        node = self.graph.get_or_create(uri, types=[tag])
        self.graph.add_value(uri, "itemCode", Literal(code))
        index[code] = node.ref
        return node

    def _convert_component(
        self,
        master_node: GraphNode,
        sanitized_master: str,
        component: BomComponentRecord,
        index: MutableMapping[str, NodeRef],
        result: ConversionResult,
    ) -> None:
        component_node = self._resolve_item(component.component_code, "ComponentItem", index)
        result.components.append(component_node.ref)

        relation_uri = (
            f"{self.base_uri}BOM_{sanitized_master}_"
            f"{sanitize_code(str(component.sequence))}_{sanitize_code(component.component_code)}"
        )
        self.graph.get_or_create(relation_uri, types=["BillOfMaterial"])
        self.graph.add_value(relation_uri, "hasMasterItem", master_node.ref)
        self.graph.add_value(relation_uri, "hasComponentItem", component_node.ref)
        self.graph.add_value(component_node.uri, "isUsedIn", master_node.ref)

        if component.effective_date is not None:
            self.graph.add_value(relation_uri, "effectiveDate", Literal(component.effective_date.isoformat(), XSD_DATE))
        if component.expiry_date is not None:
            self.graph.add_value(relation_uri, "expiryDate", Literal(component.expiry_date.isoformat(), XSD_DATE))
        if component.quantity is not None:
            self.graph.add_value(relation_uri, "quantity", Literal(str(component.quantity), XSD_DECIMAL))
        if component.characteristic_code is not None:
            self.graph.add_value(relation_uri, "characteristicCode", Literal(sanitize_code(component.characteristic_code)))
        result.relations.append(NodeRef(relation_uri))

        # Both tables are checked independently; values land on the master
        window = component_code_window(component.component_code)
        if window is None:
            return
        installation = self.installation_codes.get(window)
        if installation is not None:
            self.graph.add_value(master_node.uri, "installation", Literal(installation))
            result.installation.append(installation)
        shaft_end_join = self.shaft_end_join_codes.get(window)
        if shaft_end_join is not None:
            self.graph.add_value(master_node.uri, "shaftEndJoin", Literal(shaft_end_join))
            result.shaft_end_join.append(shaft_end_join)
