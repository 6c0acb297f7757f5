"""
Conversion module

ERP item master / BOM rows -> knowledge graph individuals.

Usage:
    from bomgraph.conversion import BomConverter, BomRecord, MaterialRecord

    converter = BomConverter(graph, schema)
    index = converter.convert_materials(materials)
    result = converter.convert_bom_structure(bom, bom.components, index)
"""

from .models import (
    BomComponentRecord,
    BomRecord,
    MaterialRecord,
)
from .bom_converter import (
    INSTALLATION_CODES,
    SHAFT_END_JOIN_CODES,
    BomConverter,
    ConversionResult,
    component_code_window,
    is_cylinder_code,
    parse_cylinder_code,
    sanitize_code,
)

__all__ = [
    # Models
    "BomComponentRecord",
    "BomRecord",
    "MaterialRecord",
    # Converter
    "BomConverter",
    "ConversionResult",
    "INSTALLATION_CODES",
    "SHAFT_END_JOIN_CODES",
    "component_code_window",
    "is_cylinder_code",
    "parse_cylinder_code",
    "sanitize_code",
]
