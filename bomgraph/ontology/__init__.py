"""
Ontology module

Schema (classes, properties, axioms), the once-only schema builder and the
in-memory knowledge graph.

Namespaces:
- BASE_URI: generic material/BOM vocabulary (Material, MasterItem, ComponentItem, BillOfMaterial)
- HC_URI: hydraulic-cylinder taxonomy (series, bore, stroke, rod end, components, ...)

Usage:
    from bomgraph.ontology import build_schema, KnowledgeGraph, to_rdflib

    schema = build_schema()
    graph = KnowledgeGraph(schema)
    rdf = to_rdflib(graph, schema)
"""

from .schema import (
    BASE_URI,
    HC_URI,
    RDF_TYPE,
    XSD_DATE,
    XSD_DECIMAL,
    XSD_STRING,
    CardinalityKind,
    CardinalityRestriction,
    ClassDefinition,
    EquivalentClassExpression,
    HasValueRestriction,
    PropertyDefinition,
    PropertyFlag,
    PropertyKind,
    Schema,
    ValueRangeRestriction,
)
from .graph import (
    GraphNode,
    KnowledgeGraph,
    Literal,
    NodeRef,
)
from .schema_builder import (
    HydraulicCylinderSchemaBuilder,
    ReadWriteLock,
    build_schema,
)
from .rdf_export import (
    schema_to_rdflib,
    to_rdflib,
)

__all__ = [
    # Namespaces / datatypes
    "BASE_URI",
    "HC_URI",
    "RDF_TYPE",
    "XSD_DATE",
    "XSD_DECIMAL",
    "XSD_STRING",
    # Schema
    "CardinalityKind",
    "CardinalityRestriction",
    "ClassDefinition",
    "EquivalentClassExpression",
    "HasValueRestriction",
    "PropertyDefinition",
    "PropertyFlag",
    "PropertyKind",
    "Schema",
    "ValueRangeRestriction",
    # Graph
    "GraphNode",
    "KnowledgeGraph",
    "Literal",
    "NodeRef",
    # Builder
    "HydraulicCylinderSchemaBuilder",
    "ReadWriteLock",
    "build_schema",
    # RDF
    "schema_to_rdflib",
    "to_rdflib",
]
