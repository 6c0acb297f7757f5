"""
bomgraph - Hydraulic-cylinder BOM knowledge graph

Turns ERP item master and bill-of-material rows into an ontology-typed
knowledge graph, classifies cylinders by their specifications and runs an
external reasoner over the result.

Modules:
    - config: project settings (YAML + .env)
    - ontology: schema, schema builder, in-memory graph, rdflib export
    - conversion: item master / BOM rows -> graph individuals
    - classification: taxonomy classification, validation, suggestions
    - reasoning: timeout-bounded reasoner calls and result extraction
    - cache: similarity score / search result caches

Usage:
    from bomgraph import get_settings, build_schema

    schema = build_schema()
    print(get_settings().reasoner.timeout_seconds)  # 30.0
"""

__version__ = "0.1.0"
__author__ = "bomgraph team"

from bomgraph.config import get_settings, reload_settings, setup_logging, Settings
from bomgraph.exceptions import (
    BomGraphError,
    ReasonerTimeoutError,
    SchemaBuildError,
    UnknownClassError,
    UnknownPropertyError,
)
from bomgraph.ontology import KnowledgeGraph, Schema, build_schema

__all__ = [
    # Settings
    "get_settings",
    "reload_settings",
    "setup_logging",
    "Settings",
    # Errors
    "BomGraphError",
    "ReasonerTimeoutError",
    "SchemaBuildError",
    "UnknownClassError",
    "UnknownPropertyError",
    # Core
    "KnowledgeGraph",
    "Schema",
    "build_schema",
    "__version__",
]
