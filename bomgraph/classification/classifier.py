# ============================================================
# bomgraph/classification/classifier.py - Cylinder classification
# ============================================================
# Maps a cylinder spec map to hydraulic-cylinder class tags.
#
# Spec keys:
#   bore, stroke, series, rodEndType, installationType
#
# Dimensions (at most one tag each):
#   bore      <=50 Small, <=100 Medium, else Large
#   stroke    <=100 Short, <=300 Medium, else Long
#   series    10/11/12/13
#   rod end   Y / I,E / P
#   install   FA / RA / TM
# ============================================================

import logging
from typing import Any, Dict, Mapping, Optional, Set

from ..ontology.graph import GraphNode, KnowledgeGraph, Literal
from .rules import (
    BORE_RULES,
    INSTALLATION_TAGS,
    ROD_END_TAGS,
    ROOT_CLASS,
    SERIES_TAGS,
    STROKE_RULES,
    match_threshold,
    parse_int,
)

logger = logging.getLogger(__name__)

SPEC_KEYS = ("bore", "stroke", "series", "rodEndType", "installationType")
NUMERIC_SPEC_KEYS = ("bore", "stroke")


def classify(specs: Mapping[str, Any]) -> Set[str]:
    """
    Class tags for a cylinder spec map

    Pure and total: unparseable values are logged and skipped.

    Args:
        specs: spec map (values may be str or int)

    Returns:
        tag set, always containing HydraulicCylinder

    Example:
        >>> sorted(classify({"bore": "63", "series": "10"}))
        ['HydraulicCylinder', 'MediumBoreCylinder', 'StandardCylinder']
    """
    tags = {ROOT_CLASS}

    for key, rules in (("bore", BORE_RULES), ("stroke", STROKE_RULES)):
        raw = specs.get(key)
        if raw is None or raw == "":
            continue
        value = parse_int(raw)
        if value is None:
            logger.warning(f"Non-numeric {key} ignored for classification: {raw!r}")
            continue
        tag = match_threshold(rules, value)
        if tag:
            tags.add(tag)

    for key, table in (
        ("series", SERIES_TAGS),
        ("rodEndType", ROD_END_TAGS),
        ("installationType", INSTALLATION_TAGS),
    ):
        raw = specs.get(key)
        if raw is None:
            continue
        tag = table.get(str(raw))
        if tag:
            tags.add(tag)

    return tags


def apply_classification(graph: KnowledgeGraph, uri: str, specs: Mapping[str, Any]) -> Set[str]:
    """
    Write specs onto a node and attach its class tags

    Spec keys the schema does not declare are skipped. Existing tags that
    are disjoint with a new tag are removed, so re-classifying a node after
    its bore changes leaves exactly one bore tag.

    Returns:
        tags attached
    """
    graph.get_or_create(uri)
    schema = graph.schema

    for key, value in specs.items():
        if value is None:
            continue
        if schema is not None and not schema.has_property(key):
            logger.debug(f"Spec key not in schema, not written: {key}")
            continue
        graph.add_value(uri, key, Literal(str(value)))

    tags = classify(specs)
    for tag in sorted(tags):
        if schema is not None:
            for stale in schema.get_class(tag).disjoint_with & graph.types_of(uri):
                logger.debug(f"Replacing {stale} with {tag} on {uri}")
                graph.remove_type(uri, stale)
        graph.add_type(uri, tag)

    logger.debug(f"Classified {uri}: {sorted(tags)}")
    return tags


def _normalize_number(value: str) -> str:
    parsed = parse_int(value)
    return str(parsed) if parsed is not None else value


def specs_from_node(node: GraphNode) -> Dict[str, str]:
    """
    Spec map from a converted master node

    Code slices like "063" come back as "63". installationType falls back
    to the converter's `installation` value.
    """
    specs: Dict[str, str] = {}
    for key in SPEC_KEYS:
        value: Optional[str] = node.first_value(key)
        if value is None and key == "installationType":
            value = node.first_value("installation")
        if value is None:
            continue
        specs[key] = _normalize_number(value) if key in NUMERIC_SPEC_KEYS else value
    return specs
