"""
Structural completeness check

Evaluates the cardinality axioms of a cylinder class (exactly one barrel,
two end caps, ...) against the components of a converted BOM.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Set, Union

from ..ontology.graph import KnowledgeGraph, NodeRef
from ..ontology.schema import Schema
from .rules import ROOT_CLASS

logger = logging.getLogger(__name__)


@dataclass
class CompletenessReport:
    """Cardinality check outcome"""
    complete: bool
    violations: List[str] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"complete": self.complete, "violations": self.violations, "counts": self.counts}


def _expand(schema: Schema, tags: Iterable[str]) -> Set[str]:
    expanded: Set[str] = set()
    for tag in tags:
        if schema.has_class(tag):
            expanded.add(tag)
            expanded |= schema.superclasses(tag)
    return expanded


def check_completeness(
    schema: Schema,
    component_tags: Iterable[Union[str, Iterable[str]]],
    class_name: str = ROOT_CLASS,
) -> CompletenessReport:
    """
    Check component counts against the class's cardinality axioms

    Args:
        schema: built schema
        component_tags: one entry per component, either a single class tag
            or the component's tag set
        class_name: class whose axioms apply (default HydraulicCylinder)

    Returns:
        CompletenessReport

    Example:
        >>> check_completeness(schema, ["CylinderBarrel", "Piston", "PistonRod",
        ...                             "RodSeal", "HeadEndCap", "RodEndCap"]).complete
        True
    """
    components = [
        _expand(schema, [tags] if isinstance(tags, str) else tags)
        for tags in component_tags
    ]

    counts: Dict[str, int] = {}
    violations: List[str] = []
    for axiom in schema.cardinality_axioms(class_name):
        actual = sum(1 for tags in components if axiom.on_class in tags)
        counts[axiom.on_class] = actual
        if not axiom.is_satisfied(actual):
            violations.append(f"{class_name}: expected {axiom.describe()}, found {actual}")

    return CompletenessReport(complete=not violations, violations=violations, counts=counts)


def component_tags_for(graph: KnowledgeGraph, master_uri: str) -> List[Set[str]]:
    """Tag sets of the components linked to a master through BOM relations"""
    master = NodeRef(master_uri)
    tags: List[Set[str]] = []
    seen: Set[str] = set()
    for relation in graph.nodes_of_type("BillOfMaterial"):
        if master not in relation.values("hasMasterItem"):
            continue
        for ref in relation.values("hasComponentItem"):
            if not isinstance(ref, NodeRef) or ref.uri in seen:
                continue
            seen.add(ref.uri)
            if ref.uri in graph:
                tags.append(graph.types_of(ref.uri))
    logger.debug(f"{len(tags)} components found for {master_uri}")
    return tags
