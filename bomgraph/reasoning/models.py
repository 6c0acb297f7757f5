"""
Reasoning report models

Strongly typed result of one reasoner call. Built only by
bomgraph.reasoning.extractor.extract().
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ValidationIssue:
    """Consistency/validation problem reported by the reasoner"""
    type: str
    description: str
    severity: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"type": self.type, "description": self.description}
        if self.severity is not None:
            result["severity"] = self.severity
        return result


@dataclass
class InferredTriple:
    """Statement entailed by the reasoner"""
    subject: str
    predicate: str
    object: str
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"subject": self.subject, "predicate": self.predicate, "object": self.object}
        if self.category is not None:
            result["category"] = self.category
        return result


@dataclass
class InferredSubclass:
    """Entailed subclass relation"""
    subclass: str
    superclass: str
    confidence: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"subclass": self.subclass, "superclass": self.superclass}
        if self.confidence is not None:
            result["confidence"] = self.confidence
        return result


@dataclass
class HierarchyComponent:
    """Component of a master item with its inferred properties"""
    code: Optional[str] = None
    uri: Optional[str] = None
    name: Optional[str] = None
    spec: Optional[str] = None
    quantity: Optional[str] = None
    effective_date: Optional[str] = None
    expiry_date: Optional[str] = None
    inferred_properties: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "uri": self.uri,
            "name": self.name,
            "spec": self.spec,
            "quantity": self.quantity,
            "effective_date": self.effective_date,
            "expiry_date": self.expiry_date,
            "inferred_properties": self.inferred_properties,
        }


@dataclass
class BomHierarchy:
    """Master item with its components (full-hierarchy requests only)"""
    code: Optional[str] = None
    uri: Optional[str] = None
    inferred_properties: Dict[str, List[str]] = field(default_factory=dict)
    components: List[HierarchyComponent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "uri": self.uri,
            "inferred_properties": self.inferred_properties,
            "components": [c.to_dict() for c in self.components],
        }


@dataclass
class ReasoningReport:
    """
    Reasoner call result

    Attributes:
        master_item_code: master item the call was about
        reasoner_type: reasoner identifier (e.g. "OWL_RL")
        valid: False on inconsistency or on any error
        validation_issues: reported problems
        inferred_triples: entailed statements
        inferred_subclasses: entailed subclass pairs
        bom_hierarchy: present only for full-hierarchy requests
        error_message: set when the call failed or timed out
        elapsed_ms: wall time of the call
    """
    master_item_code: Optional[str]
    reasoner_type: str
    valid: bool = True
    validation_issues: List[ValidationIssue] = field(default_factory=list)
    inferred_triples: List[InferredTriple] = field(default_factory=list)
    inferred_subclasses: List[InferredSubclass] = field(default_factory=list)
    bom_hierarchy: Optional[BomHierarchy] = None
    error_message: Optional[str] = None
    elapsed_ms: int = 0

    @property
    def is_error(self) -> bool:
        return self.error_message is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "master_item_code": self.master_item_code,
            "reasoner_type": self.reasoner_type,
            "valid": self.valid,
            "validation_issues": [i.to_dict() for i in self.validation_issues],
            "inferred_triples": [t.to_dict() for t in self.inferred_triples],
            "inferred_subclasses": [s.to_dict() for s in self.inferred_subclasses],
            "bom_hierarchy": self.bom_hierarchy.to_dict() if self.bom_hierarchy else None,
            "error_message": self.error_message,
            "elapsed_ms": self.elapsed_ms,
        }
