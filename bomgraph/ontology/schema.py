# ============================================================
# bomgraph/ontology/schema.py - Ontology schema definitions
# ============================================================
# Class and property definitions for the material/BOM and
# hydraulic-cylinder taxonomy, plus the immutable Schema that
# every other component receives by reference.
#
# Namespaces:
#   - BASE_URI: generic material/BOM vocabulary
#   - HC_URI:   hydraulic-cylinder vocabulary
#
# Axioms:
#   - superclasses (multiple inheritance)
#   - disjointness (one class per dimension)
#   - equivalence (HydraulicCylinder ∩ property=value)
#   - cardinality (hasComponent counts per component class)
#   - property flags (functional, inverse, ...)
# ============================================================

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple

from ..exceptions import UnknownClassError, UnknownPropertyError


BASE_URI = "http://www.jfc.com/tiptop/ontology#"
HC_URI = "http://www.jfc.com/tiptop/hydraulic-cylinder#"

XSD_URI = "http://www.w3.org/2001/XMLSchema#"
XSD_STRING = XSD_URI + "string"
XSD_DATE = XSD_URI + "date"
XSD_DECIMAL = XSD_URI + "decimal"
XSD_INTEGER = XSD_URI + "integer"

RDF_TYPE = "http://www.w3.org/1999/02/22-rdf-syntax-ns#type"


# ============================================================
# [1] Enums
# ============================================================

class PropertyKind(str, Enum):
    """
    Property kind

    OBJECT links two nodes, DATATYPE links a node to a literal.
    """
    OBJECT = "object"
    DATATYPE = "datatype"


class PropertyFlag(str, Enum):
    """OWL property characteristics"""
    FUNCTIONAL = "functional"
    INVERSE_FUNCTIONAL = "inverseFunctional"
    TRANSITIVE = "transitive"
    SYMMETRIC = "symmetric"
    ASYMMETRIC = "asymmetric"
    REFLEXIVE = "reflexive"
    IRREFLEXIVE = "irreflexive"


class CardinalityKind(str, Enum):
    """Qualified cardinality restriction kind"""
    EXACT = "exact"
    MIN = "min"
    MAX = "max"


# ============================================================
# [2] Axiom dataclasses
# ============================================================

@dataclass(frozen=True)
class HasValueRestriction:
    """property has value `value`"""
    property: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"property": self.property, "value": self.value}


@dataclass(frozen=True)
class EquivalentClassExpression:
    """Intersection of a base class and a has-value restriction

    Example:
        StandardCylinder ≡ HydraulicCylinder ∩ (series = "10")
    """
    base_class: str
    restriction: HasValueRestriction

    def to_dict(self) -> Dict[str, Any]:
        return {
            "intersection_of": self.base_class,
            "has_value": self.restriction.to_dict(),
        }


@dataclass(frozen=True)
class CardinalityRestriction:
    """Qualified cardinality: `count` values of `property` that are `on_class`"""
    property: str
    on_class: str
    count: int
    kind: CardinalityKind = CardinalityKind.EXACT

    def is_satisfied(self, actual: int) -> bool:
        """Check an observed count against the restriction"""
        if self.kind == CardinalityKind.EXACT:
            return actual == self.count
        if self.kind == CardinalityKind.MIN:
            return actual >= self.count
        return actual <= self.count

    def describe(self) -> str:
        wording = {
            CardinalityKind.EXACT: "exactly",
            CardinalityKind.MIN: "at least",
            CardinalityKind.MAX: "at most",
        }[self.kind]
        return f"{self.property} {wording} {self.count} {self.on_class}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "property": self.property,
            "on_class": self.on_class,
            "count": self.count,
            "kind": self.kind.value,
        }


@dataclass(frozen=True)
class ValueRangeRestriction:
    """Numeric range annotation on a datatype property

    The classifier applies these thresholds directly. The schema only
    records them so exported ontologies document the boundaries.
    """
    property: str
    min_exclusive: Optional[float] = None
    max_inclusive: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "property": self.property,
            "min_exclusive": self.min_exclusive,
            "max_inclusive": self.max_inclusive,
        }


# ============================================================
# [3] Class / Property definitions
# ============================================================

@dataclass(frozen=True)
class ClassDefinition:
    """
    Ontology class

    Attributes:
        name: short class name (also used as the node type tag)
        namespace: namespace URI
        superclasses: direct superclass names
        equivalent_to: equivalent-class expressions
        disjoint_with: disjoint class names
        cardinality: cardinality restrictions declared on this class
        value_ranges: value range annotations
        comment: free-text description
    """
    name: str
    namespace: str
    superclasses: Tuple[str, ...] = ()
    equivalent_to: Tuple[EquivalentClassExpression, ...] = ()
    disjoint_with: FrozenSet[str] = frozenset()
    cardinality: Tuple[CardinalityRestriction, ...] = ()
    value_ranges: Tuple[ValueRangeRestriction, ...] = ()
    comment: str = ""

    @property
    def uri(self) -> str:
        return self.namespace + self.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "uri": self.uri,
            "superclasses": list(self.superclasses),
            "equivalent_to": [e.to_dict() for e in self.equivalent_to],
            "disjoint_with": sorted(self.disjoint_with),
            "cardinality": [c.to_dict() for c in self.cardinality],
            "value_ranges": [v.to_dict() for v in self.value_ranges],
            "comment": self.comment,
        }


@dataclass(frozen=True)
class PropertyDefinition:
    """
    Ontology property

    Attributes:
        name: short property name
        namespace: namespace URI
        kind: object or datatype
        domain: domain class name
        range: range class name (object) or XSD datatype URI (datatype)
        flags: OWL characteristics
        inverse_of: inverse property name
    """
    name: str
    namespace: str
    kind: PropertyKind
    domain: Optional[str] = None
    range: Optional[str] = None
    flags: FrozenSet[PropertyFlag] = frozenset()
    inverse_of: Optional[str] = None

    @property
    def uri(self) -> str:
        return self.namespace + self.name

    @property
    def is_functional(self) -> bool:
        return PropertyFlag.FUNCTIONAL in self.flags

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "uri": self.uri,
            "kind": self.kind.value,
            "domain": self.domain,
            "range": self.range,
            "flags": sorted(f.value for f in self.flags),
            "inverse_of": self.inverse_of,
        }


# ============================================================
# [4] Schema
# ============================================================

class Schema:
    """
    Immutable ontology schema

    Built once by HydraulicCylinderSchemaBuilder and shared by reference.
    The side tables (superclass/disjoint/equivalence) serve schema-level
    consistency checks, not runtime dispatch.

    Usage:
        schema = build_schema()
        schema.is_subclass_of("HeadEndCap", "EndCap")  # True
        schema.disjoint_violations({"SmallBoreCylinder", "LargeBoreCylinder"})
    """

    def __init__(
        self,
        classes: Mapping[str, ClassDefinition],
        properties: Mapping[str, PropertyDefinition],
        base_uri: str = BASE_URI,
        hc_uri: str = HC_URI,
        version: str = "1.0",
    ):
        self._classes = MappingProxyType(dict(classes))
        self._properties = MappingProxyType(dict(properties))
        self.base_uri = base_uri
        self.hc_uri = hc_uri
        self.version = version

        # name -> direct subclasses, for hierarchy walks
        children: Dict[str, Set[str]] = {name: set() for name in self._classes}
        for cls in self._classes.values():
            for parent in cls.superclasses:
                children[parent].add(cls.name)
        self._children = MappingProxyType({k: frozenset(v) for k, v in children.items()})

    # --------------------------------------------------------
    # [4.1] Lookups
    # --------------------------------------------------------

    @property
    def classes(self) -> Mapping[str, ClassDefinition]:
        return self._classes

    @property
    def properties(self) -> Mapping[str, PropertyDefinition]:
        return self._properties

    def has_class(self, name: str) -> bool:
        return name in self._classes

    def has_property(self, name: str) -> bool:
        return name in self._properties

    def get_class(self, name: str) -> ClassDefinition:
        """Class by name

        Raises:
            UnknownClassError: not declared
        """
        try:
            return self._classes[name]
        except KeyError:
            raise UnknownClassError(name) from None

    def get_property(self, name: str) -> PropertyDefinition:
        """Property by name

        Raises:
            UnknownPropertyError: not declared
        """
        try:
            return self._properties[name]
        except KeyError:
            raise UnknownPropertyError(name) from None

    def uri_for(self, name: str) -> str:
        """Full URI for a class or property name"""
        if name in self._classes:
            return self._classes[name].uri
        if name in self._properties:
            return self._properties[name].uri
        raise UnknownClassError(name)

    def is_functional(self, property_name: str) -> bool:
        prop = self._properties.get(property_name)
        return prop is not None and prop.is_functional

    # --------------------------------------------------------
    # [4.2] Hierarchy
    # --------------------------------------------------------

    def superclasses(self, name: str, transitive: bool = True) -> Set[str]:
        """Superclasses of a class (excluding itself)"""
        cls = self.get_class(name)
        if not transitive:
            return set(cls.superclasses)

        result: Set[str] = set()
        queue = deque(cls.superclasses)
        while queue:
            parent = queue.popleft()
            if parent in result:
                continue
            result.add(parent)
            queue.extend(self._classes[parent].superclasses)
        return result

    def subclasses(self, name: str, transitive: bool = True) -> Set[str]:
        """Subclasses of a class (excluding itself)"""
        self.get_class(name)
        if not transitive:
            return set(self._children[name])

        result: Set[str] = set()
        queue = deque(self._children[name])
        while queue:
            child = queue.popleft()
            if child in result:
                continue
            result.add(child)
            queue.extend(self._children[child])
        return result

    def is_subclass_of(self, name: str, ancestor: str) -> bool:
        """Reflexive subclass test"""
        if name == ancestor:
            return True
        return ancestor in self.superclasses(name)

    # --------------------------------------------------------
    # [4.3] Axiom queries
    # --------------------------------------------------------

    def disjoint_pairs(self) -> Set[FrozenSet[str]]:
        """All declared disjoint pairs"""
        pairs = set()
        for cls in self._classes.values():
            for other in cls.disjoint_with:
                pairs.add(frozenset((cls.name, other)))
        return pairs

    def disjoint_violations(self, tags: Iterable[str]) -> List[Tuple[str, str]]:
        """Disjoint pairs that occur together in a tag set

        Superclasses of each tag are included, so a subclass of a disjoint
        class also counts.
        """
        expanded: Set[str] = set()
        for tag in tags:
            if tag in self._classes:
                expanded.add(tag)
                expanded |= self.superclasses(tag)

        violations = []
        for pair in self.disjoint_pairs():
            a, b = sorted(pair)
            if a in expanded and b in expanded:
                violations.append((a, b))
        return sorted(violations)

    def equivalent_class_for(self, property_name: str, value: str) -> Optional[str]:
        """Class defined as equivalent to (base ∩ property=value)"""
        for cls in self._classes.values():
            for expr in cls.equivalent_to:
                if expr.restriction.property == property_name and expr.restriction.value == value:
                    return cls.name
        return None

    def cardinality_axioms(self, class_name: str) -> List[CardinalityRestriction]:
        """Cardinality restrictions on a class and its superclasses"""
        names = [class_name] + sorted(self.superclasses(class_name))
        axioms: List[CardinalityRestriction] = []
        for name in names:
            axioms.extend(self._classes[name].cardinality)
        return axioms

    # --------------------------------------------------------
    # [4.4] Serialization / statistics
    # --------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "base_uri": self.base_uri,
            "hc_uri": self.hc_uri,
            "classes": [c.to_dict() for c in self._classes.values()],
            "properties": [p.to_dict() for p in self._properties.values()],
        }

    def get_statistics(self) -> Dict[str, Any]:
        """Schema statistics"""
        by_namespace: Dict[str, int] = {}
        for cls in self._classes.values():
            by_namespace[cls.namespace] = by_namespace.get(cls.namespace, 0) + 1

        return {
            "total_classes": len(self._classes),
            "total_properties": len(self._properties),
            "classes_by_namespace": by_namespace,
            "object_properties": sum(1 for p in self._properties.values() if p.kind == PropertyKind.OBJECT),
            "functional_properties": sorted(p.name for p in self._properties.values() if p.is_functional),
            "disjoint_pairs": len(self.disjoint_pairs()),
            "cardinality_axioms": sum(len(c.cardinality) for c in self._classes.values()),
        }
