"""
Hydraulic cylinder schema builder

Builds the class hierarchy, property schema and axioms once per builder.
Construction is two-pass: every class and property is declared first, then
the links (superclasses, domains/ranges, inverses, disjointness, equivalence,
cardinality, flags) are resolved against the declarations. Any link to an
undeclared name aborts the build with SchemaBuildError.

Usage:
    from bomgraph.ontology import build_schema

    schema = build_schema()          # built on first call, shared afterwards
    schema.get_class("HydraulicCylinder").cardinality
"""

import logging
import threading
from contextlib import contextmanager
from typing import Dict, List, Optional, Set, Tuple

from ..config import NamespaceSettings, get_settings
from ..exceptions import SchemaBuildError
from .schema import (
    BASE_URI,
    HC_URI,
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

logger = logging.getLogger(__name__)

BASE = "base"
HC = "hc"


# ============================================================
# [1] Read/write lock
# ============================================================

class ReadWriteLock:
    """Many readers or one writer

    Writers wait for active readers to drain. A waiting writer blocks new
    readers so a steady stream of lookups cannot starve the build.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self):
        with self._cond:
            self._writers_waiting += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


# ============================================================
# [2] Declaration tables
# ============================================================

# (name, namespace, comment)
CLASS_DECLARATIONS: Tuple[Tuple[str, str, str], ...] = (
    # Generic material / BOM
    ("Material", BASE, "Any ERP item"),
    ("MasterItem", BASE, "Item that owns a BOM"),
    ("ComponentItem", BASE, "Item used in a BOM"),
    ("BillOfMaterial", BASE, "Master-component relation"),
    ("Cylinder", BASE, "Item whose code marks it as a cylinder"),
    # Hydraulic cylinder
    ("HydraulicCylinder", HC, "Hydraulic cylinder assembly"),
    # Series
    ("StandardCylinder", HC, "Series 10"),
    ("HeavyDutyCylinder", HC, "Series 11"),
    ("CompactCylinder", HC, "Series 12"),
    ("LightDutyCylinder", HC, "Series 13"),
    # Bore size
    ("SmallBoreCylinder", HC, "bore <= 50mm"),
    ("MediumBoreCylinder", HC, "50mm < bore <= 100mm"),
    ("LargeBoreCylinder", HC, "bore > 100mm"),
    # Stroke length
    ("ShortStrokeCylinder", HC, "stroke <= 100mm"),
    ("MediumStrokeCylinder", HC, "100mm < stroke <= 300mm"),
    ("LongStrokeCylinder", HC, "stroke > 300mm"),
    # Rod end type
    ("YokeRodEndCylinder", HC, "rod end Y"),
    ("ThreadedRodEndCylinder", HC, "rod end I or E"),
    ("PinRodEndCylinder", HC, "rod end P"),
    # Installation type
    ("FrontAttachmentCylinder", HC, "installation FA"),
    ("RearAttachmentCylinder", HC, "installation RA"),
    ("TrunnionMountedCylinder", HC, "installation TM"),
    # Components
    ("CylinderBarrel", HC, ""),
    ("Piston", HC, ""),
    ("PistonRod", HC, ""),
    ("EndCap", HC, ""),
    ("HeadEndCap", HC, ""),
    ("RodEndCap", HC, ""),
    # Sealing
    ("SealingComponent", HC, ""),
    ("PistonSeal", HC, ""),
    ("RodSeal", HC, ""),
    ("WiperSeal", HC, ""),
    ("ORingSeal", HC, ""),
    # Other components
    ("Bushing", HC, ""),
    ("RodBushing", HC, ""),
    ("Gasket", HC, ""),
    ("Fastener", HC, ""),
    ("TieRod", HC, ""),
    # Performance / application
    ("HighPressureCylinder", HC, "maxPressure > 210 bar"),
    ("LowPressureCylinder", HC, ""),
    ("HighSpeedCylinder", HC, ""),
    ("PrecisionCylinder", HC, ""),
    # Material quality
    ("StandardMaterial", HC, ""),
    ("CorrosionResistantMaterial", HC, ""),
    ("HighStrengthMaterial", HC, ""),
)

# (name, namespace, kind, domain, range)
PROPERTY_DECLARATIONS: Tuple[Tuple[str, str, PropertyKind, Optional[str], Optional[str]], ...] = (
    # Item master
    ("itemCode", BASE, PropertyKind.DATATYPE, "Material", XSD_STRING),
    ("itemName", BASE, PropertyKind.DATATYPE, "Material", XSD_STRING),
    ("itemSpec", BASE, PropertyKind.DATATYPE, "Material", XSD_STRING),
    # BOM relation
    ("hasMasterItem", BASE, PropertyKind.OBJECT, "BillOfMaterial", "MasterItem"),
    ("hasComponentItem", BASE, PropertyKind.OBJECT, "BillOfMaterial", "ComponentItem"),
    ("isUsedIn", BASE, PropertyKind.OBJECT, "ComponentItem", "MasterItem"),
    ("effectiveDate", BASE, PropertyKind.DATATYPE, "BillOfMaterial", XSD_DATE),
    ("expiryDate", BASE, PropertyKind.DATATYPE, "BillOfMaterial", XSD_DATE),
    ("quantity", BASE, PropertyKind.DATATYPE, "BillOfMaterial", XSD_DECIMAL),
    ("characteristicCode", BASE, PropertyKind.DATATYPE, None, XSD_STRING),
    # Code-derived master attributes
    ("installation", BASE, PropertyKind.DATATYPE, "MasterItem", XSD_STRING),
    ("accessories", BASE, PropertyKind.DATATYPE, "MasterItem", XSD_STRING),
    # Hydraulic cylinder specification
    ("bore", HC, PropertyKind.DATATYPE, "HydraulicCylinder", XSD_STRING),
    ("stroke", HC, PropertyKind.DATATYPE, "HydraulicCylinder", XSD_STRING),
    ("series", HC, PropertyKind.DATATYPE, "HydraulicCylinder", XSD_STRING),
    ("cylinderType", HC, PropertyKind.DATATYPE, "HydraulicCylinder", XSD_STRING),
    ("rodEndType", HC, PropertyKind.DATATYPE, "HydraulicCylinder", XSD_STRING),
    ("installationType", HC, PropertyKind.DATATYPE, "HydraulicCylinder", XSD_STRING),
    ("shaftEndJoin", HC, PropertyKind.DATATYPE, "MasterItem", XSD_STRING),
    # Performance
    ("maxPressure", HC, PropertyKind.DATATYPE, "HydraulicCylinder", XSD_DECIMAL),
    ("maxSpeed", HC, PropertyKind.DATATYPE, "HydraulicCylinder", XSD_DECIMAL),
    ("operatingTemperature", HC, PropertyKind.DATATYPE, None, XSD_STRING),
    ("cycleLife", HC, PropertyKind.DATATYPE, None, XSD_DECIMAL),
    # Material
    ("material", HC, PropertyKind.DATATYPE, None, XSD_STRING),
    ("surfaceTreatment", HC, PropertyKind.DATATYPE, None, XSD_STRING),
    ("hardness", HC, PropertyKind.DATATYPE, None, XSD_STRING),
    # Dimensions
    ("rodDiameter", HC, PropertyKind.DATATYPE, None, XSD_DECIMAL),
    ("mountingDimension", HC, PropertyKind.DATATYPE, None, XSD_STRING),
    ("closedLength", HC, PropertyKind.DATATYPE, None, XSD_DECIMAL),
    ("extendedLength", HC, PropertyKind.DATATYPE, None, XSD_DECIMAL),
    # Component relations
    ("hasComponent", HC, PropertyKind.OBJECT, "HydraulicCylinder", "ComponentItem"),
    ("isComponentOf", HC, PropertyKind.OBJECT, "ComponentItem", "HydraulicCylinder"),
    ("compatibleWith", HC, PropertyKind.OBJECT, "ComponentItem", "HydraulicCylinder"),
    ("requiresComponent", HC, PropertyKind.OBJECT, "HydraulicCylinder", "ComponentItem"),
    ("recommendedFor", HC, PropertyKind.OBJECT, "ComponentItem", "HydraulicCylinder"),
    # Quality / manufacturing / application
    ("qualityGrade", HC, PropertyKind.DATATYPE, None, XSD_STRING),
    ("certificationStandard", HC, PropertyKind.DATATYPE, None, XSD_STRING),
    ("testPressure", HC, PropertyKind.DATATYPE, None, XSD_DECIMAL),
    ("manufacturingProcess", HC, PropertyKind.DATATYPE, None, XSD_STRING),
    ("tolerance", HC, PropertyKind.DATATYPE, None, XSD_STRING),
    ("finishRequirement", HC, PropertyKind.DATATYPE, None, XSD_STRING),
    ("applicationArea", HC, PropertyKind.DATATYPE, None, XSD_STRING),
    ("environmentalCondition", HC, PropertyKind.DATATYPE, None, XSD_STRING),
    ("loadType", HC, PropertyKind.DATATYPE, None, XSD_STRING),
)

_CYLINDER_DIMENSION_CLASSES = (
    "StandardCylinder", "HeavyDutyCylinder", "CompactCylinder", "LightDutyCylinder",
    "SmallBoreCylinder", "MediumBoreCylinder", "LargeBoreCylinder",
    "ShortStrokeCylinder", "MediumStrokeCylinder", "LongStrokeCylinder",
    "YokeRodEndCylinder", "ThreadedRodEndCylinder", "PinRodEndCylinder",
    "FrontAttachmentCylinder", "RearAttachmentCylinder", "TrunnionMountedCylinder",
    "HighPressureCylinder", "LowPressureCylinder", "HighSpeedCylinder", "PrecisionCylinder",
)

# (child, parent)
SUBCLASS_LINKS: Tuple[Tuple[str, str], ...] = (
    ("MasterItem", "Material"),
    ("ComponentItem", "Material"),
    ("Cylinder", "Material"),
    ("HydraulicCylinder", "MasterItem"),
    ("HydraulicCylinder", "Material"),
) + tuple((name, "HydraulicCylinder") for name in _CYLINDER_DIMENSION_CLASSES) + (
    ("CylinderBarrel", "ComponentItem"),
    ("Piston", "ComponentItem"),
    ("PistonRod", "ComponentItem"),
    ("EndCap", "ComponentItem"),
    ("HeadEndCap", "EndCap"),
    ("RodEndCap", "EndCap"),
    ("SealingComponent", "ComponentItem"),
    ("PistonSeal", "SealingComponent"),
    ("RodSeal", "SealingComponent"),
    ("WiperSeal", "SealingComponent"),
    ("ORingSeal", "SealingComponent"),
    ("Bushing", "ComponentItem"),
    ("RodBushing", "Bushing"),
    ("Gasket", "ComponentItem"),
    ("Fastener", "ComponentItem"),
    ("TieRod", "Fastener"),
    ("StandardMaterial", "Material"),
    ("CorrosionResistantMaterial", "Material"),
    ("HighStrengthMaterial", "Material"),
)

# Each group is mutually disjoint
DISJOINT_GROUPS: Tuple[Tuple[str, ...], ...] = (
    ("StandardCylinder", "HeavyDutyCylinder", "CompactCylinder", "LightDutyCylinder"),
    ("SmallBoreCylinder", "MediumBoreCylinder", "LargeBoreCylinder"),
    ("ShortStrokeCylinder", "MediumStrokeCylinder", "LongStrokeCylinder"),
    ("YokeRodEndCylinder", "ThreadedRodEndCylinder", "PinRodEndCylinder"),
    ("FrontAttachmentCylinder", "RearAttachmentCylinder", "TrunnionMountedCylinder"),
)

# (class, base class, property, value)
EQUIVALENCES: Tuple[Tuple[str, str, str, str], ...] = (
    ("StandardCylinder", "HydraulicCylinder", "series", "10"),
    ("HeavyDutyCylinder", "HydraulicCylinder", "series", "11"),
    ("CompactCylinder", "HydraulicCylinder", "series", "12"),
    ("LightDutyCylinder", "HydraulicCylinder", "series", "13"),
    ("YokeRodEndCylinder", "HydraulicCylinder", "rodEndType", "Y"),
    ("PinRodEndCylinder", "HydraulicCylinder", "rodEndType", "P"),
)

# (class, property, on_class, count, kind)
CARDINALITY_AXIOMS: Tuple[Tuple[str, str, str, int, CardinalityKind], ...] = (
    ("HydraulicCylinder", "hasComponent", "CylinderBarrel", 1, CardinalityKind.EXACT),
    ("HydraulicCylinder", "hasComponent", "Piston", 1, CardinalityKind.EXACT),
    ("HydraulicCylinder", "hasComponent", "PistonRod", 1, CardinalityKind.EXACT),
    ("HydraulicCylinder", "hasComponent", "SealingComponent", 1, CardinalityKind.MIN),
    ("HydraulicCylinder", "hasComponent", "EndCap", 2, CardinalityKind.EXACT),
)

# (class, property, min_exclusive, max_inclusive)
VALUE_RANGES: Tuple[Tuple[str, str, Optional[float], Optional[float]], ...] = (
    ("SmallBoreCylinder", "bore", None, 50),
    ("MediumBoreCylinder", "bore", 50, 100),
    ("LargeBoreCylinder", "bore", 100, None),
    ("ShortStrokeCylinder", "stroke", None, 100),
    ("MediumStrokeCylinder", "stroke", 100, 300),
    ("LongStrokeCylinder", "stroke", 300, None),
    ("HighPressureCylinder", "maxPressure", 210, None),
)

# (property, inverse)
INVERSE_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("hasComponent", "isComponentOf"),
)

# (property, flag)
PROPERTY_FLAGS: Tuple[Tuple[str, PropertyFlag], ...] = (
    ("bore", PropertyFlag.FUNCTIONAL),
    ("stroke", PropertyFlag.FUNCTIONAL),
    ("series", PropertyFlag.FUNCTIONAL),
    ("rodEndType", PropertyFlag.FUNCTIONAL),
    ("isComponentOf", PropertyFlag.ASYMMETRIC),
    ("hasComponent", PropertyFlag.ASYMMETRIC),
    ("hasComponent", PropertyFlag.IRREFLEXIVE),
)


# ============================================================
# [3] Draft (mutable, build-time only)
# ============================================================

class _SchemaDraft:
    """Mutable schema state used while linking"""

    def __init__(self, namespaces: Dict[str, str]):
        self.namespaces = namespaces
        self.classes: Dict[str, Dict] = {}
        self.properties: Dict[str, Dict] = {}

    def _namespace(self, key: str, name: str) -> str:
        if key not in self.namespaces:
            raise SchemaBuildError(f"Unknown namespace '{key}' for {name}")
        return self.namespaces[key]

    # Pass 1
    def declare_class(self, name: str, namespace: str, comment: str = "") -> None:
        if name in self.classes:
            raise SchemaBuildError(f"Class declared twice: {name}")
        self.classes[name] = {
            "namespace": self._namespace(namespace, name),
            "superclasses": [],
            "equivalent_to": [],
            "disjoint_with": set(),
            "cardinality": [],
            "value_ranges": [],
            "comment": comment,
        }

    def declare_property(self, name: str, namespace: str, kind: PropertyKind) -> None:
        if name in self.properties:
            raise SchemaBuildError(f"Property declared twice: {name}")
        self.properties[name] = {
            "namespace": self._namespace(namespace, name),
            "kind": kind,
            "domain": None,
            "range": None,
            "flags": set(),
            "inverse_of": None,
        }

    # Pass 2
    def require_class(self, name: str, context: str) -> Dict:
        if name not in self.classes:
            raise SchemaBuildError(f"{context}: class '{name}' is not declared")
        return self.classes[name]

    def require_property(self, name: str, context: str) -> Dict:
        if name not in self.properties:
            raise SchemaBuildError(f"{context}: property '{name}' is not declared")
        return self.properties[name]

    def check_acyclic(self) -> None:
        """Reject superclass cycles"""
        visiting: Set[str] = set()
        done: Set[str] = set()

        def visit(name: str, path: List[str]) -> None:
            if name in done:
                return
            if name in visiting:
                raise SchemaBuildError(f"Superclass cycle: {' -> '.join(path + [name])}")
            visiting.add(name)
            for parent in self.classes[name]["superclasses"]:
                visit(parent, path + [name])
            visiting.discard(name)
            done.add(name)

        for class_name in self.classes:
            visit(class_name, [])

    def freeze(self, base_uri: str, hc_uri: str, version: str) -> Schema:
        classes = {
            name: ClassDefinition(
                name=name,
                namespace=data["namespace"],
                superclasses=tuple(data["superclasses"]),
                equivalent_to=tuple(data["equivalent_to"]),
                disjoint_with=frozenset(data["disjoint_with"]),
                cardinality=tuple(data["cardinality"]),
                value_ranges=tuple(data["value_ranges"]),
                comment=data["comment"],
            )
            for name, data in self.classes.items()
        }
        properties = {
            name: PropertyDefinition(
                name=name,
                namespace=data["namespace"],
                kind=data["kind"],
                domain=data["domain"],
                range=data["range"],
                flags=frozenset(data["flags"]),
                inverse_of=data["inverse_of"],
            )
            for name, data in self.properties.items()
        }
        return Schema(classes, properties, base_uri=base_uri, hc_uri=hc_uri, version=version)


# ============================================================
# [4] Builder
# ============================================================

class HydraulicCylinderSchemaBuilder:
    """
    Once-only schema construction

    `build_schema()` is idempotent. Under concurrent first access exactly one
    thread constructs the schema while the others block on the write lock,
    then re-check and return the shared instance.

    The declaration tables are class attributes so a subclass can extend
    the taxonomy.
    """

    VERSION = "1.0"

    class_declarations = CLASS_DECLARATIONS
    property_declarations = PROPERTY_DECLARATIONS
    subclass_links = SUBCLASS_LINKS
    disjoint_groups = DISJOINT_GROUPS
    equivalences = EQUIVALENCES
    cardinality_axioms = CARDINALITY_AXIOMS
    value_ranges = VALUE_RANGES
    inverse_pairs = INVERSE_PAIRS
    property_flags = PROPERTY_FLAGS

    def __init__(self, base_uri: str = BASE_URI, hc_uri: str = HC_URI):
        self.base_uri = base_uri
        self.hc_uri = hc_uri
        self._schema: Optional[Schema] = None
        self._lock = ReadWriteLock()
        self.build_count = 0

    @classmethod
    def from_settings(cls, namespace: Optional[NamespaceSettings] = None) -> "HydraulicCylinderSchemaBuilder":
        """Builder over the configured namespaces (default: get_settings().namespace)"""
        namespace = namespace or get_settings().namespace
        return cls(base_uri=namespace.base_uri, hc_uri=namespace.hc_uri)

    @property
    def is_built(self) -> bool:
        with self._lock.read_locked():
            return self._schema is not None

    def build_schema(self) -> Schema:
        """Return the schema, constructing it on first call

        Raises:
            SchemaBuildError: broken declaration ordering or references
        """
        with self._lock.read_locked():
            if self._schema is not None:
                logger.debug("Schema already built")
                return self._schema

        with self._lock.write_locked():
            # Double-check: another thread may have built it while we waited
            if self._schema is not None:
                return self._schema

            logger.info("Building hydraulic cylinder schema")
            try:
                schema = self._construct()
            except SchemaBuildError as e:
                logger.error(f"Schema construction failed: {e}")
                raise

            self._schema = schema
            self.build_count += 1
            stats = schema.get_statistics()
            logger.info(
                f"Schema built: {stats['total_classes']} classes, "
                f"{stats['total_properties']} properties"
            )
            return schema

    # --------------------------------------------------------
    # [4.1] Construction
    # --------------------------------------------------------

    def _construct(self) -> Schema:
        draft = _SchemaDraft({BASE: self.base_uri, HC: self.hc_uri})

        # Pass 1: declare
        for name, namespace, comment in self.class_declarations:
            draft.declare_class(name, namespace, comment)
        for name, namespace, kind, _domain, _range in self.property_declarations:
            draft.declare_property(name, namespace, kind)

        # Pass 2: link
        self._link_hierarchy(draft)
        self._link_domains_ranges(draft)
        self._link_inverses(draft)
        self._link_disjoint(draft)
        self._link_equivalences(draft)
        self._link_cardinality(draft)
        self._link_value_ranges(draft)
        self._link_flags(draft)
        draft.check_acyclic()

        return draft.freeze(self.base_uri, self.hc_uri, self.VERSION)

    def _link_hierarchy(self, draft: _SchemaDraft) -> None:
        for child, parent in self.subclass_links:
            child_data = draft.require_class(child, "subclass link")
            draft.require_class(parent, f"superclass of {child}")
            if parent not in child_data["superclasses"]:
                child_data["superclasses"].append(parent)

    def _link_domains_ranges(self, draft: _SchemaDraft) -> None:
        for name, _namespace, kind, domain, range_ in self.property_declarations:
            prop = draft.require_property(name, "domain/range")
            if domain is not None:
                draft.require_class(domain, f"domain of {name}")
            if range_ is not None and kind == PropertyKind.OBJECT:
                draft.require_class(range_, f"range of {name}")
            prop["domain"] = domain
            prop["range"] = range_

    def _link_inverses(self, draft: _SchemaDraft) -> None:
        for prop_name, inverse_name in self.inverse_pairs:
            prop = draft.require_property(prop_name, "inverse")
            inverse = draft.require_property(inverse_name, f"inverse of {prop_name}")
            if prop["kind"] != PropertyKind.OBJECT or inverse["kind"] != PropertyKind.OBJECT:
                raise SchemaBuildError(f"Inverse pair must be object properties: {prop_name}/{inverse_name}")
            prop["inverse_of"] = inverse_name
            inverse["inverse_of"] = prop_name

    def _link_disjoint(self, draft: _SchemaDraft) -> None:
        for group in self.disjoint_groups:
            for name in group:
                draft.require_class(name, "disjoint group")
            for name in group:
                draft.classes[name]["disjoint_with"].update(n for n in group if n != name)

    def _link_equivalences(self, draft: _SchemaDraft) -> None:
        for class_name, base_class, prop_name, value in self.equivalences:
            cls = draft.require_class(class_name, "equivalence")
            draft.require_class(base_class, f"equivalence base of {class_name}")
            draft.require_property(prop_name, f"equivalence restriction of {class_name}")
            cls["equivalent_to"].append(
                EquivalentClassExpression(base_class, HasValueRestriction(prop_name, value))
            )

    def _link_cardinality(self, draft: _SchemaDraft) -> None:
        for class_name, prop_name, on_class, count, kind in self.cardinality_axioms:
            cls = draft.require_class(class_name, "cardinality")
            draft.require_property(prop_name, f"cardinality on {class_name}")
            draft.require_class(on_class, f"cardinality qualifier on {class_name}")
            cls["cardinality"].append(CardinalityRestriction(prop_name, on_class, count, kind))

    def _link_value_ranges(self, draft: _SchemaDraft) -> None:
        for class_name, prop_name, min_exclusive, max_inclusive in self.value_ranges:
            cls = draft.require_class(class_name, "value range")
            draft.require_property(prop_name, f"value range on {class_name}")
            cls["value_ranges"].append(ValueRangeRestriction(prop_name, min_exclusive, max_inclusive))

    def _link_flags(self, draft: _SchemaDraft) -> None:
        for prop_name, flag in self.property_flags:
            draft.require_property(prop_name, f"{flag.value} flag")["flags"].add(flag)


# ============================================================
# Convenience
# ============================================================

_default_builder: Optional[HydraulicCylinderSchemaBuilder] = None
_default_builder_lock = threading.Lock()


def default_builder() -> HydraulicCylinderSchemaBuilder:
    """Shared builder, created on first use from the namespace settings"""
    global _default_builder
    with _default_builder_lock:
        if _default_builder is None:
            _default_builder = HydraulicCylinderSchemaBuilder.from_settings()
        return _default_builder


def build_schema() -> Schema:
    """Build (once) and return the default schema (convenience function)"""
    return default_builder().build_schema()
