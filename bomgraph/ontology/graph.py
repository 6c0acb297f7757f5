# ============================================================
# bomgraph/ontology/graph.py - In-memory knowledge graph
# ============================================================
# Individuals (nodes) with class tags and multi-valued properties.
#
# Node values:
#   - Literal: lexical value + XSD datatype
#   - NodeRef: reference to another node by URI
#
# Rules:
#   - one node per URI (get_or_create never duplicates)
#   - add_value is idempotent
#   - functional properties (per schema) keep at most one value
#   - every mutation holds the graph lock
# ============================================================

import logging
import threading
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple, Union

from .schema import RDF_TYPE, XSD_STRING, Schema

logger = logging.getLogger(__name__)


# ============================================================
# [1] Values
# ============================================================

@dataclass(frozen=True)
class Literal:
    """Typed literal value"""
    value: str
    datatype: str = XSD_STRING

    def __str__(self) -> str:
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "datatype": self.datatype}


@dataclass(frozen=True)
class NodeRef:
    """Reference to a graph node"""
    uri: str

    @property
    def local_name(self) -> str:
        return self.uri.rsplit("#", 1)[-1]

    def __str__(self) -> str:
        return self.uri

    def to_dict(self) -> Dict[str, Any]:
        return {"ref": self.uri}


Value = Union[Literal, NodeRef]


def _as_value(value: Union[Value, str]) -> Value:
    """Plain strings become xsd:string literals"""
    if isinstance(value, (Literal, NodeRef)):
        return value
    return Literal(str(value))


# ============================================================
# [2] GraphNode
# ============================================================

@dataclass
class GraphNode:
    """
    Graph individual

    Attributes:
        uri: namespace-qualified unique id
        types: class tags (schema class names)
        properties: property name -> ordered values
    """
    uri: str
    types: Set[str] = field(default_factory=set)
    properties: Dict[str, List[Value]] = field(default_factory=dict)

    @property
    def local_name(self) -> str:
        return self.uri.rsplit("#", 1)[-1]

    @property
    def ref(self) -> NodeRef:
        return NodeRef(self.uri)

    def has_type(self, tag: str) -> bool:
        return tag in self.types

    def values(self, prop: str) -> List[Value]:
        """Values of a property (copy, empty if absent)"""
        return list(self.properties.get(prop, ()))

    def first_value(self, prop: str) -> Optional[str]:
        """First value as a string (literal lexical form or referenced URI)"""
        values = self.properties.get(prop)
        if not values:
            return None
        return str(values[0])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uri": self.uri,
            "types": sorted(self.types),
            "properties": {
                prop: [v.to_dict() for v in values]
                for prop, values in self.properties.items()
            },
        }


# ============================================================
# [3] KnowledgeGraph
# ============================================================

class KnowledgeGraph:
    """
    Thread-safe in-memory graph of individuals

    Usage:
        graph = KnowledgeGraph(schema)
        node = graph.get_or_create(BASE_URI + "Material_X", types=["Material"])
        graph.add_value(node.uri, "itemCode", Literal("X"))
        graph.triples()
    """

    def __init__(self, schema: Optional[Schema] = None):
        """
        Args:
            schema: when given, type tags are checked against it and its
                functional flags are enforced
        """
        self.schema = schema
        self._nodes: Dict[str, GraphNode] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._nodes)

    def __contains__(self, uri: str) -> bool:
        with self._lock:
            return uri in self._nodes

    # --------------------------------------------------------
    # [3.1] Nodes
    # --------------------------------------------------------

    def get_or_create(self, uri: str, types: Iterable[str] = ()) -> GraphNode:
        """Existing node for uri, or a new one. Given types are added either way."""
        with self._lock:
            node = self._nodes.get(uri)
            if node is None:
                node = GraphNode(uri=uri)
                self._nodes[uri] = node
                logger.debug(f"Node created: {uri}")
            for tag in types:
                self._add_type(node, tag)
            return node

    def get(self, uri: str) -> Optional[GraphNode]:
        with self._lock:
            return self._nodes.get(uri)

    def nodes(self) -> List[GraphNode]:
        with self._lock:
            return list(self._nodes.values())

    def nodes_of_type(self, tag: str) -> List[GraphNode]:
        """Nodes carrying a class tag"""
        with self._lock:
            return [n for n in self._nodes.values() if tag in n.types]

    def add_type(self, uri: str, tag: str) -> None:
        with self._lock:
            self._add_type(self._require(uri), tag)

    def types_of(self, uri: str) -> Set[str]:
        """Copy of a node's type tags"""
        with self._lock:
            return set(self._require(uri).types)

    def remove_type(self, uri: str, tag: str) -> None:
        with self._lock:
            self._require(uri).types.discard(tag)

    def _add_type(self, node: GraphNode, tag: str) -> None:
        if self.schema is not None:
            self.schema.get_class(tag)  # raises UnknownClassError
        node.types.add(tag)

    def _require(self, uri: str) -> GraphNode:
        node = self._nodes.get(uri)
        if node is None:
            raise KeyError(f"Node not found: {uri}")
        return node

    # --------------------------------------------------------
    # [3.2] Property values
    # --------------------------------------------------------

    def add_value(self, uri: str, prop: str, value: Union[Value, str]) -> bool:
        """
        Add a property value

        An identical value is not added twice. For a functional property a
        different value replaces the existing one.

        Returns:
            bool: whether the node changed
        """
        value = _as_value(value)
        with self._lock:
            node = self._require(uri)
            values = node.properties.setdefault(prop, [])
            if value in values:
                return False
            if self.schema is not None and self.schema.is_functional(prop) and values:
                logger.debug(f"Functional property {prop} on {uri}: {values[0]} -> {value}")
                values[:] = [value]
                return True
            values.append(value)
            return True

    def set_value(self, uri: str, prop: str, value: Union[Value, str]) -> None:
        """Replace all values of a property"""
        value = _as_value(value)
        with self._lock:
            self._require(uri).properties[prop] = [value]

    def remove_values(self, uri: str, prop: str) -> None:
        with self._lock:
            self._require(uri).properties.pop(prop, None)

    # --------------------------------------------------------
    # [3.3] Queries
    # --------------------------------------------------------

    def triples(self) -> Iterator[Tuple[str, str, Any]]:
        """
        (subject, predicate, object) over a snapshot of the graph

        Type tags are reported with the rdf:type predicate and the class
        name as object. Property triples use the property name.
        """
        with self._lock:
            snapshot = [
                (node.uri, sorted(node.types), [(p, list(vs)) for p, vs in node.properties.items()])
                for node in self._nodes.values()
            ]
        for uri, types, props in snapshot:
            for tag in types:
                yield uri, RDF_TYPE, tag
            for prop, values in props:
                for value in values:
                    yield uri, prop, value

    def incoming(self, uri: str, prop: str) -> List[GraphNode]:
        """Nodes whose `prop` references uri"""
        target = NodeRef(uri)
        with self._lock:
            return [n for n in self._nodes.values() if target in n.properties.get(prop, ())]

    def statistics(self) -> Dict[str, Any]:
        """Node/triple counts"""
        with self._lock:
            total_nodes = len(self._nodes)
            type_counts = Counter(tag for node in self._nodes.values() for tag in node.types)
            property_counts = Counter()
            for node in self._nodes.values():
                for prop, values in node.properties.items():
                    property_counts[prop] += len(values)

        return {
            "total_nodes": total_nodes,
            "total_type_assertions": sum(type_counts.values()),
            "total_property_values": sum(property_counts.values()),
            "nodes_by_type": dict(type_counts),
            "values_by_property": dict(property_counts),
        }

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return {"nodes": [n.to_dict() for n in self._nodes.values()]}
