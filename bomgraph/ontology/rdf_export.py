"""
RDF export

Renders the schema axioms and the graph individuals as an rdflib Graph.
This is the hand-off format for external reasoners (see
bomgraph.reasoning.owlrl_reasoner) and for serialization to Turtle/RDF-XML.
"""

import logging
from typing import Optional

from rdflib import BNode, Graph, Literal as RDFLiteral, Namespace, URIRef
from rdflib.collection import Collection
from rdflib.namespace import OWL, RDF, RDFS, XSD

from .graph import KnowledgeGraph, Literal, NodeRef
from .schema import CardinalityKind, PropertyFlag, PropertyKind, Schema

logger = logging.getLogger(__name__)

_FLAG_TYPES = {
    PropertyFlag.FUNCTIONAL: OWL.FunctionalProperty,
    PropertyFlag.INVERSE_FUNCTIONAL: OWL.InverseFunctionalProperty,
    PropertyFlag.TRANSITIVE: OWL.TransitiveProperty,
    PropertyFlag.SYMMETRIC: OWL.SymmetricProperty,
    PropertyFlag.ASYMMETRIC: OWL.AsymmetricProperty,
    PropertyFlag.REFLEXIVE: OWL.ReflexiveProperty,
    PropertyFlag.IRREFLEXIVE: OWL.IrreflexiveProperty,
}

_CARDINALITY_PREDICATES = {
    CardinalityKind.EXACT: OWL.qualifiedCardinality,
    CardinalityKind.MIN: OWL.minQualifiedCardinality,
    CardinalityKind.MAX: OWL.maxQualifiedCardinality,
}


def schema_to_rdflib(schema: Schema, rdf_graph: Optional[Graph] = None) -> Graph:
    """Add the schema's classes, properties and axioms to an rdflib Graph"""
    g = rdf_graph if rdf_graph is not None else Graph()
    g.bind("base", Namespace(schema.base_uri))
    g.bind("hc", Namespace(schema.hc_uri))
    g.bind("owl", OWL)
    g.bind("xsd", XSD)

    def class_ref(name: str) -> URIRef:
        return URIRef(schema.get_class(name).uri)

    def property_ref(name: str) -> URIRef:
        return URIRef(schema.get_property(name).uri)

    # Classes
    for cls in schema.classes.values():
        subject = URIRef(cls.uri)
        g.add((subject, RDF.type, OWL.Class))
        g.add((subject, RDFS.label, RDFLiteral(cls.name)))
        if cls.comment:
            g.add((subject, RDFS.comment, RDFLiteral(cls.comment)))
        for parent in cls.superclasses:
            g.add((subject, RDFS.subClassOf, class_ref(parent)))
        for other in sorted(cls.disjoint_with):
            g.add((subject, OWL.disjointWith, class_ref(other)))

        # C ≡ Base ∩ (p hasValue v)
        for expr in cls.equivalent_to:
            restriction = BNode()
            g.add((restriction, RDF.type, OWL.Restriction))
            g.add((restriction, OWL.onProperty, property_ref(expr.restriction.property)))
            # typed like converter-written values so hasValue matches them
            g.add((restriction, OWL.hasValue, RDFLiteral(expr.restriction.value, datatype=XSD.string)))
            members = BNode()
            Collection(g, members, [class_ref(expr.base_class), restriction])
            intersection = BNode()
            g.add((intersection, RDF.type, OWL.Class))
            g.add((intersection, OWL.intersectionOf, members))
            g.add((subject, OWL.equivalentClass, intersection))

        for axiom in cls.cardinality:
            restriction = BNode()
            g.add((restriction, RDF.type, OWL.Restriction))
            g.add((restriction, OWL.onProperty, property_ref(axiom.property)))
            g.add((restriction, OWL.onClass, class_ref(axiom.on_class)))
            g.add((
                restriction,
                _CARDINALITY_PREDICATES[axiom.kind],
                RDFLiteral(axiom.count, datatype=XSD.nonNegativeInteger),
            ))
            g.add((subject, RDFS.subClassOf, restriction))

    # Properties
    for prop in schema.properties.values():
        subject = URIRef(prop.uri)
        kind = OWL.ObjectProperty if prop.kind == PropertyKind.OBJECT else OWL.DatatypeProperty
        g.add((subject, RDF.type, kind))
        if prop.domain:
            g.add((subject, RDFS.domain, class_ref(prop.domain)))
        if prop.range:
            target = class_ref(prop.range) if prop.kind == PropertyKind.OBJECT else URIRef(prop.range)
            g.add((subject, RDFS.range, target))
        if prop.inverse_of:
            g.add((subject, OWL.inverseOf, property_ref(prop.inverse_of)))
        for flag in prop.flags:
            g.add((subject, RDF.type, _FLAG_TYPES[flag]))

    return g


def to_rdflib(graph: KnowledgeGraph, schema: Schema, include_schema: bool = True) -> Graph:
    """
    Render a knowledge graph as an rdflib Graph

    Args:
        graph: knowledge graph
        schema: schema used to resolve class and property URIs
        include_schema: also emit the schema axioms

    Returns:
        rdflib.Graph
    """
    g = schema_to_rdflib(schema) if include_schema else Graph()
    if not include_schema:
        g.bind("base", Namespace(schema.base_uri))
        g.bind("hc", Namespace(schema.hc_uri))

    for node in graph.nodes():
        subject = URIRef(node.uri)
        g.add((subject, RDF.type, OWL.NamedIndividual))
        for tag in node.types:
            g.add((subject, RDF.type, URIRef(schema.uri_for(tag))))
        for prop, values in node.properties.items():
            if schema.has_property(prop):
                predicate = URIRef(schema.get_property(prop).uri)
            else:
                logger.warning(f"Property not in schema, exported under base namespace: {prop}")
                predicate = URIRef(schema.base_uri + prop)
            for value in values:
                if isinstance(value, NodeRef):
                    g.add((subject, predicate, URIRef(value.uri)))
                elif isinstance(value, Literal):
                    g.add((subject, predicate, RDFLiteral(value.value, datatype=URIRef(value.datatype))))

    logger.debug(f"Exported {len(g)} RDF triples")
    return g
