# ============================================================
# tests/unit/test_rdf_export.py - rdflib export tests
# ============================================================
# pytest -v tests/unit/test_rdf_export.py
# ============================================================

from rdflib import Literal as RDFLiteral, URIRef
from rdflib.namespace import OWL, RDF, RDFS, XSD

from bomgraph.ontology import (
    BASE_URI,
    HC_URI,
    XSD_DATE,
    Literal,
    NodeRef,
    schema_to_rdflib,
    to_rdflib,
)


class TestSchemaExport:
    """Classes, properties and axioms"""

    def test_class_hierarchy(self, schema):
        g = schema_to_rdflib(schema)
        cylinder = URIRef(HC_URI + "HydraulicCylinder")
        assert (cylinder, RDF.type, OWL.Class) in g
        assert (cylinder, RDFS.subClassOf, URIRef(BASE_URI + "MasterItem")) in g

    def test_disjointness(self, schema):
        g = schema_to_rdflib(schema)
        assert (
            URIRef(HC_URI + "SmallBoreCylinder"),
            OWL.disjointWith,
            URIRef(HC_URI + "LargeBoreCylinder"),
        ) in g

    def test_property_characteristics(self, schema):
        g = schema_to_rdflib(schema)
        bore = URIRef(HC_URI + "bore")
        assert (bore, RDF.type, OWL.DatatypeProperty) in g
        assert (bore, RDF.type, OWL.FunctionalProperty) in g
        assert (URIRef(HC_URI + "hasComponent"), OWL.inverseOf, URIRef(HC_URI + "isComponentOf")) in g
        assert (URIRef(BASE_URI + "isUsedIn"), RDFS.range, URIRef(BASE_URI + "MasterItem")) in g

    def test_equivalence_restriction(self, schema):
        g = schema_to_rdflib(schema)
        standard = URIRef(HC_URI + "StandardCylinder")
        intersections = list(g.objects(standard, OWL.equivalentClass))
        assert len(intersections) == 1
        restrictions = list(g.subjects(OWL.hasValue, RDFLiteral("10", datatype=XSD.string)))
        assert len(restrictions) == 1
        assert (restrictions[0], OWL.onProperty, URIRef(HC_URI + "series")) in g

    def test_cardinality_restrictions(self, schema):
        g = schema_to_rdflib(schema)
        end_cap = list(g.subjects(OWL.onClass, URIRef(HC_URI + "EndCap")))
        assert len(end_cap) == 1
        count = g.value(end_cap[0], OWL.qualifiedCardinality)
        assert count.toPython() == 2


class TestIndividualExport:
    """Graph individuals"""

    def test_individuals(self, graph, schema):
        master = BASE_URI + "MasterItem_M1"
        relation = BASE_URI + "BOM_M1_10_C1"
        graph.get_or_create(master, types=["MasterItem"])
        graph.get_or_create(relation, types=["BillOfMaterial"])
        graph.add_value(relation, "hasMasterItem", NodeRef(master))
        graph.add_value(relation, "effectiveDate", Literal("2024-01-01", XSD_DATE))

        g = to_rdflib(graph, schema, include_schema=False)
        assert (URIRef(master), RDF.type, OWL.NamedIndividual) in g
        assert (URIRef(master), RDF.type, URIRef(BASE_URI + "MasterItem")) in g
        assert (URIRef(relation), URIRef(BASE_URI + "hasMasterItem"), URIRef(master)) in g
        assert (
            URIRef(relation),
            URIRef(BASE_URI + "effectiveDate"),
            RDFLiteral("2024-01-01", datatype=XSD.date),
        ) in g
        # Schema axioms left out
        assert (URIRef(HC_URI + "HydraulicCylinder"), RDF.type, OWL.Class) not in g

    def test_unknown_property_uses_base_namespace(self, graph, schema):
        uri = BASE_URI + "Material_X"
        graph.get_or_create(uri, types=["Material"])
        graph.add_value(uri, "legacyFlag", "Y")
        g = to_rdflib(graph, schema)
        assert (URIRef(uri), URIRef(BASE_URI + "legacyFlag"), RDFLiteral("Y", datatype=XSD.string)) in g

    def test_turtle_serialization(self, graph, schema):
        graph.get_or_create(BASE_URI + "Material_X", types=["Material"])
        text = to_rdflib(graph, schema).serialize(format="turtle")
        assert "Material_X" in text
