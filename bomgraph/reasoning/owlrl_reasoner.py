# ============================================================
# bomgraph/reasoning/owlrl_reasoner.py - rdflib + owlrl reasoner
# ============================================================
# Reference black-box reasoner for ReasonerRunner.
#
# Steps:
#   1. export graph + schema to rdflib (rdf_export.to_rdflib)
#   2. expand with the owlrl deductive closure (RDFS semantics)
#   3. apply the structured ruleset entries, expand again if any fired
#   4. diff against the exported triples and report new ones
#   5. check disjointness / functional properties per individual
#
# Output is the raw reasoner dict consumed by extractor.extract().
# ============================================================

import logging
import re
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

import owlrl
from rdflib import Graph, Literal as RDFLiteral, URIRef
from rdflib.namespace import RDF, RDFS

from ..classification.rules import parse_int
from ..ontology.graph import KnowledgeGraph, NodeRef
from ..ontology.rdf_export import to_rdflib
from ..ontology.schema import Schema
from .ruleset import Ruleset

logger = logging.getLogger(__name__)

_SEMANTICS = {
    "RDFS": owlrl.RDFS_Semantics,
    "OWL_RL": owlrl.OWLRL_Semantics,
}


class OwlRlReasoner:
    """
    owlrl-backed reasoner

    Usage:
        reasoner = OwlRlReasoner(schema)
        raw = reasoner(graph, load_ruleset(), "3110A063000150Y1")
    """

    reasoner_type = "OWL_RL"

    def __init__(self, schema: Schema, semantics: str = "RDFS"):
        """
        Args:
            schema: built schema
            semantics: "RDFS" (default) or "OWL_RL" (complete but slower)
        """
        if semantics not in _SEMANTICS:
            raise ValueError(f"Unknown semantics: {semantics} (expected one of {sorted(_SEMANTICS)})")
        self.schema = schema
        self.semantics = semantics
        self._namespaces = (schema.base_uri, schema.hc_uri)

    def __call__(self, graph: KnowledgeGraph, ruleset: Any = None,
                 master_item_code: Optional[str] = None) -> Dict[str, Any]:
        rdf = to_rdflib(graph, self.schema)
        asserted = set(rdf)

        closure = owlrl.DeductiveClosure(_SEMANTICS[self.semantics])
        # rules match on entailed types (MasterItem -> Material), so expand first
        self._expand(closure, rdf)
        fired = self._apply_rules(rdf, ruleset)
        if fired:
            self._expand(closure, rdf)

        new_triples = [t for t in rdf if t not in asserted and self._is_domain_triple(t)]
        logger.info(f"Reasoning produced {len(new_triples)} new triples ({fired} rule firings)")

        issues = self._check_consistency(rdf, graph)
        result: Dict[str, Any] = {
            "isValid": not any(i["severity"] == "error" for i in issues),
            "validationIssues": issues,
            "inferredStatements": self._statements(new_triples),
            "inferredSubclasses": [
                {"subclass": str(s), "superclass": str(o), "confidence": 1.0}
                for s, p, o in new_triples if p == RDFS.subClassOf and s != o
            ],
        }
        if master_item_code:
            hierarchy = self._hierarchy(graph, master_item_code, new_triples)
            if hierarchy is not None:
                result["bomHierarchy"] = hierarchy
        return result

    # --------------------------------------------------------
    # [1] Helpers
    # --------------------------------------------------------

    @staticmethod
    def _expand(closure: Any, rdf: Graph) -> None:
        """
        Run the deductive closure, then drop the literal copies it adds

        owlrl re-emits literals in their datatype's canonical lexical form
        ("true" -> "1"). A new literal on a (subject, predicate) pair that
        already held a literal is such a copy.
        """
        before = set(rdf)
        literal_slots = {(s, p) for s, p, o in before if isinstance(o, RDFLiteral)}
        closure.expand(rdf)
        for triple in set(rdf) - before:
            s, p, o = triple
            if isinstance(o, RDFLiteral) and (s, p) in literal_slots:
                rdf.remove(triple)

    @staticmethod
    def _statements(new_triples: Iterable[Tuple]) -> List[Dict[str, str]]:
        statements = []
        seen: Set[Tuple[str, str, str]] = set()
        for s, p, o in new_triples:
            key = (str(s), str(p), str(o))
            if p == RDFS.subClassOf or key in seen:
                continue
            seen.add(key)
            statements.append({
                "subject": key[0],
                "predicate": key[1],
                "object": key[2],
                "category": "classification" if p == RDF.type else "property",
            })
        return statements

    def _in_domain(self, term: Any) -> bool:
        return isinstance(term, URIRef) and str(term).startswith(self._namespaces)

    def _is_domain_triple(self, triple: Tuple) -> bool:
        """Keep triples about our individuals/classes, drop RDFS housekeeping"""
        s, p, o = triple
        if not self._in_domain(s):
            return False
        if p in (RDF.type, RDFS.subClassOf):
            return self._in_domain(o)
        return self._in_domain(p)

    def _resolve(self, name: str) -> URIRef:
        if self.schema.has_class(name) or self.schema.has_property(name):
            return URIRef(self.schema.uri_for(name))
        return URIRef(self.schema.base_uri + name)

    @staticmethod
    def _local(uri: Any) -> str:
        return str(uri).rsplit("#", 1)[-1]

    # --------------------------------------------------------
    # [2] Structured rules
    # --------------------------------------------------------

    def _apply_rules(self, rdf: Graph, ruleset: Any) -> int:
        if isinstance(ruleset, Mapping):
            ruleset = Ruleset.from_dict(ruleset)
        if not ruleset:
            return 0

        fired = 0
        for rule in ruleset.rules:
            kind = rule.get("kind")
            try:
                if kind == "code_pattern":
                    fired += self._code_pattern(rdf, rule, set_type=True)
                elif kind == "code_pattern_flag":
                    fired += self._code_pattern(rdf, rule, set_type=False)
                elif kind in ("greater_than", "between", "equals"):
                    fired += self._value_rule(rdf, rule)
                else:
                    logger.debug(f"Rule {rule.get('name')} of kind {kind} not supported, skipped")
            except (KeyError, re.error) as e:
                logger.warning(f"Rule {rule.get('name')} is malformed: {e}")
        return fired

    def _subjects(self, rdf: Graph, rule: Dict[str, Any]) -> List[Any]:
        return list(rdf.subjects(RDF.type, self._resolve(rule["if_type"])))

    def _code_pattern(self, rdf: Graph, rule: Dict[str, Any], set_type: bool) -> int:
        pattern = re.compile(rule["pattern"])
        item_code = self._resolve("itemCode")
        fired = 0
        for subject in self._subjects(rdf, rule):
            if not any(pattern.search(str(code)) for code in rdf.objects(subject, item_code)):
                continue
            if set_type:
                rdf.add((subject, RDF.type, self._resolve(rule["then_type"])))
            else:
                rdf.add((subject, self._resolve(rule["then_property"]), RDFLiteral(True)))
            fired += 1
        return fired

    def _value_rule(self, rdf: Graph, rule: Dict[str, Any]) -> int:
        prop = self._resolve(rule["property"])
        kind = rule["kind"]
        fired = 0
        for subject in self._subjects(rdf, rule):
            for value in rdf.objects(subject, prop):
                if kind == "equals":
                    matched = str(value).lower() == str(rule["value"]).lower()
                else:
                    number = parse_int(str(value))
                    if number is None:
                        continue
                    if kind == "greater_than":
                        matched = number > rule["value"]
                    else:
                        matched = rule["low"] < number < rule["high"]
                if matched:
                    rdf.add((subject, self._resolve(rule["then_property"]), RDFLiteral(True)))
                    fired += 1
                    break
        return fired

    # --------------------------------------------------------
    # [3] Consistency
    # --------------------------------------------------------

    def _check_consistency(self, rdf: Graph, graph: KnowledgeGraph) -> List[Dict[str, str]]:
        issues: List[Dict[str, str]] = []
        for node in graph.nodes():
            subject = URIRef(node.uri)
            tags = {
                self._local(o) for o in rdf.objects(subject, RDF.type)
                if self._in_domain(o)
            }
            for a, b in self.schema.disjoint_violations(tags):
                issues.append({
                    "type": "DisjointClasses",
                    "description": f"{node.local_name} is both {a} and {b}",
                    "severity": "error",
                })
            for prop, values in node.properties.items():
                if self.schema.is_functional(prop) and len(values) > 1:
                    issues.append({
                        "type": "FunctionalProperty",
                        "description": f"{node.local_name} has {len(values)} values for functional property {prop}",
                        "severity": "error",
                    })
        return issues

    # --------------------------------------------------------
    # [4] BOM hierarchy
    # --------------------------------------------------------

    def _inferred_properties(self, subject: str, new_triples: Iterable[Tuple]) -> Dict[str, List[str]]:
        properties: Dict[str, List[str]] = defaultdict(list)
        for s, p, o in new_triples:
            if str(s) == subject:
                properties[self._local(p)].append(self._local(o) if isinstance(o, URIRef) else str(o))
        return dict(properties)

    def _hierarchy(self, graph: KnowledgeGraph, master_item_code: str,
                   new_triples: List[Tuple]) -> Optional[Dict[str, Any]]:
        masters = [
            n for n in graph.nodes_of_type("MasterItem")
            if n.first_value("itemCode") == master_item_code
        ]
        if not masters:
            logger.debug(f"No master item node for {master_item_code}")
            return None
        master = masters[0]
        master_ref = NodeRef(master.uri)

        components = []
        seen: Set[str] = set()
        for relation in graph.nodes_of_type("BillOfMaterial"):
            if master_ref not in relation.values("hasMasterItem"):
                continue
            for ref in relation.values("hasComponentItem"):
                component = graph.get(ref.uri) if isinstance(ref, NodeRef) else None
                if component is None or component.uri in seen:
                    continue
                seen.add(component.uri)
                components.append({
                    "code": component.first_value("itemCode"),
                    "uri": component.uri,
                    "name": component.first_value("itemName"),
                    "spec": component.first_value("itemSpec"),
                    "quantity": relation.first_value("quantity"),
                    "effectiveDate": relation.first_value("effectiveDate"),
                    "expiryDate": relation.first_value("expiryDate"),
                    "inferredProperties": self._inferred_properties(component.uri, new_triples),
                })

        return {
            "code": master_item_code,
            "uri": master.uri,
            "inferredProperties": self._inferred_properties(master.uri, new_triples),
            "components": components,
        }
