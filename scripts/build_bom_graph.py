#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
BOM knowledge graph build script

Loads an ERP extract (item master + BOM rows), converts it into the
knowledge graph, classifies the cylinders, checks them, runs the
reasoner and ranks similar catalogue cylinders.

Usage:
    python scripts/build_bom_graph.py
    python scripts/build_bom_graph.py --input data/sample_bom.yaml --turtle out.ttl
"""

import argparse
import sys
from pathlib import Path

import yaml

# Project root on sys.path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bomgraph.cache import SimilarityCache
from bomgraph.config import setup_logging
from bomgraph.classification import (
    apply_classification,
    check_completeness,
    component_tags_for,
    find_similar_cylinders,
    generate_suggestions,
    specs_from_node,
    validate_specs,
)
from bomgraph.conversion import BomConverter, BomRecord, MaterialRecord
from bomgraph.ontology import KnowledgeGraph, build_schema, to_rdflib
from bomgraph.reasoning import OwlRlReasoner, ReasonerRunner, load_ruleset


def print_header(title: str):
    print("\n" + "=" * 60)
    print(f"[*] {title}")
    print("=" * 60)


def print_subheader(title: str):
    print(f"\n[{title}]")
    print("-" * 40)


def load_extract(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def main() -> int:
    parser = argparse.ArgumentParser(description="Build the BOM knowledge graph")
    parser.add_argument("--input", type=Path, default=project_root / "data" / "sample_bom.yaml",
                        help="ERP extract (YAML)")
    parser.add_argument("--turtle", type=Path, default=None, help="write the graph as Turtle")
    parser.add_argument("--semantics", choices=["RDFS", "OWL_RL"], default="RDFS")
    args = parser.parse_args()

    setup_logging()
    print_header("BOM Knowledge Graph Builder")

    # --------------------------------------------------------
    # 1. Schema
    # --------------------------------------------------------
    print_subheader("Step 1: Schema")
    schema = build_schema()
    stats = schema.get_statistics()
    print(f"  Classes: {stats['total_classes']}")
    print(f"  Properties: {stats['total_properties']}")
    print(f"  Disjoint pairs: {stats['disjoint_pairs']}")

    # --------------------------------------------------------
    # 2. Conversion
    # --------------------------------------------------------
    print_subheader("Step 2: Conversion")
    try:
        extract = load_extract(args.input)
    except (OSError, yaml.YAMLError) as e:
        print(f"  [ERROR] Cannot read {args.input}: {e}")
        return 1

    graph = KnowledgeGraph(schema)
    converter = BomConverter(graph, schema)
    index = converter.convert_materials(MaterialRecord.from_dict(m) for m in extract.get("materials", []))

    results = []
    for bom_data in extract.get("boms", []):
        result = converter.convert_bom_structure(BomRecord.from_dict(bom_data), index=index)
        if result is not None:
            results.append(result)

    for code, tag in (extract.get("categories") or {}).items():
        ref = index.get(code)
        if ref is not None:
            graph.add_type(ref.uri, tag)

    graph_stats = graph.statistics()
    print(f"  Nodes: {graph_stats['total_nodes']}")
    print(f"  Property values: {graph_stats['total_property_values']}")
    print(f"  BOMs converted: {len(results)}")

    # --------------------------------------------------------
    # 3. Classification
    # --------------------------------------------------------
    print_subheader("Step 3: Classification")
    for result in results:
        master = graph.get(result.master.uri)
        specs = specs_from_node(master)
        validation = validate_specs(specs)
        tags = apply_classification(graph, master.uri, specs)
        completeness = check_completeness(schema, component_tags_for(graph, master.uri))

        print(f"\n  {master.first_value('itemCode')}")
        print(f"    Specs: {specs}")
        print(f"    Classes: {', '.join(sorted(tags))}")
        print(f"    Valid: {validation.valid}")
        for message in validation.errors + validation.warnings:
            print(f"      - {message}")
        print(f"    Complete: {completeness.complete}")
        for violation in completeness.violations:
            print(f"      - {violation}")

        suggestions = generate_suggestions(specs)
        print(f"    Suggestions: {len(suggestions)}")
        for s in suggestions[:5]:
            print(f"      - {s.code}: {s.name} (x{s.quantity})")
        if len(suggestions) > 5:
            print(f"      ... and {len(suggestions) - 5} more")

    # --------------------------------------------------------
    # 4. Reasoning
    # --------------------------------------------------------
    print_subheader("Step 4: Reasoning")
    with ReasonerRunner(OwlRlReasoner(schema, semantics=args.semantics), ruleset=load_ruleset()) as runner:
        for result in results:
            code = graph.get(result.master.uri).first_value("itemCode")
            report = runner.reason_hierarchy(graph, code)
            print(f"\n  {code}: valid={report.valid} ({report.elapsed_ms} ms)")
            if report.is_error:
                print(f"    [ERROR] {report.error_message}")
                continue
            print(f"    Inferred statements: {len(report.inferred_triples)}")
            print(f"    Inferred subclasses: {len(report.inferred_subclasses)}")
            if report.bom_hierarchy:
                for name, values in sorted(report.bom_hierarchy.inferred_properties.items()):
                    print(f"    {name}: {', '.join(values)}")

    # --------------------------------------------------------
    # 5. Similar cylinders
    # --------------------------------------------------------
    print_subheader("Step 5: Similar cylinders")
    cache = SimilarityCache()
    catalogue = [str(m["code"]) for m in extract.get("materials", []) if m.get("code")]
    for result in results:
        code = graph.get(result.master.uri).first_value("itemCode")
        matches = find_similar_cylinders(code, catalogue, cache=cache)
        print(f"\n  {code}: {len(matches)} similar")
        for match in matches:
            print(f"    - {match['code']}: {match['similarityScore']:.2f}%")
    cache.log_stats()

    # --------------------------------------------------------
    # 6. Export
    # --------------------------------------------------------
    if args.turtle:
        print_subheader("Step 6: Export")
        to_rdflib(graph, schema).serialize(destination=str(args.turtle), format="turtle")
        print(f"  Written: {args.turtle}")

    print_header("Done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
