"""
Reasoning module

Runs an external reasoner over the knowledge graph and shapes its loosely
typed output into a ReasoningReport.

Usage:
    from bomgraph.reasoning import OwlRlReasoner, ReasonerRunner, load_ruleset

    with ReasonerRunner(OwlRlReasoner(schema), ruleset=load_ruleset()) as runner:
        report = runner.reason_hierarchy(graph, "3110A063000150Y1")
    print(report.valid, len(report.inferred_triples))
"""

from .models import (
    BomHierarchy,
    HierarchyComponent,
    InferredSubclass,
    InferredTriple,
    ReasoningReport,
    ValidationIssue,
)
from .raw_result import (
    RawReasonerOutput,
    parse_raw_output,
)
from .extractor import extract
from .ruleset import Ruleset, load_ruleset
from .runner import ReasonerRunner
from .owlrl_reasoner import OwlRlReasoner

__all__ = [
    # Report models
    "BomHierarchy",
    "HierarchyComponent",
    "InferredSubclass",
    "InferredTriple",
    "ReasoningReport",
    "ValidationIssue",
    # Boundary
    "RawReasonerOutput",
    "parse_raw_output",
    "extract",
    # Ruleset
    "Ruleset",
    "load_ruleset",
    # Execution
    "ReasonerRunner",
    "OwlRlReasoner",
]
