"""
Reasoning result extraction

raw reasoner dict -> RawReasonerOutput (boundary) -> ReasoningReport.
"""

import logging
from typing import Any, Optional

from .models import (
    BomHierarchy,
    HierarchyComponent,
    InferredSubclass,
    InferredTriple,
    ReasoningReport,
    ValidationIssue,
)
from .raw_result import RawBomHierarchy, parse_raw_output

logger = logging.getLogger(__name__)


def _hierarchy(raw: RawBomHierarchy) -> BomHierarchy:
    return BomHierarchy(
        code=raw.code,
        uri=raw.uri,
        inferred_properties=dict(raw.inferred_properties),
        components=[
            HierarchyComponent(
                code=c.code,
                uri=c.uri,
                name=c.name,
                spec=c.spec,
                quantity=c.quantity,
                effective_date=c.effective_date,
                expiry_date=c.expiry_date,
                inferred_properties=dict(c.inferred_properties),
            )
            for c in raw.components
        ],
    )


def extract(
    raw: Any,
    master_item_code: Optional[str],
    reasoner_type: str,
    elapsed_ms: int = 0,
    include_hierarchy: bool = True,
) -> ReasoningReport:
    """
    Build a ReasoningReport from raw reasoner output

    Total: never raises. An error in the raw output yields valid=False with
    the message and nothing else populated. Without an explicit validity
    flag the result is valid.

    Args:
        raw: reasoner output (dict)
        master_item_code: master item the call was about
        reasoner_type: reasoner identifier
        elapsed_ms: wall time of the call
        include_hierarchy: keep the bomHierarchy section

    Returns:
        ReasoningReport

    Example:
        >>> report = extract({"error": "timeout"}, "3110A063000150Y1", "OWL_RL")
        >>> report.valid, report.error_message
        (False, 'timeout')
    """
    parsed = parse_raw_output(raw)
    report = ReasoningReport(
        master_item_code=master_item_code,
        reasoner_type=reasoner_type,
        elapsed_ms=elapsed_ms,
    )

    if parsed.is_error:
        logger.error(f"Reasoning failed for {master_item_code}: {parsed.error}")
        report.valid = False
        report.error_message = parsed.error
        return report

    report.valid = True if parsed.is_valid is None else parsed.is_valid
    report.validation_issues = [
        ValidationIssue(type=i.type, description=i.description, severity=i.severity)
        for i in parsed.validation_issues
    ]
    report.inferred_triples = [
        InferredTriple(subject=t.subject, predicate=t.predicate, object=t.object, category=t.category)
        for t in parsed.inferred_statements
    ]
    report.inferred_subclasses = [
        InferredSubclass(subclass=s.subclass, superclass=s.superclass, confidence=s.confidence)
        for s in parsed.inferred_subclasses
    ]
    if include_hierarchy and parsed.bom_hierarchy is not None:
        report.bom_hierarchy = _hierarchy(parsed.bom_hierarchy)

    logger.debug(
        f"Reasoning report for {master_item_code}: valid={report.valid}, "
        f"{len(report.inferred_triples)} triples, {len(report.inferred_subclasses)} subclasses"
    )
    return report
