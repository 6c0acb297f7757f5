# ============================================================
# bomgraph/classification/similarity.py - Cylinder similarity
# ============================================================
# Weighted spec comparison of two hydraulic cylinders (0 ~ 100).
#
# Weights:
#   productType 10, series 25, cylinderType 10,
#   bore 35 (banded), stroke 15 (banded), rodEndType 5
#
# Bands map |a - b| to a factor; a non-numeric pair scores 1.0
# when the strings are equal, else 0.0.
# ============================================================

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..conversion.bom_converter import parse_cylinder_code
from .rules import parse_int

logger = logging.getLogger(__name__)

MAX_SCORE = 100.0
MIN_SIMILARITY = 30.0
MAX_RESULTS = 10

EXACT_WEIGHTS = (
    ("productType", 10.0),
    ("series", 25.0),
    ("cylinderType", 10.0),
    ("rodEndType", 5.0),
)
BORE_WEIGHT = 35.0
STROKE_WEIGHT = 15.0

# (max difference in mm, factor), checked in order
BORE_BANDS: Sequence[Tuple[int, float]] = (
    (0, 1.0),
    (5, 0.95),
    (10, 0.85),
    (15, 0.70),
    (25, 0.50),
    (40, 0.30),
)
STROKE_BANDS: Sequence[Tuple[int, float]] = (
    (0, 1.0),
    (10, 0.95),
    (25, 0.85),
    (50, 0.70),
    (100, 0.50),
    (200, 0.30),
)


def band_similarity(a: Any, b: Any, bands: Sequence[Tuple[int, float]]) -> float:
    """Factor in [0, 1] for two sizes"""
    if a is None or b is None:
        return 0.0
    x, y = parse_int(a), parse_int(b)
    if x is None or y is None:
        return 1.0 if str(a) == str(b) else 0.0
    diff = abs(x - y)
    for max_diff, factor in bands:
        if diff <= max_diff:
            return factor
    return 0.0


def cylinder_specs(code: Optional[str]) -> Dict[str, str]:
    """Comparable spec map of a cylinder item code ({} for other codes)"""
    derived = parse_cylinder_code(code)
    if not derived:
        return {}
    derived["productType"] = code[0:1]
    return derived


def similarity_score(specs_a: Mapping[str, Any], specs_b: Mapping[str, Any]) -> float:
    """
    Weighted similarity of two cylinder spec maps

    A field missing on either side contributes nothing.

    Returns:
        score in [0, 100]
    """
    score = 0.0
    for key, weight in EXACT_WEIGHTS:
        value = specs_a.get(key)
        if value is not None and value == specs_b.get(key):
            score += weight
    score += band_similarity(specs_a.get("bore"), specs_b.get("bore"), BORE_BANDS) * BORE_WEIGHT
    score += band_similarity(specs_a.get("stroke"), specs_b.get("stroke"), STROKE_BANDS) * STROKE_WEIGHT
    return min(score, MAX_SCORE)


def find_similar_cylinders(
    code: str,
    candidates: Iterable[str],
    cache: Any = None,
    threshold: float = MIN_SIMILARITY,
    limit: int = MAX_RESULTS,
) -> List[Dict[str, Any]]:
    """
    Rank candidate cylinder codes by similarity to `code`

    Args:
        code: cylinder item code to match
        candidates: item codes to compare against (self and non-cylinders skipped)
        cache: optional SimilarityCache; pair scores go through get_or_compute_score
        threshold: minimum score kept
        limit: maximum results

    Returns:
        [{"code", "similarityScore"}, ...] best first, scores rounded to 2 places
    """
    specs = cylinder_specs(code)
    if not specs:
        logger.warning(f"Invalid cylinder code format: {code}")
        return []

    matches = []
    for candidate in candidates:
        if candidate == code:
            continue
        other = cylinder_specs(candidate)
        if not other:
            continue

        def compute(other=other):
            return similarity_score(specs, other)

        if cache is None:
            score = compute()
        else:
            score = cache.get_or_compute_score(code, candidate, compute)
        if score is not None and score >= threshold:
            matches.append({"code": candidate, "similarityScore": round(score, 2)})

    matches.sort(key=lambda m: m["similarityScore"], reverse=True)
    logger.info(f"Found {min(len(matches), limit)} similar cylinders for {code}")
    return matches[:limit]
