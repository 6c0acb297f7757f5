"""
Classification module

Hydraulic-cylinder taxonomy classification, specification validation,
component suggestions, structural completeness checks and cylinder
similarity scoring.

Usage:
    from bomgraph.classification import classify, validate_specs, generate_suggestions

    specs = {"bore": "120", "stroke": "200", "series": "11", "rodEndType": "Y"}
    classify(specs)                 # {"HydraulicCylinder", "LargeBoreCylinder", ...}
    validate_specs(specs).valid     # True
    generate_suggestions(specs)     # [ComponentSuggestion(...), ...]
"""

from .rules import (
    BORE_RULES,
    INSTALLATION_TAGS,
    ROD_END_TAGS,
    SERIES_TAGS,
    STROKE_RULES,
    ThresholdRule,
    parse_int,
)
from .classifier import (
    apply_classification,
    classify,
    specs_from_node,
)
from .validator import (
    ValidationResult,
    validate_specs,
)
from .suggestions import (
    ComponentSuggestion,
    generate_suggestions,
)
from .completeness import (
    CompletenessReport,
    check_completeness,
    component_tags_for,
)
from .similarity import (
    band_similarity,
    cylinder_specs,
    find_similar_cylinders,
    similarity_score,
)

__all__ = [
    # Rules
    "BORE_RULES",
    "INSTALLATION_TAGS",
    "ROD_END_TAGS",
    "SERIES_TAGS",
    "STROKE_RULES",
    "ThresholdRule",
    "parse_int",
    # Classifier
    "apply_classification",
    "classify",
    "specs_from_node",
    # Validation
    "ValidationResult",
    "validate_specs",
    # Suggestions
    "ComponentSuggestion",
    "generate_suggestions",
    # Completeness
    "CompletenessReport",
    "check_completeness",
    "component_tags_for",
    # Similarity
    "band_similarity",
    "cylinder_specs",
    "find_similar_cylinders",
    "similarity_score",
]
