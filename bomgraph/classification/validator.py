"""
Cylinder specification validation
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .rules import BORE_RANGE, STANDARD_ROD_END_TYPES, STANDARD_SERIES, STROKE_RANGE, parse_int


@dataclass
class ValidationResult:
    """Validation outcome: errors make it invalid, warnings do not"""
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "errors": self.errors, "warnings": self.warnings}


def _check_dimension(value: Any, label: str, bounds, errors: List[str], warnings: List[str]) -> None:
    if value is None or value == "":
        errors.append(f"{label} is required")
        return
    number = parse_int(value)
    if number is None:
        errors.append(f"Invalid {label.lower()} format: {value}")
        return
    low, high = bounds
    if number < low or number > high:
        warnings.append(f"{label} {number}mm is outside typical range ({low}-{high}mm)")


def validate_specs(specs: Mapping[str, Any]) -> ValidationResult:
    """
    Validate a cylinder spec map

    Args:
        specs: bore, stroke, series, rodEndType

    Returns:
        ValidationResult

    Example:
        >>> validate_specs({"bore": "50", "stroke": "200", "series": "99"}).warnings
        ['Unknown series: 99. Standard series are 10, 11, 12, 13']
    """
    errors: List[str] = []
    warnings: List[str] = []

    _check_dimension(specs.get("bore"), "Bore size", BORE_RANGE, errors, warnings)
    _check_dimension(specs.get("stroke"), "Stroke length", STROKE_RANGE, errors, warnings)

    series = specs.get("series")
    if series is None or series == "":
        errors.append("Series is required")
    elif str(series) not in STANDARD_SERIES:
        warnings.append(f"Unknown series: {series}. Standard series are {', '.join(STANDARD_SERIES)}")

    rod_end = specs.get("rodEndType")
    if rod_end is not None and rod_end != "" and str(rod_end) not in STANDARD_ROD_END_TYPES:
        warnings.append(f"Unknown rod end type: {rod_end}. Standard types are {', '.join(STANDARD_ROD_END_TYPES)}")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
