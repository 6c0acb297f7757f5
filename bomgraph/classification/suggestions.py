# ============================================================
# bomgraph/classification/suggestions.py - Component suggestions
# ============================================================
# Proposes the component list of a hydraulic cylinder from its
# bore/series (plus rod end and installation when known).
#
# Component code: <prefix><series><size>-<suffix>
#   size = bore as given, or the rod diameter (%03d) for rods
#          and bushings
#   rod diameter = floor(bore * 0.6), bore must be positive
# ============================================================

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from .rules import parse_int

logger = logging.getLogger(__name__)

ROD_DIAMETER_RATIO = 0.6

ROD_END_DESCRIPTIONS = {
    "Y": "yoke",
    "I": "internal thread",
    "E": "external thread",
    "P": "pin",
}

INSTALLATION_DESCRIPTIONS = {
    "FA": "Front Attachment",
    "RA": "Rear Attachment",
    "TM": "Trunnion Mount",
}


@dataclass
class ComponentSuggestion:
    """Suggested BOM component"""
    category: str               # component class name (e.g. "Piston")
    code: str                   # generated item code
    name: str
    description: str
    quantity: int = 1
    compatibility_score: float = 1.0  # 0.0 ~ 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "quantity": self.quantity,
            "compatibility_score": self.compatibility_score,
        }


def component_code(prefix: str, series: str, size: str, suffix: str) -> str:
    return f"{prefix}{series}{size}-{suffix}"


def rod_diameter(bore: int) -> int:
    return math.floor(bore * ROD_DIAMETER_RATIO)


def tie_rod_quantity(bore: int) -> int:
    """Tie rods per cylinder by bore size"""
    if bore <= 50:
        return 4
    if bore <= 100:
        return 6
    if bore <= 150:
        return 8
    return 12


def rod_end_description(rod_end_type: Optional[str]) -> str:
    return ROD_END_DESCRIPTIONS.get(rod_end_type, "standard")


def installation_description(installation_type: Optional[str]) -> str:
    return INSTALLATION_DESCRIPTIONS.get(installation_type, "Standard")


# ============================================================
# [1] Per-category generators
# ============================================================

def _barrel(bore: str, bore_size: int, series: str) -> List[ComponentSuggestion]:
    suggestions = [
        ComponentSuggestion(
            category="CylinderBarrel",
            code=component_code("20", series, bore, "B01"),
            name=f"Cylinder Barrel {bore}mm - Series {series}",
            description=f"Standard barrel for {bore}mm bore, Series {series} hydraulic cylinder",
        )
    ]
    if bore_size > 80:
        suggestions.append(ComponentSuggestion(
            category="CylinderBarrel",
            code=component_code("20", series, bore, "B02"),
            name=f"Stainless Steel Barrel {bore}mm - Series {series}",
            description="Corrosion-resistant stainless steel barrel for harsh environments",
            compatibility_score=0.9,
        ))
    return suggestions


def _piston(bore: str, series: str) -> List[ComponentSuggestion]:
    suggestions = [
        ComponentSuggestion(
            category="Piston",
            code=component_code("21", series, bore, "P01"),
            name=f"Piston {bore}mm - Series {series}",
            description=f"Standard piston for {bore}mm bore hydraulic cylinder",
        )
    ]
    if series == "11":
        suggestions.append(ComponentSuggestion(
            category="Piston",
            code=component_code("21", series, bore, "P02"),
            name=f"Heavy Duty Piston {bore}mm - Series {series}",
            description="Reinforced piston for high-pressure applications",
            compatibility_score=0.95,
        ))
    return suggestions


def _piston_rod(bore: str, bore_size: int, series: str, rod_end_type: Optional[str]) -> List[ComponentSuggestion]:
    rod = rod_diameter(bore_size)
    size = f"{rod:03d}"
    return [
        ComponentSuggestion(
            category="PistonRod",
            code=component_code("21", series, size, "R01"),
            name=f"Piston Rod Ø{rod}mm for {bore}mm Bore",
            description=f"Standard piston rod with {rod_end_description(rod_end_type)} end connection",
        ),
        ComponentSuggestion(
            category="PistonRod",
            code=component_code("21", series, size, "R02"),
            name=f"Chrome-Plated Rod Ø{rod}mm for {bore}mm Bore",
            description="Chrome-plated piston rod for extended service life",
            compatibility_score=0.95,
        ),
    ]


def _seals(bore: str, bore_size: int, series: str) -> List[ComponentSuggestion]:
    suggestions = [
        ComponentSuggestion(
            category="SealingComponent",
            code=component_code("25", series, bore, "S01"),
            name=f"Piston Seal Set {bore}mm",
            description="Complete piston seal set including primary and secondary seals",
        ),
        ComponentSuggestion(
            category="SealingComponent",
            code=component_code("25", series, bore, "S02"),
            name=f"Rod Seal {bore}mm",
            description="High-performance rod seal for dynamic sealing",
        ),
        ComponentSuggestion(
            category="SealingComponent",
            code=component_code("25", series, bore, "S03"),
            name=f"Wiper Seal {bore}mm",
            description="Wiper seal for contamination protection",
        ),
    ]
    if bore_size > 100:
        suggestions.append(ComponentSuggestion(
            category="SealingComponent",
            code=component_code("25", series, bore, "S04"),
            name=f"Buffer Seal {bore}mm",
            description="Buffer seal for improved sealing performance in large cylinders",
            compatibility_score=0.8,
        ))
    return suggestions


def _end_caps(bore: str, series: str, installation_type: Optional[str]) -> List[ComponentSuggestion]:
    return [
        ComponentSuggestion(
            category="EndCap",
            code=component_code("22", series, bore, "C01"),
            name=f"Head End Cap {bore}mm - {installation_description(installation_type)}",
            description="Head end cap with integrated mounting features",
        ),
        ComponentSuggestion(
            category="EndCap",
            code=component_code("22", series, bore, "C02"),
            name=f"Rod End Cap {bore}mm",
            description="Rod end cap with integrated rod seal housing",
        ),
    ]


def _bushings(bore_size: int, series: str) -> List[ComponentSuggestion]:
    rod = rod_diameter(bore_size)
    size = f"{rod:03d}"
    suggestions = [
        ComponentSuggestion(
            category="Bushing",
            code=component_code("26", series, size, "B01"),
            name=f"Rod Bushing Ø{rod}mm",
            description="Self-lubricating rod bushing for smooth operation",
        )
    ]
    if bore_size > 80:
        suggestions.append(ComponentSuggestion(
            category="Bushing",
            code=component_code("26", series, size, "B02"),
            name=f"Guide Bushing Ø{rod}mm",
            description="Additional guide bushing for improved rod guidance",
            compatibility_score=0.8,
        ))
    return suggestions


def _fasteners(bore: str, bore_size: int, series: str) -> List[ComponentSuggestion]:
    tie_rods = tie_rod_quantity(bore_size)
    return [
        ComponentSuggestion(
            category="Fastener",
            code=component_code("27", series, bore, "T01"),
            name=f"Tie Rod Set for {bore}mm Cylinder",
            description=f"Set of {tie_rods} tie rods with nuts and washers",
            quantity=tie_rods,
        ),
        ComponentSuggestion(
            category="Fastener",
            code=component_code("27", series, bore, "B01"),
            name=f"End Cap Bolt Set for {bore}mm Cylinder",
            description="High-strength bolts for end cap attachment",
        ),
    ]


# ============================================================
# [2] Entry point
# ============================================================

def generate_suggestions(specs: Mapping[str, Any]) -> List[ComponentSuggestion]:
    """
    Component suggestions for a cylinder spec map

    Order: barrel, piston, rod, seals, end caps, bushings, fasteners.

    Args:
        specs: needs bore and series; rodEndType/installationType refine
            the rod and head end cap texts

    Returns:
        suggestions ([] when bore or series is missing, or bore is not a positive number)
    """
    bore = specs.get("bore")
    series = specs.get("series")
    if bore is None or series is None:
        return []

    bore, series = str(bore), str(series)
    bore_size = parse_int(bore)
    if bore_size is None:
        logger.warning(f"Cannot generate suggestions for non-numeric bore: {bore!r}")
        return []
    if bore_size <= 0:
        logger.warning(f"Cannot generate suggestions for non-positive bore: {bore!r}")
        return []

    rod_end_type = specs.get("rodEndType")
    installation_type = specs.get("installationType")

    suggestions: List[ComponentSuggestion] = []
    suggestions.extend(_barrel(bore, bore_size, series))
    suggestions.extend(_piston(bore, series))
    suggestions.extend(_piston_rod(bore, bore_size, series, rod_end_type))
    suggestions.extend(_seals(bore, bore_size, series))
    suggestions.extend(_end_caps(bore, series, installation_type))
    suggestions.extend(_bushings(bore_size, series))
    suggestions.extend(_fasteners(bore, bore_size, series))
    return suggestions
