"""
Classification rule tables

One ordered table per dimension. The first matching rule wins, so each
dimension yields at most one class tag.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

_INTEGER = re.compile(r"^[+-]?\d+$")

ROOT_CLASS = "HydraulicCylinder"


@dataclass(frozen=True)
class ThresholdRule:
    """value <= upper -> tag (upper None matches everything)"""
    upper: Optional[int]
    tag: str

    def matches(self, value: int) -> bool:
        return self.upper is None or value <= self.upper


BORE_RULES: Sequence[ThresholdRule] = (
    ThresholdRule(50, "SmallBoreCylinder"),
    ThresholdRule(100, "MediumBoreCylinder"),
    ThresholdRule(None, "LargeBoreCylinder"),
)

STROKE_RULES: Sequence[ThresholdRule] = (
    ThresholdRule(100, "ShortStrokeCylinder"),
    ThresholdRule(300, "MediumStrokeCylinder"),
    ThresholdRule(None, "LongStrokeCylinder"),
)

SERIES_TAGS: Mapping[str, str] = {
    "10": "StandardCylinder",
    "11": "HeavyDutyCylinder",
    "12": "CompactCylinder",
    "13": "LightDutyCylinder",
}

ROD_END_TAGS: Mapping[str, str] = {
    "Y": "YokeRodEndCylinder",
    "I": "ThreadedRodEndCylinder",
    "E": "ThreadedRodEndCylinder",
    "P": "PinRodEndCylinder",
}

INSTALLATION_TAGS: Mapping[str, str] = {
    "FA": "FrontAttachmentCylinder",
    "RA": "RearAttachmentCylinder",
    "TM": "TrunnionMountedCylinder",
}

STANDARD_SERIES = ("10", "11", "12", "13")
STANDARD_ROD_END_TYPES = ("Y", "I", "E", "P")

# Typical ranges used by validation (inclusive, mm)
BORE_RANGE = (10, 500)
STROKE_RANGE = (10, 10000)


def parse_int(value: Any) -> Optional[int]:
    """Strict decimal integer parse ("063" -> 63); None when not an integer"""
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value)
    if not _INTEGER.match(text):
        return None
    return int(text)


def match_threshold(rules: Sequence[ThresholdRule], value: int) -> Optional[str]:
    for rule in rules:
        if rule.matches(value):
            return rule.tag
    return None
