"""
Reasoning ruleset loader

Reads configs/reasoning_rules.yaml (path from settings.reasoner.rules_path).
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class Ruleset:
    """Rules handed to the reasoner"""
    version: str = "1.0"
    description: str = ""
    rules: List[Dict[str, Any]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rules)

    def names(self) -> List[str]:
        return [r.get("name", "") for r in self.rules]

    def of_kind(self, kind: str) -> List[Dict[str, Any]]:
        return [r for r in self.rules if r.get("kind") == kind]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ruleset":
        rules = []
        for position, rule in enumerate(data.get("rules") or []):
            if not isinstance(rule, dict) or "kind" not in rule:
                logger.warning(f"Skipping malformed rule #{position}: {rule!r}")
                continue
            rules.append(rule)
        return cls(
            version=str(data.get("version", "1.0")),
            description=data.get("description", ""),
            rules=rules,
        )


def load_ruleset(path: Optional[Union[str, Path]] = None) -> Ruleset:
    """
    Load the reasoning ruleset

    Args:
        path: YAML file (default: settings.reasoner.rules_path)

    Returns:
        Ruleset (empty when the file is missing or unreadable)
    """
    path = Path(path) if path else get_settings().reasoner.rules_path
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ruleset load failed: {path} - {e}")
        return Ruleset()
    if not isinstance(data, dict):
        logger.warning(f"Ruleset file is not a mapping: {path}")
        return Ruleset()

    ruleset = Ruleset.from_dict(data)
    logger.info(f"Loaded {len(ruleset)} reasoning rules from {path}")
    return ruleset
