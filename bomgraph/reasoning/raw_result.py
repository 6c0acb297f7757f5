"""
Reasoner output boundary models

The reasoner returns a loosely typed dict. These pydantic models are the
only place that dict is read: every field is optional, unknown keys are
ignored and list items are validated one by one so a single malformed
entry is dropped instead of failing the whole result.

Accepted shape:
    {
        "error": "...",                          # failure variant
        "isValid" | "valid": bool,
        "validationIssues": [{type, description, severity?}],
        "inferredStatements" | "inferredTriples": [{subject, predicate, object, category?}],
        "inferredSubclasses": [{subclass, superclass, confidence?}],
        "bomHierarchy": {code, uri, inferredProperties, components: [...]}
    }
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

UNSPECIFIED_ERROR = "Reasoner reported an error without a message"

_SCALARS = (str, bool, int, float, Decimal)


# ============================================================
# [1] Coercion helpers
# ============================================================

def _required_str(value: Any) -> Any:
    """Scalars become strings; anything else is left for pydantic to reject"""
    if isinstance(value, _SCALARS) and not isinstance(value, str):
        return str(value)
    return value


def _optional_str(value: Any) -> Optional[str]:
    """Scalars become strings; missing or structured values become None"""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, _SCALARS):
        return str(value)
    logger.debug(f"Ignoring non-scalar value: {type(value).__name__}")
    return None


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric confidence: {value!r}")
        return None


def _string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [str(v) for v in value if v is not None]
    return [str(value)]


def _property_map(value: Any) -> Dict[str, List[str]]:
    """Property name -> list of string values"""
    if not isinstance(value, Mapping):
        if value is not None:
            logger.debug(f"Ignoring inferredProperties of type {type(value).__name__}")
        return {}
    return {str(k): _string_list(v) for k, v in value.items()}


def _parse_items(model: Type[BaseModel], value: Any, label: str) -> list:
    """Validate list items one at a time, dropping malformed ones"""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        logger.debug(f"Ignoring {label} list of type {type(value).__name__}")
        return []

    items = []
    for position, item in enumerate(value):
        if isinstance(item, model):
            items.append(item)
            continue
        try:
            items.append(model.model_validate(item))
        except ValidationError as e:
            logger.debug(f"Dropping malformed {label} #{position}: {e.error_count()} error(s)")
    return items


# ============================================================
# [2] Item models
# ============================================================

class _RawModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RawValidationIssue(_RawModel):
    """validationIssues[] item"""
    type: str
    description: str
    severity: Optional[str] = None

    @field_validator("type", "description", mode="before")
    @classmethod
    def coerce_required(cls, v: Any) -> Any:
        return _required_str(v)

    @field_validator("severity", mode="before")
    @classmethod
    def coerce_optional(cls, v: Any) -> Optional[str]:
        return _optional_str(v)


class RawInferredTriple(_RawModel):
    """inferredStatements[] item"""
    subject: str
    predicate: str
    object: str
    category: Optional[str] = None

    @field_validator("subject", "predicate", "object", mode="before")
    @classmethod
    def coerce_required(cls, v: Any) -> Any:
        return _required_str(v)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_optional(cls, v: Any) -> Optional[str]:
        return _optional_str(v)


class RawInferredSubclass(_RawModel):
    """inferredSubclasses[] item"""
    subclass: str
    superclass: str
    confidence: Optional[float] = None

    @field_validator("subclass", "superclass", mode="before")
    @classmethod
    def coerce_required(cls, v: Any) -> Any:
        return _required_str(v)

    @field_validator("confidence", mode="before")
    @classmethod
    def coerce_confidence(cls, v: Any) -> Optional[float]:
        return _optional_float(v)


class RawHierarchyComponent(_RawModel):
    """bomHierarchy.components[] item (every field optional)"""
    code: Optional[str] = None
    uri: Optional[str] = None
    name: Optional[str] = None
    spec: Optional[str] = None
    quantity: Optional[str] = None
    effective_date: Optional[str] = Field(None, validation_alias=AliasChoices("effectiveDate", "effective_date"))
    expiry_date: Optional[str] = Field(None, validation_alias=AliasChoices("expiryDate", "expiry_date"))
    inferred_properties: Dict[str, List[str]] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("inferredProperties", "inferred_properties"),
    )

    @field_validator("code", "uri", "name", "spec", "quantity", "effective_date", "expiry_date", mode="before")
    @classmethod
    def coerce_optional(cls, v: Any) -> Optional[str]:
        return _optional_str(v)

    @field_validator("inferred_properties", mode="before")
    @classmethod
    def coerce_properties(cls, v: Any) -> Dict[str, List[str]]:
        return _property_map(v)


class RawBomHierarchy(_RawModel):
    """bomHierarchy section"""
    code: Optional[str] = None
    uri: Optional[str] = None
    inferred_properties: Dict[str, List[str]] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("inferredProperties", "inferred_properties"),
    )
    components: List[RawHierarchyComponent] = Field(default_factory=list)

    @field_validator("code", "uri", mode="before")
    @classmethod
    def coerce_optional(cls, v: Any) -> Optional[str]:
        return _optional_str(v)

    @field_validator("inferred_properties", mode="before")
    @classmethod
    def coerce_properties(cls, v: Any) -> Dict[str, List[str]]:
        return _property_map(v)

    @field_validator("components", mode="before")
    @classmethod
    def parse_components(cls, v: Any) -> list:
        return _parse_items(RawHierarchyComponent, v, "hierarchy component")


# ============================================================
# [3] Top-level output
# ============================================================

class RawReasonerOutput(_RawModel):
    """
    Reasoner output, either the error variant (error set) or the success
    variant (everything else)
    """
    error: Optional[str] = None
    is_valid: Optional[bool] = Field(None, validation_alias=AliasChoices("isValid", "valid", "is_valid"))
    validation_issues: List[RawValidationIssue] = Field(
        default_factory=list,
        validation_alias=AliasChoices("validationIssues", "validation_issues"),
    )
    inferred_statements: List[RawInferredTriple] = Field(
        default_factory=list,
        validation_alias=AliasChoices("inferredStatements", "inferredTriples", "inferred_statements"),
    )
    inferred_subclasses: List[RawInferredSubclass] = Field(
        default_factory=list,
        validation_alias=AliasChoices("inferredSubclasses", "inferred_subclasses"),
    )
    bom_hierarchy: Optional[RawBomHierarchy] = Field(
        None,
        validation_alias=AliasChoices("bomHierarchy", "bom_hierarchy"),
    )

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @field_validator("error", mode="before")
    @classmethod
    def coerce_error(cls, v: Any) -> Optional[str]:
        # an explicit null still marks the error variant
        if v is None:
            return UNSPECIFIED_ERROR
        if isinstance(v, str):
            return v
        return str(v)

    @field_validator("is_valid", mode="before")
    @classmethod
    def coerce_valid(cls, v: Any) -> Optional[bool]:
        if v is None or isinstance(v, bool):
            return v
        if isinstance(v, str) and v.strip().lower() in ("true", "false"):
            return v.strip().lower() == "true"
        if isinstance(v, int) and v in (0, 1):
            return bool(v)
        logger.debug(f"Ignoring unrecognized validity flag: {v!r}")
        return None

    @field_validator("validation_issues", mode="before")
    @classmethod
    def parse_issues(cls, v: Any) -> list:
        return _parse_items(RawValidationIssue, v, "validation issue")

    @field_validator("inferred_statements", mode="before")
    @classmethod
    def parse_statements(cls, v: Any) -> list:
        return _parse_items(RawInferredTriple, v, "inferred statement")

    @field_validator("inferred_subclasses", mode="before")
    @classmethod
    def parse_subclasses(cls, v: Any) -> list:
        return _parse_items(RawInferredSubclass, v, "inferred subclass")

    @field_validator("bom_hierarchy", mode="before")
    @classmethod
    def parse_hierarchy(cls, v: Any) -> Optional[Any]:
        if v is None or isinstance(v, RawBomHierarchy):
            return v
        if not isinstance(v, Mapping):
            logger.debug(f"Ignoring bomHierarchy of type {type(v).__name__}")
            return None
        try:
            return RawBomHierarchy.model_validate(v)
        except ValidationError as e:
            logger.debug(f"Ignoring malformed bomHierarchy: {e.error_count()} error(s)")
            return None


def parse_raw_output(raw: Any) -> RawReasonerOutput:
    """
    Parse a reasoner result into the boundary model

    Never raises: a missing or non-dict result becomes the error variant.
    """
    if raw is None:
        return RawReasonerOutput(error="Reasoner returned no result")
    if isinstance(raw, RawReasonerOutput):
        return raw
    if not isinstance(raw, Mapping):
        return RawReasonerOutput(error=f"Unexpected reasoner result type: {type(raw).__name__}")
    try:
        return RawReasonerOutput.model_validate(dict(raw))
    except ValidationError as e:
        logger.warning(f"Unparseable reasoner result: {e}")
        return RawReasonerOutput(error=f"Unparseable reasoner result: {e.error_count()} error(s)")
