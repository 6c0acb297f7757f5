"""
ERP record models

Item master and BOM rows as delivered by the ERP extract.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _parse_quantity(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid quantity: {value!r}") from None


@dataclass
class MaterialRecord:
    """Item master row"""
    code: str                       # item code (e.g. "3110063A0150Y1")
    name: Optional[str] = None      # item name
    spec: Optional[str] = None      # item specification text

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "name": self.name, "spec": self.spec}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MaterialRecord":
        return cls(code=data["code"], name=data.get("name"), spec=data.get("spec"))


@dataclass
class BomComponentRecord:
    """BOM component row"""
    component_code: str
    sequence: int
    effective_date: Optional[date] = None
    expiry_date: Optional[date] = None
    quantity: Optional[Decimal] = None
    characteristic_code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component_code": self.component_code,
            "sequence": self.sequence,
            "effective_date": self.effective_date.isoformat() if self.effective_date else None,
            "expiry_date": self.expiry_date.isoformat() if self.expiry_date else None,
            "quantity": str(self.quantity) if self.quantity is not None else None,
            "characteristic_code": self.characteristic_code,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BomComponentRecord":
        """Build from a dict; dates accept ISO strings, quantity accepts str/int/float

        Raises:
            ValueError: unparseable date or quantity
            KeyError: missing component_code/sequence
        """
        return cls(
            component_code=data["component_code"],
            sequence=int(data["sequence"]),
            effective_date=_parse_date(data.get("effective_date")),
            expiry_date=_parse_date(data.get("expiry_date")),
            quantity=_parse_quantity(data.get("quantity")),
            characteristic_code=data.get("characteristic_code"),
        )


@dataclass
class BomRecord:
    """BOM header with its components"""
    master_code: str
    characteristic_code: Optional[str] = None
    components: List[BomComponentRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "master_code": self.master_code,
            "characteristic_code": self.characteristic_code,
            "components": [c.to_dict() for c in self.components],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BomRecord":
        return cls(
            master_code=data["master_code"],
            characteristic_code=data.get("characteristic_code"),
            components=[BomComponentRecord.from_dict(c) for c in data.get("components", [])],
        )
