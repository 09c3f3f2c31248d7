"""
Data models for Dinner Debt - bill items, bill snapshot and receipt data
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any


def _optional_number(value: Any, key: str) -> Optional[float]:
    """Accept JSON numbers (not booleans) or null"""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number, got {type(value).__name__}")
    return value


def _optional_str(value: Any, key: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_bool(value: Any, key: str, default: bool) -> bool:
    """Accept JSON booleans; null or missing falls back to the default"""
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be a boolean, got {type(value).__name__}")
    return value


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class Item:
    """One line on the bill, possibly split among several diners"""
    cost: Optional[float] = None
    # how many shares I am paying for
    portions_paying: Optional[float] = None
    # how many shares the item was split into
    total_portions: Optional[float] = None
    name: Optional[str] = None
    id: Optional[str] = None

    def my_proportion(self) -> float:
        """Fraction of this item that belongs to me"""
        divisor = max(1, abs(self.total_portions if self.total_portions is not None else 1))
        paying = self.portions_paying if self.portions_paying is not None else 1
        return paying / divisor

    def my_cost(self) -> float:
        return (self.cost if self.cost is not None else 0) * self.my_proportion()

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'name': self.name,
            'cost': self.cost,
            'portionsPaying': self.portions_paying,
            'totalPortions': self.total_portions,
            'id': self.id,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Item":
        if not isinstance(data, dict):
            raise ValueError(f"item must be an object, got {type(data).__name__}")
        return cls(
            cost=_optional_number(data.get('cost'), 'cost'),
            portions_paying=_optional_number(data.get('portionsPaying'), 'portionsPaying'),
            total_portions=_optional_number(data.get('totalPortions'), 'totalPortions'),
            name=_optional_str(data.get('name'), 'name'),
            id=_optional_str(data.get('id'), 'id'),
        )


@dataclass
class Bill:
    """Snapshot of the whole form: items plus bill-level totals and tip"""
    items: List[Item] = field(default_factory=list)
    subtotal: Optional[float] = None
    total: Optional[float] = None
    tip: Optional[float] = None
    tip_is_rate: bool = True
    tip_included_in_total: bool = False
    venmo_username: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'items': [item.to_dict() for item in self.items],
            'subtotal': self.subtotal,
            'total': self.total,
            'tip': self.tip,
            'tipIsRate': self.tip_is_rate,
            'tipIncludedInTotal': self.tip_included_in_total,
            'venmoUsername': self.venmo_username,
        }
        return _drop_none(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bill":
        if not isinstance(data, dict):
            raise ValueError(f"bill must be an object, got {type(data).__name__}")
        raw_items = data.get('items') or []
        if not isinstance(raw_items, list):
            raise ValueError("'items' must be a list")
        return cls(
            items=[Item.from_dict(entry) for entry in raw_items],
            subtotal=_optional_number(data.get('subtotal'), 'subtotal'),
            total=_optional_number(data.get('total'), 'total'),
            tip=_optional_number(data.get('tip'), 'tip'),
            tip_is_rate=_optional_bool(data.get('tipIsRate'), 'tipIsRate', True),
            tip_included_in_total=_optional_bool(data.get('tipIncludedInTotal'), 'tipIncludedInTotal', False),
            venmo_username=_optional_str(data.get('venmoUsername'), 'venmoUsername') or None,
        )


@dataclass
class ReceiptLine:
    """A single priced line read off a receipt"""
    name: str
    cost: float


@dataclass
class ReceiptData:
    """Structured receipt as produced by the receipt reader"""
    items: List[ReceiptLine] = field(default_factory=list)
    subtotal: Optional[float] = None
    total: Optional[float] = None
    tip_included_in_total: bool = False
    tip: Optional[float] = None


@dataclass
class DebtBreakdown:
    """My share of the bill, split into its parts"""
    my_subtotal: float = 0.0
    tax_share: float = 0.0
    tip_share: float = 0.0
    total: float = 0.0

    @property
    def fees(self) -> float:
        return self.tax_share + self.tip_share


@dataclass
class ProcessingMetrics:
    """Metrics for parallel receipt OCR"""
    workers_used: int = 0
    processing_time: float = 0.0
    regions_processed: int = 0
    lines_read: int = 0
    items_detected: int = 0
