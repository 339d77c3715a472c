"""Data point types returned by reads and accepted by writes."""
# [CTX:PBI-1:1-6:MODELS]

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Union


@dataclass(frozen=True)
class DataPoint:
    """
    A single value at an instant.

    Attributes:
        timestamp: Timezone-aware timestamp
        value: Point value
    """
    timestamp: datetime
    value: float

    def to_json(self) -> dict[str, Any]:
        """Serialize for write and increment payloads."""
        return {"t": self.timestamp.isoformat(), "v": self.value}


@dataclass(frozen=True)
class MultiDataPoint:
    """
    Several named values at one instant, one per rollup fold.

    Two points are equal when they hold the same instant and the same
    fold-to-value mapping, whatever the key order. The mapping is read-only.

    Attributes:
        timestamp: Timezone-aware timestamp
        values: Fold name (e.g. "sum", "max") mapped to its value
    """
    timestamp: datetime
    values: Mapping[str, float]

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __hash__(self) -> int:
        return hash((self.timestamp, frozenset(self.values.items())))

    def get(self, fold: Union[str, Enum]) -> float | None:
        """Value for a fold, by name or Fold member."""
        if isinstance(fold, Enum):
            fold = fold.value
        return self.values.get(fold)
