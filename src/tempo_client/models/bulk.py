"""Payloads for writing or incrementing many series at one timestamp."""
# [CTX:PBI-1:1-6:MODELS]

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Union


@dataclass
class BulkKeyPoint:
    """A value addressed by series key."""
    key: str
    value: float

    def to_json(self) -> dict[str, Any]:
        return {"key": self.key, "v": self.value}


@dataclass
class BulkIdPoint:
    """A value addressed by series id."""
    id: str
    value: float

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id, "v": self.value}


BulkPoint = Union[BulkKeyPoint, BulkIdPoint]


@dataclass
class BulkDataSet:
    """
    Values for several series sharing one timestamp.

    Attributes:
        timestamp: Timezone-aware timestamp applied to every point
        points: Per-series values
    """
    timestamp: datetime
    points: list[BulkPoint] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        return {
            "t": self.timestamp.isoformat(),
            "data": [point.to_json() for point in self.points],
        }
