"""Series metadata and the empty result of write operations."""
# [CTX:PBI-1:1-6:MODELS]

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Series:
    """
    A named time series.

    Attributes:
        key: Unique key, used in URLs
        id: Server-assigned identifier
        name: Human readable name
        tags: Free-form tags
        attributes: Free-form key/value attributes
    """
    key: str
    id: str = ""
    name: str = ""
    tags: list[str] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Series":
        return cls(
            key=data["key"],
            id=data.get("id") or "",
            name=data.get("name") or "",
            tags=list(data.get("tags") or []),
            attributes=dict(data.get("attributes") or {}),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "key": self.key,
            "name": self.name,
            "tags": self.tags,
            "attributes": self.attributes,
        }


@dataclass(frozen=True)
class Nothing:
    """Value of a successful request whose body carries no data."""
