"""
Store domain model.

Represents a store belonging to a company. Stores are read-only for the
champion store resolver.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class StoreType(str, Enum):
    """Known store type tags."""

    PHYSICAL = "physical"
    SHOW_ROOM = "show_room"
    E_COMMERCE = "e_commerce"


@dataclass(frozen=True)
class StoreDomain:
    """
    Domain model representing a store.

    Attributes:
        id: Store ID
        company_id: Owning company ID
        type: Store type tag. Kept as the raw stored value; unknown or
            missing tags are valid and simply never count as show-room.
        name: Store display name
    """

    id: str
    company_id: str
    type: str | None = None
    name: str = ""

    @property
    def is_show_room(self) -> bool:
        """Check if the store is a show-room."""
        return self.type == StoreType.SHOW_ROOM.value

    def to_dict(self) -> dict[str, Any]:
        """Convert store to dictionary for persistence."""
        return {
            "id": self.id,
            "company_id": self.company_id,
            "type": self.type,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoreDomain":
        """Create store from dictionary."""
        store_type = data.get("type")
        if isinstance(store_type, StoreType):
            store_type = store_type.value
        return cls(
            id=str(data["id"]),
            company_id=str(data["company_id"]),
            type=store_type,
            name=data.get("name") or "",
        )
