"""
Customer domain model.

Represents a customer record. The assigned store is the only field the
champion store resolver mutates.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class CustomerDomain:
    """
    Domain model representing a customer.

    Attributes:
        id: Customer ID
        company_id: Owning company ID
        phone: Phone number, the grouping key. Compared verbatim, callers
            are responsible for storing canonical values.
        store_id: Currently assigned (champion) store, None if unassigned
        name: Customer name
    """

    id: str
    company_id: str | None = None
    phone: str | None = None
    store_id: str | None = None
    name: str = ""

    @property
    def has_phone(self) -> bool:
        """Check if the customer can take part in a phone group."""
        return bool(self.phone and self.phone.strip())

    @property
    def is_assigned(self) -> bool:
        """Check if the customer already has a store."""
        return self.store_id is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert customer to dictionary for persistence."""
        return {
            "id": self.id,
            "company_id": self.company_id,
            "phone": self.phone,
            "store_id": self.store_id,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CustomerDomain":
        """Create customer from dictionary."""
        company_id = data.get("company_id")
        store_id = data.get("store_id")
        return cls(
            id=str(data["id"]),
            company_id=str(company_id) if company_id is not None else None,
            phone=data.get("phone"),
            store_id=str(store_id) if store_id is not None else None,
            name=data.get("name") or "",
        )
