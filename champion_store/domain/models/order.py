"""
Order domain model.

Represents an order as seen by the champion store resolver: who bought,
where, in which status and for how much.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any


class OrderStatus(str, Enum):
    """Order lifecycle statuses. Only COMPLETED orders are aggregated."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELED = "canceled"
    REFUNDED = "refunded"


@dataclass
class OrderDomain:
    """
    Domain model representing an order.

    Attributes:
        id: Order ID (None for an order not persisted yet)
        company_id: Owning company ID
        customer_id: Customer who placed the order
        store_id: Store where the order was placed (nullable)
        status: Order status value
        total: Order total, currency agnostic. The sign is never reinterpreted.
    """

    id: str | None = None
    company_id: str | None = None
    customer_id: str | None = None
    store_id: str | None = None
    status: str = OrderStatus.PENDING.value
    total: Decimal = field(default_factory=lambda: Decimal("0"))

    def __post_init__(self) -> None:
        """Normalize status and total after initialization."""
        if isinstance(self.status, OrderStatus):
            self.status = self.status.value
        if not isinstance(self.total, Decimal):
            self.total = Decimal(str(self.total)) if self.total is not None else Decimal("0")

    @property
    def is_completed(self) -> bool:
        """Check if the order is completed."""
        return self.status == OrderStatus.COMPLETED.value

    @property
    def counts_for_champion(self) -> bool:
        """Only completed orders placed at a store are aggregated."""
        return self.is_completed and self.store_id is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert order to dictionary for persistence."""
        return {
            "id": self.id,
            "company_id": self.company_id,
            "customer_id": self.customer_id,
            "store_id": self.store_id,
            "status": self.status,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrderDomain":
        """Create order from dictionary."""

        def _optional_str(value: Any) -> str | None:
            return str(value) if value is not None else None

        return cls(
            id=_optional_str(data.get("id")),
            company_id=_optional_str(data.get("company_id")),
            customer_id=_optional_str(data.get("customer_id")),
            store_id=_optional_str(data.get("store_id")),
            status=data.get("status") or OrderStatus.PENDING.value,
            total=data.get("total"),
        )
