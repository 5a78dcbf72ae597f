"""
Derived structures of a champion store resolution.

None of these are persisted: they are rebuilt from scratch on every run.
Only the customer's store reference is written back.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, NamedTuple

from .order import OrderDomain
from .store import StoreDomain


@dataclass
class StoreAggregate:
    """
    Completed-order statistics of one store within one phone group.

    Attributes:
        store: Store the statistics belong to
        total_orders: Number of completed orders
        total_value: Sum of the order totals
    """

    store: StoreDomain
    total_orders: int = 0
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))

    def add_order(self, order: OrderDomain) -> None:
        """Account one order in the aggregate."""
        self.total_orders += 1
        self.total_value += order.total

    def to_dict(self) -> dict[str, Any]:
        return {
            "store_id": self.store.id,
            "store_type": self.store.type,
            "total_orders": self.total_orders,
            "total_value": self.total_value,
        }


class StoreAssignment(NamedTuple):
    """One write record: set ``store_id`` on customer ``customer_id``."""

    customer_id: str
    store_id: str


@dataclass
class ResolutionResult:
    """
    Outcome of one run of the resolution pipeline.

    Attributes:
        customers_by_phone: Phone groups that were evaluated
        champions: Winning aggregate per phone (phones without one are absent)
        assignments_written: Number of customer records sent to storage
        chunks_written: Number of write calls performed
    """

    customers_by_phone: dict[str, list[str]] = field(default_factory=dict)
    champions: dict[str, StoreAggregate] = field(default_factory=dict)
    assignments_written: int = 0
    chunks_written: int = 0

    @property
    def phones_evaluated(self) -> int:
        return len(self.customers_by_phone)

    @property
    def champions_resolved(self) -> int:
        return len(self.champions)

    def champion_store_id(self, phone: str) -> str | None:
        """Get the winning store ID of a phone, if any."""
        champion = self.champions.get(phone)
        return champion.store.id if champion else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "phones_evaluated": self.phones_evaluated,
            "champions_resolved": self.champions_resolved,
            "assignments_written": self.assignments_written,
            "chunks_written": self.chunks_written,
        }
