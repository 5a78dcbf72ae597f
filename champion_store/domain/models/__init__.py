"""
Domain models for business entities.

These models represent core business concepts and contain
business logic and invariants.
"""

from .champion import ResolutionResult, StoreAggregate, StoreAssignment
from .company import CompanyDomain
from .customer import CustomerDomain
from .order import OrderDomain, OrderStatus
from .store import StoreDomain, StoreType

__all__ = [
    "CompanyDomain",
    "StoreDomain",
    "StoreType",
    "CustomerDomain",
    "OrderDomain",
    "OrderStatus",
    "StoreAggregate",
    "StoreAssignment",
    "ResolutionResult",
]
