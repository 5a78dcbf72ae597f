"""
Interfaces/Protocols for champion store collaborators (Dependency Inversion Principle).

These protocols define the data-shaped contracts the resolver depends on,
so any storage technology or policy service can satisfy them and tests
can substitute in-memory doubles.
"""

from typing import Protocol, Sequence

from champion_store.domain.models import (
    CompanyDomain,
    CustomerDomain,
    OrderDomain,
    StoreAssignment,
    StoreDomain,
)


class IEligibilityOracle(Protocol):
    """Protocol for the external feature-blocking policy."""

    async def is_blocked(self, company: CompanyDomain) -> bool:
        """Return True when the company must not take part in champion store resolution."""
        ...


class ICompanyReader(Protocol):
    """Protocol for company lookups."""

    async def list_companies(self) -> list[CompanyDomain]:
        """List every company."""
        ...

    async def get_company(self, company_id: str) -> CompanyDomain | None:
        """Get a company by ID."""
        ...


class IStoreReader(Protocol):
    """Protocol for store lookups."""

    async def list_stores(self, company_id: str) -> list[StoreDomain]:
        """List the stores of a company."""
        ...


class ICustomerReader(Protocol):
    """Protocol for customer lookups."""

    async def list_unassigned_customer_phones(self, company_id: str, page_size: int) -> list[str]:
        """
        List up to page_size distinct phones of customers with no store.

        Only phones that can resolve a champion are listed: some customer
        sharing the phone has a completed order at a store of the company.
        """
        ...

    async def list_customers_by_phones(
        self, company_id: str, phones: Sequence[str], unassigned_only: bool = True
    ) -> list[CustomerDomain]:
        """List the customers of a company having one of the phones."""
        ...


class ICustomerWriter(Protocol):
    """Protocol for persisting champion stores."""

    async def assign_store(self, assignments: Sequence[StoreAssignment]) -> int:
        """Set the store of each customer in one call; return the number of records sent."""
        ...


class IOrderReader(Protocol):
    """Protocol for order lookups."""

    async def list_completed_orders(self, customer_ids: Sequence[str]) -> list[OrderDomain]:
        """List completed orders with a store for the given customers."""
        ...

    async def list_orders_by_customer(self, customer_id: str) -> list[OrderDomain]:
        """List every order of one customer."""
        ...
