"""
CustomerRepository: customer lookups and champion store writes.

Reads page through distinct phones of unassigned customers that can resolve
a champion; writes set only the store reference, by customer ID, so
replaying a chunk is harmless.
"""

import logging
from typing import List, Sequence

from sqlalchemy import bindparam, func, select, update

from champion_store.db.repositories.base import BaseRepository, log_operation
from champion_store.db.tables import customers, orders, stores
from champion_store.domain.models import CustomerDomain, OrderStatus, StoreAssignment

logger = logging.getLogger(__name__)

_CUSTOMER_COLUMNS = (
    customers.c.id,
    customers.c.company_id,
    customers.c.phone,
    customers.c.store_id,
    customers.c.name,
)


class CustomerRepository(BaseRepository):
    """Repository for customer reads and store assignment."""

    @log_operation()
    async def list_unassigned_customer_phones(self, company_id: str, page_size: int) -> List[str]:
        """
        List up to ``page_size`` distinct phones of customers without a store.

        Only phones that can resolve a champion are listed: some customer of
        the company sharing the phone has a completed order at one of the
        company's stores. Phones without such an order would otherwise fill
        every page and block the phones after them.

        Blank phones (NULL, empty or whitespace only) are excluded, matching
        ``CustomerDomain.has_phone``. Phones are ordered so consecutive pages
        are stable.
        """
        sibling = customers.alias("sibling")
        has_qualifying_order = (
            select(orders.c.id)
            .select_from(
                sibling.join(orders, orders.c.customer_id == sibling.c.id).join(
                    stores, stores.c.id == orders.c.store_id
                )
            )
            .where(
                sibling.c.company_id == company_id,
                sibling.c.phone == customers.c.phone,
                orders.c.status == OrderStatus.COMPLETED.value,
                stores.c.company_id == company_id,
            )
            .exists()
        )
        statement = (
            select(customers.c.phone)
            .where(
                customers.c.company_id == company_id,
                customers.c.store_id.is_(None),
                customers.c.phone.is_not(None),
                func.ltrim(func.rtrim(customers.c.phone)) != "",
                has_qualifying_order,
            )
            .distinct()
            .order_by(customers.c.phone)
            .limit(page_size)
        )
        return await self._fetch_scalars(statement, "list_unassigned_customer_phones")

    @log_operation()
    async def list_customers_by_phones(
        self, company_id: str, phones: Sequence[str], unassigned_only: bool = True
    ) -> List[CustomerDomain]:
        """
        List the customers of a company whose phone is one of ``phones``.

        Args:
            company_id: Company scope
            phones: Phones to look up
            unassigned_only: Restrict to customers without a store (batch sweep)
        """
        if not phones:
            return []

        def build_statement(chunk):
            statement = select(*_CUSTOMER_COLUMNS).where(
                customers.c.company_id == company_id,
                customers.c.phone.in_(chunk),
            )
            if unassigned_only:
                statement = statement.where(customers.c.store_id.is_(None))
            return statement

        rows = await self._fetch_rows_in_chunks(build_statement, phones, "list_customers_by_phones")
        return [CustomerDomain.from_dict(row) for row in rows]

    @log_operation()
    async def assign_store(self, assignments: Sequence[StoreAssignment]) -> int:
        """
        Set the store of each customer, committing once for the whole batch.

        Returns:
            int: Number of records sent
        """
        if not assignments:
            return 0

        statement = (
            update(customers)
            .where(customers.c.id == bindparam("b_customer_id"))
            .values(store_id=bindparam("b_store_id"))
        )
        params = [
            {"b_customer_id": assignment.customer_id, "b_store_id": assignment.store_id}
            for assignment in assignments
        ]
        await self._execute_many_with_commit(statement, params, "assign_store")
        logger.debug(f"Assigned stores to {len(params)} customers")
        return len(params)
