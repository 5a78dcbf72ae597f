"""OrderRepository: order history lookups."""

from typing import List, Sequence

from sqlalchemy import select

from champion_store.db.repositories.base import BaseRepository, log_operation
from champion_store.db.tables import orders
from champion_store.domain.models import OrderDomain, OrderStatus

_ORDER_COLUMNS = (
    orders.c.id,
    orders.c.company_id,
    orders.c.customer_id,
    orders.c.store_id,
    orders.c.status,
    orders.c.total,
)


class OrderRepository(BaseRepository):
    """Repository for order reads."""

    @log_operation()
    async def list_completed_orders(self, customer_ids: Sequence[str]) -> List[OrderDomain]:
        """List completed orders placed at a store by any of the customers."""
        if not customer_ids:
            return []

        def build_statement(chunk):
            return select(*_ORDER_COLUMNS).where(
                orders.c.status == OrderStatus.COMPLETED.value,
                orders.c.customer_id.in_(chunk),
                orders.c.store_id.is_not(None),
            )

        rows = await self._fetch_rows_in_chunks(build_statement, customer_ids, "list_completed_orders")
        return [OrderDomain.from_dict(row) for row in rows]

    @log_operation()
    async def list_orders_by_customer(self, customer_id: str) -> List[OrderDomain]:
        """List every order of one customer, whatever its status."""
        statement = select(*_ORDER_COLUMNS).where(orders.c.customer_id == customer_id)
        rows = await self._fetch_rows(statement, "list_orders_by_customer")
        return [OrderDomain.from_dict(row) for row in rows]
