"""
OrderChampionStoreOrchestrator - reactive recompute when an order is recorded.

Recomputes the full champion decision of the customer's phone group from the
customer's complete order history plus the triggering order, so a single new
order can flip the champion.
"""

import logging

from champion_store.core.logging_config import log_resolution_operation
from champion_store.domain.models import CustomerDomain, OrderDomain, ResolutionResult
from champion_store.services.champion_store.engine import ChampionStoreEngine
from champion_store.services.champion_store.interfaces import (
    ICompanyReader,
    ICustomerReader,
    IEligibilityOracle,
    IOrderReader,
    IStoreReader,
)
from champion_store.utils.error_handler import ChampionStoreException

logger = logging.getLogger(__name__)


def merge_triggering_order(orders: list[OrderDomain], order: OrderDomain) -> list[OrderDomain]:
    """
    Append the triggering order to the loaded history unless it is already there.

    An order that was persisted before the trigger fired comes back from the
    history query too; it must only be counted once.
    """
    if order.id is not None and any(existing.id == order.id for existing in orders):
        return [order if existing.id == order.id else existing for existing in orders]
    return [*orders, order]


class OrderChampionStoreOrchestrator:
    """Orchestrates the single-order champion store flow."""

    def __init__(
        self,
        company_reader: ICompanyReader,
        eligibility_oracle: IEligibilityOracle,
        store_reader: IStoreReader,
        customer_reader: ICustomerReader,
        order_reader: IOrderReader,
        engine: ChampionStoreEngine,
    ):
        self.company_reader = company_reader
        self.eligibility_oracle = eligibility_oracle
        self.store_reader = store_reader
        self.customer_reader = customer_reader
        self.order_reader = order_reader
        self.engine = engine

    async def execute(self, order: OrderDomain, customer: CustomerDomain) -> ResolutionResult | None:
        """
        Entry point for a newly recorded (or about to be recorded) order.

        Returns:
            ResolutionResult | None: None when the flow stopped early
        """
        if not order.company_id:
            logger.debug(f"Order {order.id} has no company, skipping champion store update")
            return None
        return await self.process_order(order, customer)

    async def process_order(self, order: OrderDomain, customer: CustomerDomain) -> ResolutionResult | None:
        """
        Recompute the champion store of the customer's phone group.

        Args:
            order: Triggering order (must carry a company)
            customer: Customer who placed the order

        Returns:
            ResolutionResult | None: None on a skip condition or policy stop

        Raises:
            ChampionStoreException: If any collaborator fails
        """
        if not customer.has_phone:
            logger.debug(f"Customer {customer.id} has no phone, skipping champion store update")
            return None

        try:
            company = await self.company_reader.get_company(order.company_id)
            if company is None:
                logger.warning(f"Company {order.company_id} of order {order.id} not found")
                return None

            if await self.eligibility_oracle.is_blocked(company):
                logger.info(f"Company {company.id} is blocked from champion store resolution, skipping")
                return None

            stores = await self.store_reader.list_stores(company.id)
            customers = await self.customer_reader.list_customers_by_phones(
                company.id, [customer.phone], unassigned_only=False
            )
            if all(existing.id != customer.id for existing in customers):
                customers.append(customer)

            history = await self.order_reader.list_orders_by_customer(customer.id)
            orders = merge_triggering_order(history, order)

            result = await self.engine.resolve(stores, customers, orders)

        except Exception as e:
            logger.error(f"Failed to update champion store for customer {customer.id}: {e}")
            raise ChampionStoreException(
                message=f"Failed to update champion store for customer {customer.id}: {str(e)}",
                operation="process_order",
                company_id=order.company_id,
                customer_id=customer.id,
            ) from e

        log_resolution_operation(
            "order_trigger",
            order.company_id,
            customer_id=customer.id,
            champion_store_id=result.champion_store_id(customer.phone),
            **result.to_dict(),
        )
        return result
