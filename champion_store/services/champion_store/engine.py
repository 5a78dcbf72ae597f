"""
ChampionStoreEngine - the shared resolution pipeline.

Both entry points feed it a scope (stores, customers and orders already
restricted to the phones being resolved) and it runs:
PhoneGrouper -> OrderAggregator -> ChampionSelector -> BatchWriter.
"""

import logging
from typing import Iterable

from champion_store.domain.models import CustomerDomain, OrderDomain, ResolutionResult, StoreDomain
from champion_store.services.champion_store.batch_writer import BatchWriter
from champion_store.services.champion_store.champion_selector import select_champions
from champion_store.services.champion_store.order_aggregator import aggregate_orders_by_phone
from champion_store.services.champion_store.phone_grouper import group_customers_by_phone

logger = logging.getLogger(__name__)


class ChampionStoreEngine:
    """Runs the champion store pipeline over one input scope."""

    def __init__(self, writer: BatchWriter):
        self.writer = writer

    async def resolve(
        self,
        stores: Iterable[StoreDomain],
        customers: Iterable[CustomerDomain],
        orders: Iterable[OrderDomain],
    ) -> ResolutionResult:
        """
        Resolve and persist the champion store of every phone in scope.

        Args:
            stores: Stores of the company
            customers: Customers whose phones are being resolved
            orders: Orders of those customers (non-qualifying ones are ignored)

        Returns:
            ResolutionResult: Groups, champions and write counters
        """
        customers_by_phone = group_customers_by_phone(customers)
        if not customers_by_phone:
            logger.debug("No phone groups in scope, nothing to resolve")
            return ResolutionResult()

        aggregates = aggregate_orders_by_phone(stores, orders, customers_by_phone)
        champions = select_champions(aggregates)
        logger.debug(f"Resolved {len(champions)} champions for {len(customers_by_phone)} phone groups")

        written, chunks = await self.writer.write(champions, customers_by_phone)

        return ResolutionResult(
            customers_by_phone=customers_by_phone,
            champions=champions,
            assignments_written=written,
            chunks_written=chunks,
        )
