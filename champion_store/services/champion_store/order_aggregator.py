"""Aggregation of completed orders per phone group and store."""

import logging
from typing import Iterable, Mapping

from champion_store.domain.models import OrderDomain, StoreAggregate, StoreDomain

logger = logging.getLogger(__name__)


def aggregate_orders_by_phone(
    stores: Iterable[StoreDomain],
    orders: Iterable[OrderDomain],
    customers_by_phone: Mapping[str, list[str]],
) -> dict[str, dict[str, StoreAggregate]]:
    """
    Compute completed-order statistics per phone and store.

    Every phone of the grouping gets an entry, possibly empty. An order is
    counted when it is completed, has a store, and both its customer and
    its store resolve; anything else is skipped silently (deleted store,
    customer outside the current page, pending order, ...).

    Args:
        stores: Stores of the company
        orders: Candidate orders
        customers_by_phone: phone -> customer IDs

    Returns:
        dict: phone -> (store ID -> StoreAggregate)
    """
    phone_by_customer_id: dict[str, str] = {}
    aggregates: dict[str, dict[str, StoreAggregate]] = {}
    for phone, customer_ids in customers_by_phone.items():
        aggregates[phone] = {}
        for customer_id in customer_ids:
            phone_by_customer_id[customer_id] = phone

    store_by_id = {store.id: store for store in stores}

    skipped = 0
    for order in orders:
        if not order.counts_for_champion:
            skipped += 1
            continue

        phone = phone_by_customer_id.get(order.customer_id)
        store = store_by_id.get(order.store_id)
        if phone is None or store is None:
            skipped += 1
            continue

        aggregate = aggregates[phone].get(store.id)
        if aggregate is None:
            aggregate = aggregates[phone][store.id] = StoreAggregate(store=store)
        aggregate.add_order(order)

    if skipped:
        logger.debug(f"Skipped {skipped} orders without a resolvable phone, store or completed status")

    return aggregates
