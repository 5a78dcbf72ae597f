"""
Champion store selection policy.

Per phone, independently:

1. If any aggregated store is a show-room, only show-rooms compete.
2. The greatest number of completed orders wins.
3. Equal order counts are decided by the greatest total value.
4. Full ties go to the lowest store ID, so results never depend on
   iteration order.
5. A phone with no competing store gets no champion.
"""

from typing import Mapping

from champion_store.domain.models import StoreAggregate


def _outranks(candidate: StoreAggregate, current: StoreAggregate | None) -> bool:
    if current is None:
        return True
    if candidate.total_orders != current.total_orders:
        return candidate.total_orders > current.total_orders
    if candidate.total_value != current.total_value:
        return candidate.total_value > current.total_value
    return candidate.store.id < current.store.id


def select_champion(store_aggregates: Mapping[str, StoreAggregate]) -> StoreAggregate | None:
    """
    Pick the winning store of one phone group.

    Args:
        store_aggregates: store ID -> StoreAggregate of a single phone

    Returns:
        StoreAggregate | None: Winner, or None when no store competes
    """
    candidates = list(store_aggregates.values())
    if any(aggregate.store.is_show_room for aggregate in candidates):
        candidates = [aggregate for aggregate in candidates if aggregate.store.is_show_room]

    champion: StoreAggregate | None = None
    for aggregate in candidates:
        if _outranks(aggregate, champion):
            champion = aggregate

    return champion


def select_champions(
    aggregates_by_phone: Mapping[str, Mapping[str, StoreAggregate]],
) -> dict[str, StoreAggregate]:
    """
    Pick the winning store of every phone group.

    Args:
        aggregates_by_phone: phone -> (store ID -> StoreAggregate)

    Returns:
        dict: phone -> winning StoreAggregate, only for phones with a winner
    """
    champions: dict[str, StoreAggregate] = {}

    for phone, store_aggregates in aggregates_by_phone.items():
        champion = select_champion(store_aggregates)
        if champion is not None:
            champions[phone] = champion

    return champions
