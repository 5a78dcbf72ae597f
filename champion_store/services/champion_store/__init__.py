"""
Champion store services package.

Resolves, per phone group, the store a customer should be attached to and
writes it back. Two entry points share the same pipeline:

- ChampionStoreSweepOrchestrator: paginated sweep of unassigned customers
- OrderChampionStoreOrchestrator: incremental recompute when an order is recorded
"""

from .batch_sweep import ChampionStoreSweepOrchestrator
from .batch_writer import BatchWriter
from .engine import ChampionStoreEngine
from .order_trigger import OrderChampionStoreOrchestrator

__all__ = [
    "ChampionStoreEngine",
    "BatchWriter",
    "ChampionStoreSweepOrchestrator",
    "OrderChampionStoreOrchestrator",
]
