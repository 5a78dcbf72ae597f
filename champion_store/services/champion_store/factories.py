"""
Factory functions wiring orchestrators to the database repositories.

These functions encapsulate dependency creation and injection so callers
(scripts, scheduled jobs, order hooks) only pass configuration.
"""

from typing import Optional

from champion_store.core.config import Settings, get_settings
from champion_store.db.connection import ConnDB, get_db_connection
from champion_store.db.repositories import (
    CompanyRepository,
    CustomerRepository,
    OrderRepository,
    StoreRepository,
)
from champion_store.services.champion_store.batch_sweep import ChampionStoreSweepOrchestrator
from champion_store.services.champion_store.batch_writer import BatchWriter
from champion_store.services.champion_store.eligibility import PolicyServiceEligibilityOracle
from champion_store.services.champion_store.engine import ChampionStoreEngine
from champion_store.services.champion_store.interfaces import IEligibilityOracle
from champion_store.services.champion_store.order_trigger import OrderChampionStoreOrchestrator


def _resolve_settings(settings: Optional[Settings]) -> tuple[Settings, bool]:
    if settings is None:
        return get_settings(), True
    return settings, settings is get_settings()


def _build_collaborators(conn_db: Optional[ConnDB], settings: Settings, global_settings: bool) -> dict:
    if conn_db is None:
        # the shared connection is built from the global settings
        conn_db = get_db_connection() if global_settings else ConnDB(settings=settings)
    max_in_params = settings.DB_MAX_IN_PARAMS
    return {
        "company_reader": CompanyRepository(conn_db, max_in_params=max_in_params),
        "store_reader": StoreRepository(conn_db, max_in_params=max_in_params),
        "customer_reader": CustomerRepository(conn_db, max_in_params=max_in_params),
        "order_reader": OrderRepository(conn_db, max_in_params=max_in_params),
    }


def create_sweep_orchestrator(
    conn_db: Optional[ConnDB] = None,
    settings: Optional[Settings] = None,
    eligibility_oracle: Optional[IEligibilityOracle] = None,
    chunk_size: Optional[int] = None,
    page_size: Optional[int] = None,
) -> ChampionStoreSweepOrchestrator:
    """
    Create a fully wired batch sweep orchestrator.

    Args:
        conn_db: Database connection (built from ``settings`` by default)
        settings: Application settings (global settings by default)
        eligibility_oracle: Policy check (policy service client by default)
        chunk_size: Write chunk size override
        page_size: Phones per company per invocation override; defaults to
            CHAMPION_STORE_PAGE_SIZE, then to the chunk size

    Returns:
        ChampionStoreSweepOrchestrator: Configured orchestrator

    Raises:
        ValidationException: If an explicit size is not positive
    """
    settings, global_settings = _resolve_settings(settings)
    collaborators = _build_collaborators(conn_db, settings, global_settings)

    if chunk_size is None:
        chunk_size = settings.CHAMPION_STORE_CHUNK_SIZE
    if page_size is None:
        page_size = settings.CHAMPION_STORE_PAGE_SIZE if settings.CHAMPION_STORE_PAGE_SIZE is not None else chunk_size

    engine = ChampionStoreEngine(BatchWriter(collaborators["customer_reader"], chunk_size=chunk_size))

    return ChampionStoreSweepOrchestrator(
        eligibility_oracle=eligibility_oracle or PolicyServiceEligibilityOracle.from_settings(settings),
        engine=engine,
        page_size=page_size,
        **collaborators,
    )


def create_order_orchestrator(
    conn_db: Optional[ConnDB] = None,
    settings: Optional[Settings] = None,
    eligibility_oracle: Optional[IEligibilityOracle] = None,
    chunk_size: Optional[int] = None,
) -> OrderChampionStoreOrchestrator:
    """
    Create a fully wired single-order orchestrator.

    Returns:
        OrderChampionStoreOrchestrator: Configured orchestrator
    """
    settings, global_settings = _resolve_settings(settings)
    collaborators = _build_collaborators(conn_db, settings, global_settings)

    if chunk_size is None:
        chunk_size = settings.CHAMPION_STORE_CHUNK_SIZE

    engine = ChampionStoreEngine(BatchWriter(collaborators["customer_reader"], chunk_size=chunk_size))

    return OrderChampionStoreOrchestrator(
        eligibility_oracle=eligibility_oracle or PolicyServiceEligibilityOracle.from_settings(settings),
        engine=engine,
        **collaborators,
    )
