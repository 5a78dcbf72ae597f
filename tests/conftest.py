"""Fixtures compartidos: colaboradores en memoria para el motor de tienda campeona."""

from decimal import Decimal
from typing import Sequence

import pytest

from champion_store.domain.models import (
    CompanyDomain,
    CustomerDomain,
    OrderDomain,
    OrderStatus,
    StoreAssignment,
    StoreDomain,
    StoreType,
)
from champion_store.services.champion_store.batch_sweep import ChampionStoreSweepOrchestrator
from champion_store.services.champion_store.batch_writer import BatchWriter
from champion_store.services.champion_store.engine import ChampionStoreEngine
from champion_store.services.champion_store.order_trigger import OrderChampionStoreOrchestrator


class InMemoryDataStore:
    """Implementa todos los contratos de lectura/escritura sobre listas en memoria."""

    def __init__(self):
        self.companies: dict[str, CompanyDomain] = {}
        self.stores: dict[str, StoreDomain] = {}
        self.customers: dict[str, CustomerDomain] = {}
        self.orders: list[OrderDomain] = []
        self.calls: list[str] = []
        self.write_calls: list[list[StoreAssignment]] = []
        self._sequence = 0

    def _next_id(self, prefix: str) -> str:
        self._sequence += 1
        return f"{prefix}-{self._sequence:05d}"

    # --- builders ---
    def add_company(self, name: str = "Test Company") -> CompanyDomain:
        company = CompanyDomain(id=self._next_id("company"), name=name)
        self.companies[company.id] = company
        return company

    def add_store(self, company: CompanyDomain, store_type: str | None = None, store_id: str | None = None):
        store = StoreDomain(id=store_id or self._next_id("store"), company_id=company.id, type=store_type)
        self.stores[store.id] = store
        return store

    def add_customer(self, company: CompanyDomain, phone: str | None, store_id: str | None = None):
        customer = CustomerDomain(
            id=self._next_id("customer"), company_id=company.id, phone=phone, store_id=store_id
        )
        self.customers[customer.id] = customer
        return customer

    def add_order(
        self,
        customer: CustomerDomain,
        store: StoreDomain | None,
        total,
        status: str = OrderStatus.COMPLETED.value,
    ) -> OrderDomain:
        order = OrderDomain(
            id=self._next_id("order"),
            company_id=customer.company_id,
            customer_id=customer.id,
            store_id=store.id if store else None,
            status=status,
            total=Decimal(str(total)),
        )
        self.orders.append(order)
        return order

    def store_of(self, customer: CustomerDomain) -> str | None:
        return self.customers[customer.id].store_id

    # --- ICompanyReader ---
    async def list_companies(self) -> list[CompanyDomain]:
        self.calls.append("list_companies")
        return list(self.companies.values())

    async def get_company(self, company_id: str) -> CompanyDomain | None:
        self.calls.append("get_company")
        return self.companies.get(company_id)

    # --- IStoreReader ---
    async def list_stores(self, company_id: str) -> list[StoreDomain]:
        self.calls.append("list_stores")
        return [store for store in self.stores.values() if store.company_id == company_id]

    # --- ICustomerReader ---
    async def list_unassigned_customer_phones(self, company_id: str, page_size: int) -> list[str]:
        self.calls.append("list_unassigned_customer_phones")
        company_customers = [customer for customer in self.customers.values() if customer.company_id == company_id]
        company_stores = {store.id for store in self.stores.values() if store.company_id == company_id}
        buyers = {
            order.customer_id
            for order in self.orders
            if order.is_completed and order.store_id in company_stores
        }
        resolvable = {customer.phone for customer in company_customers if customer.id in buyers}
        phones = {
            customer.phone
            for customer in company_customers
            if customer.store_id is None and customer.has_phone and customer.phone in resolvable
        }
        return sorted(phones)[:page_size]

    async def list_customers_by_phones(
        self, company_id: str, phones: Sequence[str], unassigned_only: bool = True
    ) -> list[CustomerDomain]:
        self.calls.append("list_customers_by_phones")
        wanted = set(phones)
        return [
            CustomerDomain(**customer.to_dict())
            for customer in self.customers.values()
            if customer.company_id == company_id
            and customer.phone in wanted
            and (customer.store_id is None or not unassigned_only)
        ]

    # --- ICustomerWriter ---
    async def assign_store(self, assignments: Sequence[StoreAssignment]) -> int:
        self.calls.append("assign_store")
        self.write_calls.append(list(assignments))
        for assignment in assignments:
            self.customers[assignment.customer_id].store_id = assignment.store_id
        return len(assignments)

    # --- IOrderReader ---
    async def list_completed_orders(self, customer_ids: Sequence[str]) -> list[OrderDomain]:
        self.calls.append("list_completed_orders")
        wanted = set(customer_ids)
        return [
            order
            for order in self.orders
            if order.customer_id in wanted and order.is_completed and order.store_id is not None
        ]

    async def list_orders_by_customer(self, customer_id: str) -> list[OrderDomain]:
        self.calls.append("list_orders_by_customer")
        return [order for order in self.orders if order.customer_id == customer_id]


class StaticEligibilityOracle:
    """Oráculo de elegibilidad con empresas bloqueadas fijas."""

    def __init__(self, blocked_company_ids: Sequence[str] = ()):
        self.blocked_company_ids = set(blocked_company_ids)
        self.checked: list[str] = []

    async def is_blocked(self, company: CompanyDomain) -> bool:
        self.checked.append(company.id)
        return company.id in self.blocked_company_ids


@pytest.fixture
def data_store():
    """Almacén en memoria vacío."""
    return InMemoryDataStore()


@pytest.fixture
def eligibility_oracle():
    """Oráculo que no bloquea ninguna empresa."""
    return StaticEligibilityOracle()


def build_sweep_orchestrator(data_store, oracle, chunk_size=15000, page_size=None):
    engine = ChampionStoreEngine(BatchWriter(data_store, chunk_size=chunk_size))
    return ChampionStoreSweepOrchestrator(
        company_reader=data_store,
        eligibility_oracle=oracle,
        store_reader=data_store,
        customer_reader=data_store,
        order_reader=data_store,
        engine=engine,
        page_size=chunk_size if page_size is None else page_size,
    )


def build_order_orchestrator(data_store, oracle, chunk_size=15000):
    engine = ChampionStoreEngine(BatchWriter(data_store, chunk_size=chunk_size))
    return OrderChampionStoreOrchestrator(
        company_reader=data_store,
        eligibility_oracle=oracle,
        store_reader=data_store,
        customer_reader=data_store,
        order_reader=data_store,
        engine=engine,
    )


@pytest.fixture
def sweep_orchestrator(data_store, eligibility_oracle):
    """Orquestador de barrido conectado al almacén en memoria."""
    return build_sweep_orchestrator(data_store, eligibility_oracle)


@pytest.fixture
def order_orchestrator(data_store, eligibility_oracle):
    """Orquestador reactivo conectado al almacén en memoria."""
    return build_order_orchestrator(data_store, eligibility_oracle)


@pytest.fixture
def show_room():
    """Valor del tipo de tienda show-room."""
    return StoreType.SHOW_ROOM.value


@pytest.fixture
def make_sweep_orchestrator(data_store, eligibility_oracle):
    """Fábrica de orquestadores de barrido con tamaños de lote/página a medida."""

    def factory(chunk_size=15000, page_size=None, oracle=None):
        return build_sweep_orchestrator(data_store, oracle or eligibility_oracle, chunk_size, page_size)

    return factory


@pytest.fixture
def make_order_orchestrator(data_store, eligibility_oracle):
    """Fábrica de orquestadores reactivos."""

    def factory(chunk_size=15000, oracle=None):
        return build_order_orchestrator(data_store, oracle or eligibility_oracle, chunk_size)

    return factory
