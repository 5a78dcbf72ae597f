"""Tests para el barrido por lotes de tiendas campeonas."""

from unittest.mock import AsyncMock

import pytest

from champion_store.domain.models import OrderStatus
from champion_store.utils.error_handler import ChampionStoreException, StorageException


class TestProcessCompany:
    """Tests para ChampionStoreSweepOrchestrator.process_company."""

    @pytest.mark.asyncio
    async def test_assigns_store_with_most_completed_orders(self, data_store, sweep_orchestrator):
        """Flujo completo: el cliente queda con la tienda de más pedidos."""
        company = data_store.add_company()
        store_1 = data_store.add_store(company)
        data_store.add_store(company)
        customer = data_store.add_customer(company, phone="5531999990001")
        data_store.add_order(customer, store_1, 100)
        data_store.add_order(customer, store_1, 200)

        result = await sweep_orchestrator.process_company(company)

        assert data_store.store_of(customer) == store_1.id
        assert result.assignments_written == 1
        assert result.champions_resolved == 1

    @pytest.mark.asyncio
    async def test_shared_phone_order_count_beats_value(self, data_store, sweep_orchestrator):
        """Dos clientes con el mismo teléfono: gana la cantidad de pedidos y ambos reciben la tienda."""
        company = data_store.add_company()
        store_a = data_store.add_store(company)
        store_b = data_store.add_store(company)
        customer_1 = data_store.add_customer(company, phone="5531999990002")
        customer_2 = data_store.add_customer(company, phone="5531999990002")
        data_store.add_order(customer_1, store_a, 50)
        data_store.add_order(customer_1, store_a, 100)
        data_store.add_order(customer_2, store_b, 500)

        await sweep_orchestrator.process_company(company)

        assert data_store.store_of(customer_1) == store_a.id
        assert data_store.store_of(customer_2) == store_a.id

    @pytest.mark.asyncio
    async def test_customer_without_orders_inherits_group_champion(self, data_store, sweep_orchestrator):
        """Un cliente sin pedidos recibe la campeona de su grupo de teléfono."""
        company = data_store.add_company()
        store = data_store.add_store(company)
        buyer = data_store.add_customer(company, phone="5531999990003")
        silent = data_store.add_customer(company, phone="5531999990003")
        data_store.add_order(buyer, store, 10)

        await sweep_orchestrator.process_company(company)

        assert data_store.store_of(silent) == store.id

    @pytest.mark.asyncio
    async def test_show_room_override(self, data_store, sweep_orchestrator, show_room):
        """5 pedidos en tienda física y 3 en show-room: gana el show-room."""
        company = data_store.add_company()
        physical = data_store.add_store(company)
        showroom = data_store.add_store(company, store_type=show_room)
        customer = data_store.add_customer(company, phone="5531999990004")
        for _ in range(5):
            data_store.add_order(customer, physical, 100)
        for _ in range(3):
            data_store.add_order(customer, showroom, 3)

        await sweep_orchestrator.process_company(company)

        assert data_store.store_of(customer) == showroom.id

    @pytest.mark.asyncio
    async def test_non_completed_and_storeless_orders_are_ignored(self, data_store, sweep_orchestrator):
        """Pedidos no completados o sin tienda no influyen en el resultado."""
        company = data_store.add_company()
        store_a = data_store.add_store(company)
        store_b = data_store.add_store(company)
        customer = data_store.add_customer(company, phone="5531999990005")
        data_store.add_order(customer, store_a, 10)
        data_store.add_order(customer, store_b, 1000, status=OrderStatus.PENDING.value)
        data_store.add_order(customer, store_b, 1000, status=OrderStatus.CANCELED.value)
        data_store.add_order(customer, None, 1000)

        await sweep_orchestrator.process_company(company)

        assert data_store.store_of(customer) == store_a.id

    @pytest.mark.asyncio
    async def test_phone_without_completed_orders_stays_unassigned(self, data_store, sweep_orchestrator):
        """Sin pedidos que califiquen no hay campeona ni escritura."""
        company = data_store.add_company()
        data_store.add_store(company)
        customer = data_store.add_customer(company, phone="5531999990006")

        result = await sweep_orchestrator.process_company(company)

        assert data_store.store_of(customer) is None
        assert "list_customers_by_phones" not in data_store.calls
        assert result.champions_resolved == 0
        assert "assign_store" not in data_store.calls

    @pytest.mark.asyncio
    async def test_blocked_company_is_skipped(self, data_store, eligibility_oracle, sweep_orchestrator):
        """Una empresa bloqueada no se procesa ni se escribe nada."""
        company = data_store.add_company()
        store = data_store.add_store(company)
        customer = data_store.add_customer(company, phone="5531999990007")
        data_store.add_order(customer, store, 100)
        eligibility_oracle.blocked_company_ids.add(company.id)

        result = await sweep_orchestrator.process_company(company)

        assert result is None
        assert data_store.calls == []
        assert data_store.store_of(customer) is None

    @pytest.mark.asyncio
    async def test_other_company_data_is_never_used(self, data_store, sweep_orchestrator):
        """Los pedidos y clientes de otra empresa no participan."""
        company = data_store.add_company()
        other = data_store.add_company("Other")
        store = data_store.add_store(company)
        other_store = data_store.add_store(other)
        customer = data_store.add_customer(company, phone="5531999990008")
        foreign = data_store.add_customer(other, phone="5531999990008")
        data_store.add_order(customer, store, 10)
        data_store.add_order(foreign, other_store, 10)
        data_store.add_order(foreign, other_store, 10)

        await sweep_orchestrator.process_company(company)

        assert data_store.store_of(customer) == store.id
        assert data_store.store_of(foreign) is None

    @pytest.mark.asyncio
    async def test_collaborator_failure_propagates(self, data_store, sweep_orchestrator):
        """Un fallo de lectura aborta la empresa con ChampionStoreException."""
        company = data_store.add_company()
        sweep_orchestrator.order_reader = AsyncMock()
        sweep_orchestrator.order_reader.list_completed_orders.side_effect = StorageException(
            message="db down", operation="list_completed_orders"
        )
        customer = data_store.add_customer(company, phone="5531999990009")
        data_store.add_order(customer, data_store.add_store(company), 10)

        with pytest.raises(ChampionStoreException) as exc_info:
            await sweep_orchestrator.process_company(company)

        assert isinstance(exc_info.value.__cause__, StorageException)
        assert exc_info.value.company_id == company.id

    @pytest.mark.asyncio
    async def test_partially_assigned_group_converges_on_one_store(self, data_store, sweep_orchestrator):
        """Los clientes ya asignados del teléfono compiten y reciben la misma campeona."""
        company = data_store.add_company()
        store_a = data_store.add_store(company)
        store_b = data_store.add_store(company)
        assigned = data_store.add_customer(company, phone="5531999990012", store_id=store_a.id)
        unassigned = data_store.add_customer(company, phone="5531999990012")
        for _ in range(3):
            data_store.add_order(assigned, store_a, 10)
        data_store.add_order(unassigned, store_b, 10)

        result = await sweep_orchestrator.process_company(company)

        assert data_store.store_of(unassigned) == store_a.id
        assert data_store.store_of(assigned) == store_a.id
        assert result.customers_by_phone["5531999990012"] == [assigned.id, unassigned.id]

    @pytest.mark.asyncio
    async def test_batch_and_order_paths_agree_on_partially_assigned_group(
        self, data_store, sweep_orchestrator, order_orchestrator
    ):
        """Barrido y flujo reactivo deciden igual para el mismo grupo."""
        company = data_store.add_company()
        store_a = data_store.add_store(company)
        store_b = data_store.add_store(company)
        assigned = data_store.add_customer(company, phone="5531999990013", store_id=store_b.id)
        unassigned = data_store.add_customer(company, phone="5531999990013")
        data_store.add_order(assigned, store_b, 10)
        data_store.add_order(assigned, store_b, 10)
        last = data_store.add_order(unassigned, store_a, 500)

        swept = await sweep_orchestrator.process_company(company)
        triggered = await order_orchestrator.execute(last, data_store.customers[unassigned.id])

        assert swept.champion_store_id("5531999990013") == store_b.id
        assert triggered.champion_store_id("5531999990013") == store_b.id


class TestPagination:
    """Tests de paginación del barrido."""

    @pytest.mark.asyncio
    async def test_thousand_customers_with_page_of_500_need_two_runs(self, data_store, make_sweep_orchestrator):
        """1000 clientes sin tienda con página 500: exactamente 2 invocaciones."""
        company = data_store.add_company()
        store = data_store.add_store(company)
        customers = []
        for index in range(1000):
            customer = data_store.add_customer(company, phone=f"55319{index:08d}")
            data_store.add_order(customer, store, 10)
            customers.append(customer)
        orchestrator = make_sweep_orchestrator(chunk_size=500, page_size=500)

        first = await orchestrator.process_company(company)
        assigned_after_first = sum(1 for customer in customers if data_store.store_of(customer))
        second = await orchestrator.process_company(company)

        assert first.assignments_written == 500
        assert assigned_after_first == 500
        assert second.assignments_written == 500
        assert all(data_store.store_of(customer) == store.id for customer in customers)
        assert await data_store.list_unassigned_customer_phones(company.id, 500) == []

    @pytest.mark.asyncio
    async def test_chunk_size_bounds_each_write(self, data_store, make_sweep_orchestrator):
        """Cada llamada de escritura lleva como máximo chunk_size registros."""
        company = data_store.add_company()
        store = data_store.add_store(company)
        for index in range(7):
            customer = data_store.add_customer(company, phone="5531999990010")
            data_store.add_order(customer, store, index)
        orchestrator = make_sweep_orchestrator(chunk_size=3, page_size=10)

        result = await orchestrator.process_company(company)

        assert [len(chunk) for chunk in data_store.write_calls] == [3, 3, 1]
        assert result.chunks_written == 3

    @pytest.mark.asyncio
    async def test_phones_without_orders_do_not_block_later_pages(self, data_store, make_sweep_orchestrator):
        """Teléfonos sin pedidos que ordenan primero no ocupan la página."""
        company = data_store.add_company()
        store = data_store.add_store(company)
        data_store.add_customer(company, phone="100")
        data_store.add_customer(company, phone="200")
        buyer = data_store.add_customer(company, phone="300")
        data_store.add_order(buyer, store, 10)
        orchestrator = make_sweep_orchestrator(chunk_size=2, page_size=2)

        result = await orchestrator.process_company(company)

        assert data_store.store_of(buyer) == store.id
        assert result.phones_evaluated == 1

    @pytest.mark.asyncio
    async def test_blank_phones_are_never_paged(self, data_store, make_sweep_orchestrator):
        """Teléfonos solo con espacios no entran en la página."""
        company = data_store.add_company()
        store = data_store.add_store(company)
        blank = data_store.add_customer(company, phone="   ")
        data_store.add_order(blank, store, 10)
        buyer = data_store.add_customer(company, phone="5531999990014")
        data_store.add_order(buyer, store, 10)
        orchestrator = make_sweep_orchestrator(chunk_size=1, page_size=1)

        await orchestrator.process_company(company)

        assert data_store.store_of(buyer) == store.id
        assert data_store.store_of(blank) is None

    def test_rejects_non_positive_page_size(self, make_sweep_orchestrator):
        """El tamaño de página debe ser positivo."""
        from champion_store.utils.error_handler import ValidationException

        with pytest.raises(ValidationException):
            make_sweep_orchestrator(chunk_size=10, page_size=-1)


class TestExecute:
    """Tests para el barrido completo sobre todas las empresas."""

    @pytest.mark.asyncio
    async def test_sweeps_every_company(self, data_store, sweep_orchestrator):
        """Debe procesar todas las empresas."""
        assigned = []
        for index in range(3):
            company = data_store.add_company(f"Company {index}")
            store = data_store.add_store(company)
            customer = data_store.add_customer(company, phone=f"55319999900{index}")
            data_store.add_order(customer, store, 10)
            assigned.append((customer, store))

        summary = await sweep_orchestrator.execute()

        assert summary["companies_processed"] == 3
        assert summary["customers_assigned"] == 3
        assert all(data_store.store_of(customer) == store.id for customer, store in assigned)

    @pytest.mark.asyncio
    async def test_failure_is_scoped_to_its_company(self, data_store, sweep_orchestrator):
        """El fallo de una empresa no impide procesar las demás."""
        broken = data_store.add_company("Broken")
        healthy = data_store.add_company("Healthy")
        store = data_store.add_store(healthy)
        customer = data_store.add_customer(healthy, phone="5531999990011")
        data_store.add_order(customer, store, 10)

        original_list_stores = data_store.list_stores

        async def list_stores(company_id):
            if company_id == broken.id:
                raise StorageException(message="timeout", operation="list_stores")
            return await original_list_stores(company_id)

        sweep_orchestrator.store_reader = AsyncMock()
        sweep_orchestrator.store_reader.list_stores.side_effect = list_stores

        summary = await sweep_orchestrator.execute()

        assert summary["companies_failed"] == 1
        assert summary["companies_processed"] == 1
        assert summary["errors"][0]["details"]["company_id"] == broken.id
        assert data_store.store_of(customer) == store.id

    @pytest.mark.asyncio
    async def test_blocked_companies_are_counted_as_skipped(self, data_store, eligibility_oracle, sweep_orchestrator):
        """Las empresas bloqueadas figuran como omitidas."""
        company = data_store.add_company()
        eligibility_oracle.blocked_company_ids.add(company.id)

        summary = await sweep_orchestrator.execute()

        assert summary["companies_skipped"] == 1
        assert summary["companies_processed"] == 0

    @pytest.mark.asyncio
    async def test_second_run_without_new_orders_is_idempotent(self, data_store, sweep_orchestrator):
        """Dos barridos seguidos sin pedidos nuevos dejan las mismas asignaciones."""
        company = data_store.add_company()
        store_a = data_store.add_store(company)
        store_b = data_store.add_store(company)
        for index in range(4):
            customer = data_store.add_customer(company, phone=f"55319999901{index}")
            data_store.add_order(customer, store_a if index % 2 else store_b, 10)
        data_store.add_customer(company, phone="5531999990199")

        await sweep_orchestrator.execute()
        first = {customer_id: customer.store_id for customer_id, customer in data_store.customers.items()}
        await sweep_orchestrator.execute()
        second = {customer_id: customer.store_id for customer_id, customer in data_store.customers.items()}

        assert first == second
