"""
ChampionStoreSweepOrchestrator - paginated batch sweep of unassigned customers.

Per company the flow is linear:
eligibility -> stores -> one page of unassigned phones -> every customer of those
phones -> their completed orders -> resolution pipeline.

One invocation handles at most ``page_size`` phones per company; draining a
larger backlog takes repeated invocations (e.g. from a scheduler).
"""

import logging
from typing import Any

from champion_store.core.logging_config import log_resolution_operation
from champion_store.domain.models import CompanyDomain, ResolutionResult
from champion_store.services.champion_store.engine import ChampionStoreEngine
from champion_store.services.champion_store.interfaces import (
    ICompanyReader,
    ICustomerReader,
    IEligibilityOracle,
    IOrderReader,
    IStoreReader,
)
from champion_store.utils.error_handler import (
    ChampionStoreException,
    ErrorAggregator,
    ValidationException,
    log_error,
)

logger = logging.getLogger(__name__)


class ChampionStoreSweepOrchestrator:
    """
    Orchestrates the batch sweep across companies.

    Collaborators are injected via constructor so the same flow runs against
    the database repositories or in-memory doubles.
    """

    def __init__(
        self,
        company_reader: ICompanyReader,
        eligibility_oracle: IEligibilityOracle,
        store_reader: IStoreReader,
        customer_reader: ICustomerReader,
        order_reader: IOrderReader,
        engine: ChampionStoreEngine,
        page_size: int,
    ):
        """
        Initialize orchestrator with service dependencies.

        Args:
            company_reader: Lists companies for a full sweep
            eligibility_oracle: Feature-blocking policy
            store_reader: Store lookups
            customer_reader: Unassigned phone paging and customer lookups
            order_reader: Completed order lookups
            engine: Shared resolution pipeline (carries the write chunk size)
            page_size: Maximum distinct phones per company per invocation
        """
        if page_size <= 0:
            raise ValidationException(
                message=f"Page size must be greater than 0, got {page_size}",
                field="page_size",
                invalid_value=page_size,
            )
        self.company_reader = company_reader
        self.eligibility_oracle = eligibility_oracle
        self.store_reader = store_reader
        self.customer_reader = customer_reader
        self.order_reader = order_reader
        self.engine = engine
        self.page_size = page_size

    async def execute(self) -> dict[str, Any]:
        """
        Sweep every company once, sequentially.

        A failure is scoped to its company: it is logged, recorded in the
        summary, and the sweep moves on to the next company.

        Returns:
            dict: Sweep summary with counters and per-company errors
        """
        companies = await self.company_reader.list_companies()
        logger.info(f"Starting champion store sweep over {len(companies)} companies")

        errors = ErrorAggregator()
        summary: dict[str, Any] = {
            "companies_total": len(companies),
            "companies_processed": 0,
            "companies_skipped": 0,
            "companies_failed": 0,
            "phones_evaluated": 0,
            "champions_resolved": 0,
            "customers_assigned": 0,
        }

        for company in companies:
            errors.increment_processed()
            try:
                result = await self.process_company(company)
            except ChampionStoreException as e:
                summary["companies_failed"] += 1
                errors.add_error(e, {"company_id": company.id})
                log_error(e, {"company_id": company.id})
                continue

            if result is None:
                summary["companies_skipped"] += 1
                continue

            summary["companies_processed"] += 1
            summary["phones_evaluated"] += result.phones_evaluated
            summary["champions_resolved"] += result.champions_resolved
            summary["customers_assigned"] += result.assignments_written

        error_summary = errors.get_summary()
        summary["duration_seconds"] = error_summary["duration_seconds"]
        summary["errors"] = error_summary["errors"]

        logger.info(
            f"Champion store sweep finished: {summary['companies_processed']} processed, "
            f"{summary['companies_skipped']} skipped, {summary['companies_failed']} failed, "
            f"{summary['customers_assigned']} customers assigned"
        )
        return summary

    async def process_company(self, company: CompanyDomain) -> ResolutionResult | None:
        """
        Resolve one page of unassigned phones of a company.

        Args:
            company: Company to process

        Returns:
            ResolutionResult | None: None when the company is blocked

        Raises:
            ChampionStoreException: If any collaborator fails; writes already
                committed are kept
        """
        try:
            if await self.eligibility_oracle.is_blocked(company):
                logger.info(f"Company {company.id} is blocked from champion store resolution, skipping")
                return None

            stores = await self.store_reader.list_stores(company.id)
            phones = await self.customer_reader.list_unassigned_customer_phones(company.id, self.page_size)
            if not phones:
                logger.debug(f"Company {company.id} has no unassigned customers with phone")
                return ResolutionResult()

            # every member of a paged phone competes and is written, assigned or not
            customers = await self.customer_reader.list_customers_by_phones(company.id, phones, unassigned_only=False)
            customer_ids = [customer.id for customer in customers]
            orders = await self.order_reader.list_completed_orders(customer_ids) if customer_ids else []

            result = await self.engine.resolve(stores, customers, orders)

        except Exception as e:
            logger.error(f"Failed to resolve champion stores for company {company.id}: {e}")
            raise ChampionStoreException(
                message=f"Failed to resolve champion stores for company {company.id}: {str(e)}",
                operation="process_company",
                company_id=company.id,
            ) from e

        log_resolution_operation("batch_sweep", company.id, **result.to_dict())
        return result
