"""CompanyRepository: company lookups."""

import logging
from typing import List, Optional

from sqlalchemy import select

from champion_store.db.repositories.base import BaseRepository, log_operation
from champion_store.db.tables import companies
from champion_store.domain.models import CompanyDomain

logger = logging.getLogger(__name__)


class CompanyRepository(BaseRepository):
    """Repository for company reads."""

    @log_operation()
    async def list_companies(self) -> List[CompanyDomain]:
        """List every company, ordered by ID."""
        statement = select(companies.c.id, companies.c.name).order_by(companies.c.id)
        rows = await self._fetch_rows(statement, "list_companies")
        return [CompanyDomain.from_dict(row) for row in rows]

    @log_operation()
    async def get_company(self, company_id: str) -> Optional[CompanyDomain]:
        """Get a company by ID, None if it does not exist."""
        statement = select(companies.c.id, companies.c.name).where(companies.c.id == company_id)
        rows = await self._fetch_rows(statement, "get_company")
        return CompanyDomain.from_dict(rows[0]) if rows else None
