"""StoreRepository: store lookups."""

from typing import List

from sqlalchemy import select

from champion_store.db.repositories.base import BaseRepository, log_operation
from champion_store.db.tables import stores
from champion_store.domain.models import StoreDomain


class StoreRepository(BaseRepository):
    """Repository for store reads."""

    @log_operation()
    async def list_stores(self, company_id: str) -> List[StoreDomain]:
        """List every store of a company."""
        statement = select(stores.c.id, stores.c.company_id, stores.c.type, stores.c.name).where(
            stores.c.company_id == company_id
        )
        rows = await self._fetch_rows(statement, "list_stores")
        return [StoreDomain.from_dict(row) for row in rows]
