"""
BatchWriter - persists champion stores in bounded chunks.

Every customer of a phone group receives the group's champion, including
customers that placed no qualifying order themselves. Chunks are written
sequentially; a failing chunk is not retried and its exception propagates,
leaving earlier chunks committed.
"""

import logging
from typing import Mapping

from champion_store.domain.models import StoreAggregate, StoreAssignment
from champion_store.services.champion_store.interfaces import ICustomerWriter
from champion_store.utils.chunking import split_into_chunks
from champion_store.utils.error_handler import ValidationException

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 15000


def build_assignments(
    champions: Mapping[str, StoreAggregate],
    customers_by_phone: Mapping[str, list[str]],
) -> list[StoreAssignment]:
    """
    Expand the champion of each phone into one assignment per customer.

    Args:
        champions: phone -> winning StoreAggregate
        customers_by_phone: phone -> customer IDs

    Returns:
        list[StoreAssignment]: Records in phone order, then group order
    """
    assignments: list[StoreAssignment] = []
    for phone, champion in champions.items():
        for customer_id in customers_by_phone.get(phone, []):
            assignments.append(StoreAssignment(customer_id=customer_id, store_id=champion.store.id))
    return assignments


class BatchWriter:
    """Writes champion store assignments through a customer writer, one chunk per call."""

    def __init__(self, customer_writer: ICustomerWriter, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Args:
            customer_writer: Persistence collaborator
            chunk_size: Maximum assignments per write call

        Raises:
            ValidationException: If chunk_size is not positive
        """
        if chunk_size <= 0:
            raise ValidationException(
                message=f"Chunk size must be greater than 0, got {chunk_size}",
                field="chunk_size",
                invalid_value=chunk_size,
            )
        self.customer_writer = customer_writer
        self.chunk_size = chunk_size

    async def write(
        self,
        champions: Mapping[str, StoreAggregate],
        customers_by_phone: Mapping[str, list[str]],
    ) -> tuple[int, int]:
        """
        Persist the champion of every resolved phone for all its customers.

        Returns:
            tuple[int, int]: (assignments written, chunks written)
        """
        assignments = build_assignments(champions, customers_by_phone)
        if not assignments:
            logger.debug("No champion store assignments to write")
            return 0, 0

        chunks = split_into_chunks(assignments, self.chunk_size)
        written = 0
        for index, chunk in enumerate(chunks, start=1):
            await self.customer_writer.assign_store(chunk)
            written += len(chunk)
            logger.debug(f"Wrote champion store chunk {index}/{len(chunks)} ({len(chunk)} customers)")

        logger.info(f"Assigned champion stores to {written} customers in {len(chunks)} chunks")
        return written, len(chunks)
