"""
Base Repository for database operations.

This module provides an abstract base class for the repositories,
implementing common functionality like session handling, operation
logging, error wrapping and bounded ``IN (...)`` queries.

Collaborator failures are wrapped into StorageException and propagated;
nothing here retries.
"""

import functools
import logging
from abc import ABC
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy.sql import Executable

from champion_store.core.config import get_settings
from champion_store.db.connection import ConnDB, get_db_connection
from champion_store.utils.chunking import split_into_chunks
from champion_store.utils.error_handler import AppException, StorageException

logger = logging.getLogger(__name__)


def log_operation(operation_name: str = None) -> Callable:
    """
    Decorator for logging database operations.

    Args:
        operation_name: Optional custom name for the operation

    Returns:
        Decorated function with logging
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            op_name = operation_name or f"{self.__class__.__name__}.{func.__name__}"
            logger.debug(f"Starting operation: {op_name}")

            try:
                result = await func(self, *args, **kwargs)
                logger.debug(f"Operation successful: {op_name}")
                return result
            except Exception as e:
                logger.error(f"Operation failed: {op_name} - {e}")
                raise

        return wrapper

    return decorator


class BaseRepository(ABC):
    """
    Abstract base repository.

    Provides session handling and query helpers shared by all repositories.
    """

    def __init__(self, conn_db: Optional[ConnDB] = None, max_in_params: Optional[int] = None):
        """
        Initialize the base repository.

        Args:
            conn_db: Optional database connection. If not provided, uses global connection.
            max_in_params: Maximum values bound in a single IN clause
        """
        self.conn_db: ConnDB = conn_db or get_db_connection()
        self.max_in_params: int = max_in_params or get_settings().DB_MAX_IN_PARAMS
        self._repository_name: str = self.__class__.__name__

    async def _fetch_rows(self, statement: Executable, operation: str) -> List[Dict[str, Any]]:
        """
        Execute a read statement and return its rows as dictionaries.

        Raises:
            StorageException: If the query fails
        """
        try:
            async with self.conn_db.get_session() as session:
                result = await session.execute(statement)
                return [dict(row) for row in result.mappings().all()]
        except AppException:
            raise
        except Exception as e:
            raise StorageException(
                message=f"{self._repository_name}.{operation} failed: {str(e)}",
                operation=operation,
            ) from e

    async def _fetch_scalars(self, statement: Executable, operation: str) -> List[Any]:
        """
        Execute a read statement and return the first column of every row.

        Raises:
            StorageException: If the query fails
        """
        try:
            async with self.conn_db.get_session() as session:
                result = await session.execute(statement)
                return list(result.scalars().all())
        except AppException:
            raise
        except Exception as e:
            raise StorageException(
                message=f"{self._repository_name}.{operation} failed: {str(e)}",
                operation=operation,
            ) from e

    async def _fetch_rows_in_chunks(
        self,
        build_statement: Callable[[List[Any]], Executable],
        values: Sequence[Any],
        operation: str,
    ) -> List[Dict[str, Any]]:
        """
        Run one query per slice of ``values`` and concatenate the rows.

        Keeps every statement under the driver's bound-parameter limit.
        """
        rows: List[Dict[str, Any]] = []
        for chunk in split_into_chunks(list(values), self.max_in_params):
            rows.extend(await self._fetch_rows(build_statement(chunk), operation))
        return rows

    async def _execute_many_with_commit(
        self, statement: Executable, params: List[Dict[str, Any]], operation: str
    ) -> None:
        """
        Execute a write statement once per parameter set and commit once.

        Raises:
            StorageException: If the write or the commit fails
        """
        try:
            async with self.conn_db.get_session() as session:
                await session.execute(statement, params)
                await session.commit()
        except AppException:
            raise
        except Exception as e:
            raise StorageException(
                message=f"{self._repository_name}.{operation} failed: {str(e)}",
                operation=operation,
                write=True,
            ) from e

    def __repr__(self) -> str:
        return f"<{self._repository_name}(conn_db={self.conn_db!r})>"
