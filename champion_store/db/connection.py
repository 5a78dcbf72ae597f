"""
Clase ConnDB para gestión de conexiones a la base de datos.

Esta clase maneja únicamente la conexión, configuración del pool
y ciclo de vida de las conexiones asíncronas de SQLAlchemy.
"""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from champion_store.core.config import Settings, get_settings
from champion_store.utils.error_handler import ErrorCode, StorageException

logger = logging.getLogger(__name__)


class ConnDB:
    """
    Gestión de conexiones a la base de datos.

    Se usa una instancia por proceso (ver ``get_db_connection``) compartida
    por todos los repositorios.
    """

    def __init__(self, connection_string: Optional[str] = None, settings: Optional[Settings] = None):
        """
        Inicializa la clase ConnDB.

        Args:
            connection_string: URL de conexión (por defecto la de la configuración)
            settings: Configuración a usar
        """
        self.settings = settings or get_settings()
        self.connection_string = connection_string or self.settings.database_connection_string
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[sessionmaker] = None
        self._connection_tested = False
        logger.info("ConnDB instance created")

    async def initialize(self):
        """
        Inicializa el engine de base de datos y el pool de conexiones.

        Raises:
            StorageException: Si falla la inicialización
        """
        try:
            if self.engine is not None:
                logger.info("Database connection already initialized")
                return

            logger.info("Initializing database connection...")

            self.engine = create_async_engine(
                self.connection_string,
                pool_size=self.settings.DB_POOL_SIZE,
                max_overflow=20,
                pool_pre_ping=True,  # Verificar conexiones antes de usar
                pool_recycle=3600,  # Reciclar conexiones cada hora
                pool_timeout=self.settings.DB_CONNECTION_TIMEOUT,
                echo=self.settings.DEBUG,
            )

            self.session_factory = sessionmaker(
                self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=True
            )

            await self._test_connection()

            logger.info("Database connection initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            await self._cleanup_failed_initialization()
            raise StorageException(
                message=f"Failed to initialize database connection: {str(e)}",
                operation="initialize",
                error_code=ErrorCode.STORAGE_CONNECTION_FAILED,
            ) from e

    async def _test_connection(self):
        """Prueba la conexión a la base de datos."""
        async with self.session_factory() as session:
            result = await session.execute(text("SELECT 1"))
            if result.scalar() != 1:
                raise RuntimeError("Connection test returned unexpected value")
        self._connection_tested = True

    async def _cleanup_failed_initialization(self):
        """Limpia recursos en caso de fallo de inicialización."""
        if self.engine:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        self._connection_tested = False

    def get_session(self) -> AsyncSession:
        """
        Obtiene una nueva sesión de base de datos.

        Returns:
            AsyncSession: Sesión asíncrona de SQLAlchemy

        Raises:
            StorageException: Si no hay conexión inicializada
        """
        if not self.is_initialized():
            raise StorageException(
                message="Database connection not initialized. Call initialize() first.",
                operation="session_creation",
                error_code=ErrorCode.STORAGE_CONNECTION_FAILED,
            )

        return self.session_factory()

    def is_initialized(self) -> bool:
        """
        Verifica si la conexión está inicializada.

        Returns:
            bool: True si está inicializada y probada
        """
        return self.engine is not None and self.session_factory is not None and self._connection_tested

    async def close(self):
        """
        Cierra la conexión y limpia todos los recursos.
        """
        logger.info("Closing database connection...")

        if self.engine:
            await self.engine.dispose()

        self.engine = None
        self.session_factory = None
        self._connection_tested = False

        logger.info("Database connection closed successfully")

    def __repr__(self) -> str:
        return (
            f"ConnDB(initialized={self.is_initialized()}, "
            f"engine={self.engine is not None}, "
            f"session_factory={self.session_factory is not None})"
        )


# Instancia global
_conn_db_instance: Optional[ConnDB] = None


def get_db_connection() -> ConnDB:
    """
    Obtiene la instancia compartida de ConnDB.

    Returns:
        ConnDB: Instancia de conexión a base de datos
    """
    global _conn_db_instance

    if _conn_db_instance is None:
        _conn_db_instance = ConnDB()

    return _conn_db_instance


async def initialize_database() -> ConnDB:
    """
    Función de conveniencia para inicializar la base de datos.
    """
    conn_db = get_db_connection()
    await conn_db.initialize()
    return conn_db


async def close_database():
    """
    Función de conveniencia para cerrar la base de datos.
    """
    conn_db = get_db_connection()
    await conn_db.close()
