"""
Configuración centralizada de la aplicación.

Este módulo maneja todas las variables de entorno y configuraciones
del motor de tienda campeona usando Pydantic Settings para validación automática.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic Settings.

    Todas las configuraciones se cargan desde variables de entorno
    con valores por defecto apropiados para desarrollo.
    """

    # === CONFIGURACIÓN BÁSICA DE LA APP ===
    APP_NAME: str = "Champion Store Resolver"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # === CONFIGURACIÓN DE LOGGING ===
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)

    # === CONFIGURACIÓN DE BASE DE DATOS ===
    DB_HOST: str = Field(default="localhost")
    DB_PORT: int = Field(default=1433)
    DB_NAME: str = Field(default="champion_store")
    DB_USER: str = Field(default="sa")
    DB_PASSWORD: str = Field(default="change-me")
    DB_DRIVER: str = Field(default="ODBC Driver 17 for SQL Server")
    DB_CONNECTION_TIMEOUT: int = Field(default=30)
    DB_POOL_SIZE: int = Field(default=10)
    # URL completa opcional; si está definida tiene prioridad sobre DB_*
    DATABASE_URL: Optional[str] = Field(default=None)
    # SQL Server admite como máximo 2100 parámetros por sentencia
    DB_MAX_IN_PARAMS: int = Field(default=2000)

    # === CONFIGURACIÓN DEL MOTOR DE TIENDA CAMPEONA ===
    CHAMPION_STORE_CHUNK_SIZE: int = Field(default=15000)
    # Si no se define, se usa CHAMPION_STORE_CHUNK_SIZE
    CHAMPION_STORE_PAGE_SIZE: Optional[int] = Field(default=None)

    # === CONFIGURACIÓN DEL SERVICIO DE POLÍTICAS ===
    POLICY_SERVICE_URL: Optional[str] = Field(default=None)
    POLICY_SERVICE_TOKEN: Optional[str] = Field(default=None)
    POLICY_SERVICE_TIMEOUT: float = Field(default=10.0)
    POLICY_FEATURE_KEY: str = Field(default="champion_store")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Valida que el nivel de log sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL debe ser uno de: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Valida que el entorno sea válido."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT debe ser uno de: {valid_envs}")
        return v.lower()

    @field_validator("CHAMPION_STORE_CHUNK_SIZE", "DB_MAX_IN_PARAMS")
    @classmethod
    def validate_positive(cls, v):
        """Valida que los tamaños de lote sean positivos."""
        if v <= 0:
            raise ValueError("El tamaño de lote debe ser mayor que 0")
        return v

    @field_validator("CHAMPION_STORE_PAGE_SIZE")
    @classmethod
    def validate_page_size(cls, v):
        """Valida el tamaño de página opcional."""
        if v is not None and v <= 0:
            raise ValueError("CHAMPION_STORE_PAGE_SIZE debe ser mayor que 0")
        return v

    @field_validator("POLICY_SERVICE_URL")
    @classmethod
    def normalize_policy_url(cls, v):
        """Elimina la barra final de la URL del servicio de políticas."""
        if v is None or not v.strip():
            return None
        return v.strip().rstrip("/")

    @property
    def is_production(self) -> bool:
        """Verifica si está en entorno de producción."""
        return self.ENVIRONMENT == "production"

    @property
    def database_connection_string(self) -> str:
        """Genera string de conexión asíncrona para la base de datos."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        # If host already includes port (with comma), use it as is
        if "," in self.DB_HOST:
            host_part = self.DB_HOST
        else:
            host_part = f"{self.DB_HOST}:{self.DB_PORT}"

        return (
            f"mssql+aioodbc://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{host_part}/{self.DB_NAME}"
            f"?driver={self.DB_DRIVER.replace(' ', '+')}"
        )

    def get_policy_service_headers(self) -> dict:
        """
        Obtiene headers para requests al servicio de políticas.

        Returns:
            dict: Headers de autenticación
        """
        headers = {
            "Accept": "application/json",
            "User-Agent": f"{self.APP_NAME}/{self.APP_VERSION}",
        }
        if self.POLICY_SERVICE_TOKEN:
            headers["Authorization"] = f"Bearer {self.POLICY_SERVICE_TOKEN}"
        return headers


@lru_cache()
def get_settings() -> Settings:
    """
    Obtiene instancia singleton de configuración.

    Usa LRU cache para evitar recrear la configuración
    múltiples veces durante la ejecución.

    Returns:
        Settings: Instancia de configuración
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Recarga la configuración (útil para testing).

    Returns:
        Settings: Nueva instancia de configuración
    """
    get_settings.cache_clear()
    return get_settings()
