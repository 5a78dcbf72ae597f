"""
Sistema de manejo de errores personalizado.

Este módulo define las excepciones del motor de tienda campeona
y proporciona utilidades para manejo consistente de errores.
"""

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Códigos de error estandardizados para la aplicación.
    """

    # Errores generales
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Errores de colaboradores externos
    STORAGE_READ_FAILED = "STORAGE_READ_FAILED"
    STORAGE_WRITE_FAILED = "STORAGE_WRITE_FAILED"
    STORAGE_CONNECTION_FAILED = "STORAGE_CONNECTION_FAILED"
    ELIGIBILITY_CHECK_FAILED = "ELIGIBILITY_CHECK_FAILED"

    # Errores de resolución
    RESOLUTION_FAILED = "RESOLUTION_FAILED"


class ErrorSeverity(Enum):
    """
    Niveles de severidad para errores.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Excepción base para todas las excepciones personalizadas de la aplicación.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        is_retryable: bool = False,
        is_critical: bool = False,
    ):
        """
        Inicializa la excepción.

        Args:
            message: Mensaje de error
            error_code: Código de error estandardizado
            details: Información adicional del error
            severity: Severidad del error
            is_retryable: Si la operación puede reintentarse en una ejecución posterior
            is_critical: Si requiere alerta inmediata
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.severity = severity
        self.is_retryable = is_retryable
        self.is_critical = is_critical
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convierte la excepción a diccionario.

        Returns:
            Dict: Representación de la excepción
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
            "is_critical": self.is_critical,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class ValidationException(AppException):
    """
    Excepción para errores de validación de datos de entrada.
    """

    def __init__(
        self,
        message: str,
        field: str,
        invalid_value: Any = None,
        **kwargs,
    ):
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.invalid_value = invalid_value

        self.details.update(
            {
                "field": field,
                "invalid_value": str(invalid_value) if invalid_value is not None else None,
            }
        )


class StorageException(AppException):
    """
    Excepción para fallos de lectura o escritura en la capa de datos.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        write: bool = False,
        **kwargs,
    ):
        """
        Inicializa la excepción de almacenamiento.

        Args:
            message: Mensaje de error
            operation: Operación de repositorio que falló
            write: Si el fallo ocurrió durante una escritura
            **kwargs: Argumentos adicionales para AppException
        """
        kwargs.setdefault(
            "error_code", ErrorCode.STORAGE_WRITE_FAILED if write else ErrorCode.STORAGE_READ_FAILED
        )
        super().__init__(
            message=message,
            severity=ErrorSeverity.HIGH,
            is_retryable=True,
            **kwargs,
        )
        self.operation = operation
        self.write = write

        self.details.update({"operation": operation, "write": write})


class EligibilityCheckException(AppException):
    """
    Excepción cuando el servicio de políticas no puede responder.
    """

    def __init__(
        self,
        message: str,
        company_id: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(
            message=message,
            error_code=ErrorCode.ELIGIBILITY_CHECK_FAILED,
            severity=ErrorSeverity.MEDIUM,
            is_retryable=True,
            **kwargs,
        )
        self.company_id = company_id
        self.status_code = status_code

        self.details.update({"company_id": company_id, "status_code": status_code})


class ChampionStoreException(AppException):
    """
    Excepción para fallos al resolver la tienda campeona de una empresa o pedido.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        company_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        **kwargs,
    ):
        """
        Inicializa la excepción de resolución.

        Args:
            message: Mensaje de error
            operation: Flujo que falló (process_company, process_order)
            company_id: Empresa afectada
            customer_id: Cliente afectado (flujo reactivo)
            **kwargs: Argumentos adicionales para AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.RESOLUTION_FAILED,
            severity=ErrorSeverity.HIGH,
            is_retryable=True,
            **kwargs,
        )
        self.operation = operation
        self.company_id = company_id
        self.customer_id = customer_id

        self.details.update(
            {
                "operation": operation,
                "company_id": company_id,
                "customer_id": customer_id,
            }
        )


# === FUNCIONES DE UTILIDAD ===


def log_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Loggea un error de manera consistente.

    Args:
        exception: Excepción a loggear
        context: Contexto adicional
        level: Nivel de logging
    """
    context = context or {}

    log_data = {
        "exception_type": type(exception).__name__,
        "exception_message": str(exception),
        **context,
    }

    if isinstance(exception, AppException):
        message = f"{exception.error_code.value}: {exception.message}"
        log_data.update(
            {
                "error_code": exception.error_code.value,
                "severity": exception.severity.value,
                "is_retryable": exception.is_retryable,
            }
        )
    else:
        message = f"Unhandled exception: {type(exception).__name__}: {str(exception)}"

    logger.log(level, message, extra=log_data, exc_info=exception)


class ErrorAggregator:
    """
    Agregador de errores para procesos batch.
    """

    def __init__(self):
        self.errors: List[AppException] = []
        self.total_processed = 0
        self.start_time = datetime.now(timezone.utc)

    def add_error(self, exception: Union[AppException, Exception], context: Optional[Dict] = None):
        """
        Agrega un error al agregador.

        Args:
            exception: Excepción a agregar
            context: Contexto adicional
        """
        if not isinstance(exception, AppException):
            exception = AppException(
                message=f"{type(exception).__name__}: {exception}",
                details={"original_exception": type(exception).__name__},
            )
        if context:
            exception.details.update(context)

        self.errors.append(exception)

    def increment_processed(self):
        """Incrementa contador de procesados."""
        self.total_processed += 1

    def get_summary(self) -> Dict[str, Any]:
        """
        Obtiene resumen de errores.

        Returns:
            Dict: Resumen de errores
        """
        end_time = datetime.now(timezone.utc)
        duration = (end_time - self.start_time).total_seconds()

        return {
            "total_processed": self.total_processed,
            "error_count": len(self.errors),
            "success_count": self.total_processed - len(self.errors),
            "duration_seconds": duration,
            "start_time": self.start_time.isoformat(),
            "end_time": end_time.isoformat(),
            "errors": [error.to_dict() for error in self.errors],
        }
