"""Utilidades para dividir colecciones en lotes de tamaño acotado."""

from typing import List, Sequence, TypeVar

T = TypeVar("T")


def split_into_chunks(items: Sequence[T], chunk_size: int) -> List[List[T]]:
    """
    Divide una secuencia en lotes consecutivos de como máximo ``chunk_size`` elementos.

    Args:
        items: Elementos a dividir
        chunk_size: Tamaño máximo de cada lote (mayor que 0)

    Returns:
        List[List[T]]: Lotes en el orden original; lista vacía si no hay elementos

    Raises:
        ValueError: Si chunk_size no es positivo
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size debe ser mayor que 0, recibido {chunk_size}")

    return [list(items[i : i + chunk_size]) for i in range(0, len(items), chunk_size)]
