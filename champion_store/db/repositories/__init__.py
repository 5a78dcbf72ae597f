"""
Database Repository Package.

Repository Structure:
- BaseRepository: Abstract base with session handling and error wrapping
- CompanyRepository: Company lookups
- StoreRepository: Store lookups
- CustomerRepository: Customer lookups and champion store writes
- OrderRepository: Order history lookups
"""

from .base import BaseRepository
from .company_repository import CompanyRepository
from .customer_repository import CustomerRepository
from .order_repository import OrderRepository
from .store_repository import StoreRepository

__all__ = [
    "BaseRepository",
    "CompanyRepository",
    "StoreRepository",
    "CustomerRepository",
    "OrderRepository",
]
