"""
Definición de tablas (SQLAlchemy Core) usadas por los repositorios.

Solo se declaran las columnas que el motor de tienda campeona lee o escribe.
"""

from sqlalchemy import Column, ForeignKey, MetaData, Numeric, String, Table

metadata = MetaData()

companies = Table(
    "companies",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(255)),
)

stores = Table(
    "stores",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("company_id", String(36), ForeignKey("companies.id"), nullable=False, index=True),
    Column("type", String(32)),
    Column("name", String(255)),
)

customers = Table(
    "customers",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("company_id", String(36), ForeignKey("companies.id"), nullable=False, index=True),
    Column("phone", String(32), index=True),
    Column("store_id", String(36), ForeignKey("stores.id"), nullable=True),
    Column("name", String(255)),
)

orders = Table(
    "orders",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("company_id", String(36), ForeignKey("companies.id"), index=True),
    Column("customer_id", String(36), ForeignKey("customers.id"), index=True),
    Column("store_id", String(36), ForeignKey("stores.id"), nullable=True),
    Column("status", String(32), nullable=False),
    Column("total", Numeric(14, 2), nullable=False, default=0),
)
