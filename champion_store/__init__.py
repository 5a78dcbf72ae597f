"""
Champion Store Resolver.

Asigna a cada cliente una tienda campeona a partir de su historial de pedidos
completados, agrupando a todos los clientes que comparten teléfono dentro de
una misma empresa.
"""

__version__ = "0.1.0"
