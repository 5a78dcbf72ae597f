"""
Domain layer for the champion store resolver.

This layer contains business entities and the derived structures
used while resolving champion stores.
"""
