"""Capa de acceso a datos: conexión, tablas y repositorios."""
