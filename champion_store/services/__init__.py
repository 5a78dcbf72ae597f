"""Servicios de aplicación del motor de tienda campeona."""
