"""Servicio de catálogo de la Tienda Deportiva: productos y categorías sobre Flask."""
