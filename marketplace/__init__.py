"""Marketplace de servicios: reservas, pagos y auditoría multi-tenant."""
