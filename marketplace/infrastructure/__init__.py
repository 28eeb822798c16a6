"""Adaptadores de infraestructura: base de datos, in-memory y gateways."""
