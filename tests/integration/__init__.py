"""
Tests de integración.

Corren los repositorios SQL y la API completa contra SQLite in-memory
(aiosqlite), y el wizard contra la app real vía ASGITransport.

Para ejecutar solo tests de integración:
    pytest tests/integration/
"""
