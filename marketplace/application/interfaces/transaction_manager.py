"""Interface TransactionManager - agrupa las escrituras de un caso de uso."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol


class TransactionManager(Protocol):
    """
    Abre una unidad de trabajo.

    Todo lo escrito dentro de ``start()`` se confirma junto o se revierte junto.
    Si ya hay una transacción abierta, la implementación debe reutilizarla.
    """

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        yield
