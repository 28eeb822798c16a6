from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from marketplace.application.interfaces.transaction_manager import TransactionManager


class NoopTransactionManager(TransactionManager):
    """Los repositorios in-memory escriben directo; no hay nada que confirmar ni revertir."""

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        yield
