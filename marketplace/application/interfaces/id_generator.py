"""Interface IdGenerator - Puerto para generación de identificadores únicos."""

import uuid
from abc import ABC, abstractmethod


class IdGenerator(ABC):
    """
    Puerto para generación de identificadores de entidades.

    Permite inyectar implementaciones fake para testing determinista.
    """

    @abstractmethod
    def new_id(self) -> str:
        """
        Genera un identificador único.

        Returns:
            String con UUID en formato estándar (xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx).
        """
        raise NotImplementedError


class UUIDGenerator(IdGenerator):
    """Implementación real que genera UUIDs v4 aleatorios."""

    def new_id(self) -> str:
        return str(uuid.uuid4())


class SequentialIdGenerator(IdGenerator):
    """
    Implementación fake para testing.

    Genera valores predecibles: ``<prefix>-0001``, ``<prefix>-0002``...
    """

    def __init__(self, prefix: str = "test"):
        self._prefix = prefix
        self._counter = 0

    def new_id(self) -> str:
        self._counter += 1
        return f"{self._prefix}-{self._counter:04d}"
