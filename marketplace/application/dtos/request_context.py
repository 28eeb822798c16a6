"""DTO con la identidad del llamante, resuelta por la capa de autenticación."""

from dataclasses import dataclass

from marketplace.domain.constants import ADMIN_ROLES


@dataclass(frozen=True)
class RequestContext:
    """
    Identidad y metadatos de la petición en curso.

    Attributes:
        tenant_id: Tenant al que pertenece la petición.
        user_id: Usuario autenticado (None para lecturas públicas del catálogo).
        role: Rol del usuario (customer, provider, admin, super_admin).
        ip_address: IP del cliente, derivada por el servidor.
        user_agent: User-Agent del cliente.
    """

    tenant_id: str
    user_id: str | None = None
    role: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES
