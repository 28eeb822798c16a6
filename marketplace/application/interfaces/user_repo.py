from dataclasses import dataclass


@dataclass
class UserRecord:
    id: str
    tenant_id: str
    email: str
    first_name: str
    last_name: str | None = None
    phone: str | None = None
    address: str | None = None
    role: str = "customer"

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


@dataclass
class ProfileUpdate:
    first_name: str
    last_name: str | None = None
    phone: str | None = None
    address: str | None = None


class UserRepo:
    async def get(self, tenant_id: str, user_id: str) -> UserRecord | None:
        raise NotImplementedError

    async def update_profile(
        self,
        tenant_id: str,
        user_id: str,
        changes: ProfileUpdate,
    ) -> UserRecord | None:
        raise NotImplementedError
