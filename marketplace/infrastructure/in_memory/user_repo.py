from dataclasses import replace

from marketplace.application.interfaces.user_repo import ProfileUpdate, UserRecord, UserRepo


class InMemoryUserRepo(UserRepo):
    def __init__(self) -> None:
        self.users: dict[str, UserRecord] = {}

    def add_user(self, user: UserRecord) -> UserRecord:
        self.users[user.id] = user
        return user

    async def get(self, tenant_id: str, user_id: str) -> UserRecord | None:
        user = self.users.get(user_id)
        if not user or user.tenant_id != tenant_id:
            return None
        return replace(user)

    async def update_profile(
        self,
        tenant_id: str,
        user_id: str,
        changes: ProfileUpdate,
    ) -> UserRecord | None:
        user = self.users.get(user_id)
        if not user or user.tenant_id != tenant_id:
            return None
        user.first_name = changes.first_name
        if changes.last_name is not None:
            user.last_name = changes.last_name
        if changes.phone is not None:
            user.phone = changes.phone
        if changes.address is not None:
            user.address = changes.address
        return replace(user)
