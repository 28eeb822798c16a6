from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.interfaces.user_repo import ProfileUpdate, UserRecord, UserRepo
from marketplace.infrastructure.db.tables import users


class UserRepoSQL(UserRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, tenant_id: str, user_id: str) -> UserRecord | None:
        stmt = select(users).where(users.c.id == user_id, users.c.tenant_id == tenant_id)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return self._map_user(row) if row else None

    async def update_profile(
        self,
        tenant_id: str,
        user_id: str,
        changes: ProfileUpdate,
    ) -> UserRecord | None:
        # Los campos opcionales en None se conservan
        values = {"first_name": changes.first_name}
        for column in ("last_name", "phone", "address"):
            value = getattr(changes, column)
            if value is not None:
                values[column] = value
        stmt = (
            update(users)
            .where(users.c.id == user_id, users.c.tenant_id == tenant_id)
            .values(**values)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get(tenant_id, user_id)

    def _map_user(self, row) -> UserRecord:
        return UserRecord(
            id=row["id"],
            tenant_id=row["tenant_id"],
            email=row["email"],
            first_name=row["first_name"],
            last_name=row.get("last_name"),
            phone=row.get("phone"),
            address=row.get("address"),
            role=row["role"],
        )
