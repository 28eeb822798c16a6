from typing import Sequence

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.interfaces.notification_repo import (
    NotificationRecord,
    NotificationRepo,
)
from marketplace.infrastructure.db.tables import notifications


class NotificationRepoSQL(NotificationRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, notification: NotificationRecord) -> None:
        stmt = insert(notifications).values(
            id=notification.id,
            tenant_id=notification.tenant_id,
            user_id=notification.user_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            data=notification.data,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )
        await self._session.execute(stmt)

    async def list_for_user(self, tenant_id: str, user_id: str) -> Sequence[NotificationRecord]:
        stmt = (
            select(notifications)
            .where(notifications.c.tenant_id == tenant_id, notifications.c.user_id == user_id)
            .order_by(notifications.c.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [
            NotificationRecord(
                id=row["id"],
                tenant_id=row["tenant_id"],
                user_id=row["user_id"],
                type=row["type"],
                title=row["title"],
                message=row["message"],
                data=row.get("data"),
                is_read=bool(row["is_read"]),
                created_at=row.get("created_at"),
            )
            for row in result.mappings().all()
        ]
