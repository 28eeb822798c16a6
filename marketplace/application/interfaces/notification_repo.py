from dataclasses import dataclass
from datetime import datetime
from typing import Any, Sequence


@dataclass
class NotificationRecord:
    id: str
    tenant_id: str
    user_id: str
    type: str
    title: str
    message: str
    data: dict[str, Any] | None = None
    is_read: bool = False
    created_at: datetime | None = None


class NotificationRepo:
    async def create(self, notification: NotificationRecord) -> None:
        raise NotImplementedError

    async def list_for_user(self, tenant_id: str, user_id: str) -> Sequence[NotificationRecord]:
        raise NotImplementedError
