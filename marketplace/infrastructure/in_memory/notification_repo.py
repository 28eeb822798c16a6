from typing import Sequence

from marketplace.application.interfaces.notification_repo import (
    NotificationRecord,
    NotificationRepo,
)


class InMemoryNotificationRepo(NotificationRepo):
    def __init__(self) -> None:
        self.notifications: list[NotificationRecord] = []

    async def create(self, notification: NotificationRecord) -> None:
        self.notifications.append(notification)

    async def list_for_user(self, tenant_id: str, user_id: str) -> Sequence[NotificationRecord]:
        return [
            notification
            for notification in reversed(self.notifications)
            if notification.tenant_id == tenant_id and notification.user_id == user_id
        ]
