from collections.abc import Generator
from datetime import UTC, datetime

from models import Notification
from repositories import EmployeeRepository, NotificationRepository, RecipientResolver

from .base import MemoryCollection


class MemoryNotificationRepository(NotificationRepository):
    def __init__(self) -> None:
        self.notifications: MemoryCollection[Notification] = MemoryCollection()

    def create(self, notification: Notification) -> None:
        self.notifications.put(notification)

    def get(self, notification_id: str) -> Notification | None:
        return self.notifications.get(notification_id)

    def get_all(self, user_id: str, *, unread_only: bool = False) -> Generator[Notification, None, None]:
        rows = self.notifications.rows(lambda n: n.user_id == user_id and not (unread_only and n.is_read))
        yield from sorted(rows, key=lambda n: n.created_at, reverse=True)

    def _read(self, notification: Notification) -> bool:
        if notification.is_read:
            return False
        notification.is_read = True
        notification.read_at = datetime.now(UTC)
        return True

    def mark_read(self, notification_id: str) -> None:
        self.notifications.modify(notification_id, self._read)

    def mark_all_read(self, user_id: str) -> int:
        return sum(
            1
            for notification in list(self.get_all(user_id, unread_only=True))
            if self.notifications.modify(notification.id, self._read)
        )

    def delete_all(self) -> None:
        self.notifications.clear()


class MemoryRecipientResolver(RecipientResolver):
    def __init__(self, employee_repo: EmployeeRepository, admin_ids: list[str] | None = None) -> None:
        self.employee_repo = employee_repo
        self.admins = list(admin_ids or [])

    def manager_ids(self) -> list[str]:
        return [e.id for e in self.employee_repo.get_all() if e.is_manager]

    def admin_ids(self) -> list[str]:
        return list(self.admins)
