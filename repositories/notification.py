from collections.abc import Generator

from models import Notification


class NotificationRepository:
    def create(self, notification: Notification) -> None:
        raise NotImplementedError  # pragma: no cover

    def get(self, notification_id: str) -> Notification | None:
        raise NotImplementedError  # pragma: no cover

    def get_all(self, user_id: str, *, unread_only: bool = False) -> Generator[Notification, None, None]:
        raise NotImplementedError  # pragma: no cover

    def mark_read(self, notification_id: str) -> None:
        raise NotImplementedError  # pragma: no cover

    def mark_all_read(self, user_id: str) -> int:
        raise NotImplementedError  # pragma: no cover

    def delete_all(self) -> None:
        raise NotImplementedError  # pragma: no cover
