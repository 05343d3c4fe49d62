from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any


class NotificationType(StrEnum):
    RESIGNATION = 'resignation'
    LEAVE_REQUEST = 'leave_request'
    ATTENDANCE = 'attendance'
    EMPLOYEE = 'employee'
    SYSTEM = 'system'


@dataclass
class Notification:
    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    created_at: datetime
    data: dict[str, Any] = field(default_factory=dict)
    link: str | None = None
    is_read: bool = False
    read_at: datetime | None = None
