from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum


class ResignationStatus(StrEnum):
    PENDING = 'Pending'
    APPROVED = 'Approved'
    REJECTED = 'Rejected'
    ARCHIVED = 'Archived'


@dataclass
class Resignation:
    id: str
    employee_id: str
    employee_name: str
    resignation_date: date
    last_working_date: date
    created_at: datetime
    reason: str | None = None
    comments: str | None = None
    status: ResignationStatus = ResignationStatus.PENDING
    updated_at: datetime | None = None

    @property
    def notice_period(self) -> int:
        return abs((self.last_working_date - self.resignation_date).days)
