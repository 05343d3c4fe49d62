from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum


class LeaveStatus(StrEnum):
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'


class LeaveType(StrEnum):
    ANNUAL = 'annual'
    SICK = 'sick'
    CASUAL = 'casual'
    MATERNITY = 'maternity'
    PATERNITY = 'paternity'
    UNPAID = 'unpaid'
    EMERGENCY = 'emergency'


def leave_days(start: date, end: date) -> int:
    """Number of calendar days covered by a leave, counting both endpoints."""
    return abs((end - start).days) + 1


@dataclass
class LeaveRequest:
    id: str
    employee_id: str
    employee_name: str
    start_date: date
    end_date: date
    type: LeaveType
    created_at: datetime
    days: int | None = None
    reason: str | None = None
    status: LeaveStatus = LeaveStatus.PENDING

    @property
    def day_count(self) -> int:
        # Stored value wins; fall back to the date range when it is missing
        if self.days is not None:
            return self.days

        return leave_days(self.start_date, self.end_date)
