from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import StrEnum


class AttendanceStatus(StrEnum):
    PRESENT = 'present'
    ABSENT = 'absent'
    LATE = 'late'
    HALF_DAY = 'half_day'
    ON_LEAVE = 'on_leave'


@dataclass
class AttendanceRecord:
    id: str
    employee_id: str
    employee_name: str
    date: date
    clock_in: time | None = None
    clock_out: time | None = None
    status: AttendanceStatus = AttendanceStatus.PRESENT
    notes: str = ''

    @property
    def is_open(self) -> bool:
        return self.clock_in is not None and self.clock_out is None

    @property
    def worked(self) -> timedelta:
        if self.clock_in is None or self.clock_out is None:
            return timedelta(0)

        start = datetime.combine(self.date, self.clock_in)
        end = datetime.combine(self.date, self.clock_out)
        return max(end - start, timedelta(0))
