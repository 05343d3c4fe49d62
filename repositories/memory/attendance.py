from datetime import date, time

from models import AttendanceRecord
from repositories import AttendanceRepository, DuplicateAttendanceError, attendance_id

from .base import MemoryCollection


class MemoryAttendanceRepository(AttendanceRepository):
    def __init__(self) -> None:
        self.records: MemoryCollection[AttendanceRecord] = MemoryCollection()

    def get(self, record_id: str) -> AttendanceRecord | None:
        return self.records.get(record_id)

    def get_for_day(self, employee_id: str, day: date) -> AttendanceRecord | None:
        return self.records.get(attendance_id(employee_id, day))

    def create(self, record: AttendanceRecord) -> None:
        record.id = attendance_id(record.employee_id, record.date)
        if not self.records.insert(record):
            raise DuplicateAttendanceError(record.employee_id, record.date.isoformat())

    def close(self, record_id: str, clock_out: time, notes: str) -> bool:
        def apply(record: AttendanceRecord) -> bool:
            if not record.is_open:
                return False
            record.clock_out = clock_out
            record.notes = notes
            return True

        return self.records.modify(record_id, apply)

    def delete_all(self) -> None:
        self.records.clear()
