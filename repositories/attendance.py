from datetime import date, time

from models import AttendanceRecord


def attendance_id(employee_id: str, day: date) -> str:
    return f'{employee_id}_{day.isoformat()}'


class AttendanceRepository:
    def get(self, record_id: str) -> AttendanceRecord | None:
        raise NotImplementedError  # pragma: no cover

    def get_for_day(self, employee_id: str, day: date) -> AttendanceRecord | None:
        raise NotImplementedError  # pragma: no cover

    def create(self, record: AttendanceRecord) -> None:
        """Insert a record; raises DuplicateAttendanceError if one exists for the same employee and day."""
        raise NotImplementedError  # pragma: no cover

    def close(self, record_id: str, clock_out: time, notes: str) -> bool:
        """Set clock-out on an open record. Returns False if the record is missing or already closed."""
        raise NotImplementedError  # pragma: no cover

    def delete_all(self) -> None:
        raise NotImplementedError  # pragma: no cover
