from collections.abc import Callable
from datetime import UTC, date, datetime, tzinfo

from models import AttendanceRecord, AttendanceStatus
from repositories import AttendanceRepository, DuplicateAttendanceError, attendance_id

from .errors import AlreadyClockedInError, NoOpenSessionError
from .saga import Guard, Saga, TransitionResult, utcnow


class AttendanceSessions:
    """Clock-in/clock-out with at most one session per employee per calendar day.

    A second clock-in on the same day is an error rather than a retry: the
    request carries nothing that would tell a duplicate apart from a new one.
    """

    def __init__(
        self,
        attendance_repo: AttendanceRepository,
        clock: Callable[[], datetime] = utcnow,
        tz: tzinfo = UTC,
    ) -> None:
        self.attendance_repo = attendance_repo
        self.clock = clock
        self.tz = tz

    def now(self) -> datetime:
        return self.clock().astimezone(self.tz)

    def today(self, employee_id: str) -> AttendanceRecord | None:
        return self.attendance_repo.get_for_day(employee_id, self.now().date())

    def clock_in(self, employee_id: str, employee_name: str, *, notes: str = '') -> TransitionResult[AttendanceRecord]:
        now = self.now()

        def check(day: date) -> Guard[None]:
            if self.attendance_repo.get_for_day(employee_id, day) is not None:
                return Guard.fail(AlreadyClockedInError(employee_id))
            return Guard.proceed()

        def create(record: AttendanceRecord) -> None:
            try:
                self.attendance_repo.create(record)
            except DuplicateAttendanceError as exc:
                raise AlreadyClockedInError(employee_id) from exc

        def body(saga: Saga) -> AttendanceRecord:
            saga.guard(lambda: check(now.date()))

            record = AttendanceRecord(
                id=attendance_id(employee_id, now.date()),
                employee_id=employee_id,
                employee_name=employee_name,
                date=now.date(),
                clock_in=now.time().replace(microsecond=0),
                status=AttendanceStatus.PRESENT,
                notes=notes,
            )
            saga.step('open attendance session', lambda: create(record))
            return record

        return Saga('clock_in').run(body, success_message='Clocked in successfully')

    def clock_out(self, employee_id: str, *, location: str | None = None) -> TransitionResult[AttendanceRecord]:
        now = self.now()

        def check(day: date) -> Guard[AttendanceRecord]:
            record = self.attendance_repo.get_for_day(employee_id, day)
            if record is None or not record.is_open:
                return Guard.fail(NoOpenSessionError(employee_id))
            return Guard.proceed(record)

        def body(saga: Saga) -> AttendanceRecord:
            record = saga.guard(lambda: check(now.date()))

            clock_out = now.time().replace(microsecond=0)
            notes = record.notes
            if location:
                notes = f'{notes}\nClock-out location: {location}'.strip()

            def close() -> None:
                if not self.attendance_repo.close(record.id, clock_out, notes):
                    raise NoOpenSessionError(employee_id)

            saga.step('close attendance session', close)

            record.clock_out = clock_out
            record.notes = notes
            return record

        return Saga('clock_out').run(body, success_message='Clocked out successfully')
