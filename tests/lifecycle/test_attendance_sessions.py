from datetime import UTC, date, datetime, time, timedelta
from typing import cast
from unittest import TestCase
from unittest.mock import patch
from zoneinfo import ZoneInfo

from faker import Faker

from lifecycle import AlreadyClockedInError, AttendanceSessions, NoOpenSessionError
from models import AttendanceStatus
from repositories.memory import MemoryAttendanceRepository


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class TestAttendanceSessions(TestCase):
    def setUp(self) -> None:
        self.faker = Faker()

        self.repo = MemoryAttendanceRepository()
        self.clock = FakeClock(datetime(2024, 11, 18, 8, 55, 12, 250000, tzinfo=UTC))
        self.sessions = AttendanceSessions(self.repo, clock=self.clock)

        self.employee_id = cast(str, self.faker.uuid4())
        self.employee_name = self.faker.name()

    def test_clock_in(self) -> None:
        result = self.sessions.clock_in(self.employee_id, self.employee_name)

        self.assertTrue(result.success)
        self.assertEqual(result.message, 'Clocked in successfully')

        record = self.repo.get_for_day(self.employee_id, date(2024, 11, 18))
        assert record is not None
        self.assertEqual(record.clock_in, time(8, 55, 12))
        self.assertIsNone(record.clock_out)
        self.assertEqual(record.status, AttendanceStatus.PRESENT)
        self.assertEqual(result.data, record)

    def test_clock_in_twice(self) -> None:
        self.sessions.clock_in(self.employee_id, self.employee_name)
        self.clock.advance(hours=1)

        result = self.sessions.clock_in(self.employee_id, self.employee_name)

        self.assertFalse(result.success)
        self.assertIsInstance(result.error, AlreadyClockedInError)
        self.assertEqual(result.message, 'Already clocked in today')

        record = self.repo.get_for_day(self.employee_id, date(2024, 11, 18))
        assert record is not None
        self.assertEqual(record.clock_in, time(8, 55, 12))

    def test_clock_in_after_clock_out(self) -> None:
        self.sessions.clock_in(self.employee_id, self.employee_name)
        self.clock.advance(hours=8)
        self.sessions.clock_out(self.employee_id)
        self.clock.advance(minutes=5)

        result = self.sessions.clock_in(self.employee_id, self.employee_name)

        self.assertFalse(result.success)
        self.assertIsInstance(result.error, AlreadyClockedInError)

    def test_clock_in_race_on_insert(self) -> None:
        # Both callers pass the read check; the store's uniqueness decides
        with patch.object(self.repo, 'get_for_day', return_value=None):
            first = self.sessions.clock_in(self.employee_id, self.employee_name)
            second = self.sessions.clock_in(self.employee_id, self.employee_name)

        self.assertTrue(first.success)
        self.assertFalse(second.success)
        self.assertIsInstance(second.error, AlreadyClockedInError)
        self.assertEqual(len(self.repo.records), 1)

    def test_clock_in_next_day(self) -> None:
        self.sessions.clock_in(self.employee_id, self.employee_name)
        self.clock.advance(days=1)

        result = self.sessions.clock_in(self.employee_id, self.employee_name)

        self.assertTrue(result.success)
        self.assertEqual(len(self.repo.records), 2)

    def test_clock_out(self) -> None:
        self.sessions.clock_in(self.employee_id, self.employee_name)
        self.clock.advance(hours=8, minutes=30)

        result = self.sessions.clock_out(self.employee_id, location='Head office')

        self.assertTrue(result.success)
        self.assertEqual(result.message, 'Clocked out successfully')

        record = self.repo.get_for_day(self.employee_id, date(2024, 11, 18))
        assert record is not None
        self.assertEqual(record.clock_out, time(17, 25, 12))
        self.assertEqual(record.notes, 'Clock-out location: Head office')
        self.assertEqual(record.worked, timedelta(hours=8, minutes=30))
        self.assertEqual(len(self.repo.records), 1)

    def test_clock_out_keeps_notes(self) -> None:
        self.sessions.clock_in(self.employee_id, self.employee_name, notes='Remote')
        self.clock.advance(hours=4)

        self.sessions.clock_out(self.employee_id, location='Home')

        record = self.repo.get_for_day(self.employee_id, date(2024, 11, 18))
        assert record is not None
        self.assertEqual(record.notes, 'Remote\nClock-out location: Home')

    def test_clock_out_without_clock_in(self) -> None:
        result = self.sessions.clock_out(self.employee_id)

        self.assertFalse(result.success)
        self.assertIsInstance(result.error, NoOpenSessionError)
        self.assertEqual(len(self.repo.records), 0)

    def test_clock_out_twice(self) -> None:
        self.sessions.clock_in(self.employee_id, self.employee_name)
        self.clock.advance(hours=8)
        self.sessions.clock_out(self.employee_id)
        self.clock.advance(hours=1)

        result = self.sessions.clock_out(self.employee_id)

        self.assertFalse(result.success)
        self.assertIsInstance(result.error, NoOpenSessionError)
        record = self.repo.get_for_day(self.employee_id, date(2024, 11, 18))
        assert record is not None
        self.assertEqual(record.clock_out, time(16, 55, 12))

    def test_day_follows_timezone(self) -> None:
        clock = FakeClock(datetime(2024, 11, 18, 23, 30, tzinfo=UTC))
        sessions = AttendanceSessions(self.repo, clock=clock, tz=ZoneInfo('Europe/Madrid'))

        result = sessions.clock_in(self.employee_id, self.employee_name)

        assert result.data is not None
        self.assertEqual(result.data.date, date(2024, 11, 19))
        self.assertEqual(result.data.clock_in, time(0, 30))
        self.assertEqual(sessions.today(self.employee_id), result.data)
