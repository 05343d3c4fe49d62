import uuid
from collections.abc import Callable
from datetime import UTC, datetime, tzinfo

from models import ArchivedEmployee, Employee
from repositories import ArchivedEmployeeRepository, EmployeeRepository

from . import notifications as events
from .errors import NotFoundError, PreconditionError
from .notifications import NotificationFanout
from .resignation import SNAPSHOT_FIELDS
from .saga import Guard, Saga, TransitionResult, utcnow

# Reinstatement is a rehire: these never carry over from the archived snapshot
RESET_FIELDS = {'join_date', 'leave_balance', 'can_login'}


def rehire(archived: ArchivedEmployee, joined: datetime) -> Employee:
    return Employee(
        id=str(uuid.uuid4()),
        join_date=joined.date(),
        leave_balance=0,
        can_login=False,
        **{name: getattr(archived, name) for name in SNAPSHOT_FIELDS if name not in RESET_FIELDS},
    )


class ArchiveTransitions:
    def __init__(
        self,
        archive_repo: ArchivedEmployeeRepository,
        employee_repo: EmployeeRepository,
        notifications: NotificationFanout,
        clock: Callable[[], datetime] = utcnow,
        tz: tzinfo = UTC,
    ) -> None:
        self.archive_repo = archive_repo
        self.employee_repo = employee_repo
        self.notifications = notifications
        self.clock = clock
        self.tz = tz

    def _check_reinstatable(self, archived_id: str) -> Guard[ArchivedEmployee]:
        archived = self.archive_repo.get(archived_id)
        if archived is None:
            return Guard.fail(NotFoundError('Archived employee', archived_id))

        if self.employee_repo.find_by_email(archived.email) is not None:
            return Guard.fail(PreconditionError(f"An active employee with email '{archived.email}' already exists"))

        return Guard.proceed(archived)

    def reinstate(self, archived_id: str, *, actor_id: str | None = None) -> TransitionResult[Employee]:
        """Move an archived employee back to the active roster as a fresh hire.

        The new record starts with a zero leave balance, login disabled until a
        new password is set, and today's join date.
        """

        def body(saga: Saga) -> tuple[Employee, ArchivedEmployee]:
            archived = saga.guard(lambda: self._check_reinstatable(archived_id))
            employee = rehire(archived, self.clock().astimezone(self.tz))

            saga.step(
                'create active employee',
                lambda: self.employee_repo.create(employee),
                compensate=lambda _: self.employee_repo.delete(employee.id),
            )
            saga.step('remove archive record', lambda: self.archive_repo.delete(archived.id))

            return employee, archived

        outcome = Saga('reinstatement').run(body, success_message='Employee reinstated successfully')

        if not outcome.success or outcome.data is None:
            return TransitionResult(
                success=False,
                message=outcome.message,
                error=outcome.error,
                manual_intervention=outcome.manual_intervention,
                compensation_failures=outcome.compensation_failures,
            )

        employee, archived = outcome.data
        self.notifications.publish(events.employee_reinstated(employee, archived, actor_id))
        return TransitionResult.ok(outcome.message, employee)

    def purge(self, archived_id: str) -> TransitionResult[ArchivedEmployee]:
        """Permanently delete an archive record."""

        def body(saga: Saga) -> ArchivedEmployee:
            archived = saga.guard(lambda: self._check_exists(archived_id))
            saga.step('delete archive record', lambda: self.archive_repo.delete(archived.id))
            return archived

        return Saga('archive_purge').run(body, success_message='Archived employee deleted permanently')

    def update_notes(self, archived_id: str, notes: str) -> TransitionResult[ArchivedEmployee]:
        def body(saga: Saga) -> ArchivedEmployee:
            archived = saga.guard(lambda: self._check_exists(archived_id))
            saga.step('update archive notes', lambda: self.archive_repo.update_notes(archived.id, notes))
            archived.notes = notes
            return archived

        return Saga('archive_notes').run(body, success_message='Archive notes updated')

    def _check_exists(self, archived_id: str) -> Guard[ArchivedEmployee]:
        archived = self.archive_repo.get(archived_id)
        if archived is None:
            return Guard.fail(NotFoundError('Archived employee', archived_id))
        return Guard.proceed(archived)
