import uuid
from collections.abc import Callable
from dataclasses import dataclass, fields
from datetime import date, datetime

from models import ArchivedEmployee, Employee, Resignation, ResignationStatus
from repositories import ArchivedEmployeeRepository, EmployeeRepository, ResignationRepository, StaleStatusError

from . import notifications as events
from .errors import InvalidStatusError, NotFoundError, PreconditionError
from .notifications import NotificationFanout
from .saga import AlreadyApplied, Guard, Saga, TransitionResult, utcnow

SNAPSHOT_FIELDS = [f.name for f in fields(Employee) if f.name != 'id']


@dataclass
class ApprovedResignation:
    resignation: Resignation
    archived_employee: ArchivedEmployee | None


@dataclass
class ApprovalRequest:
    resignation: Resignation
    employee: Employee


def archive_snapshot(
    employee: Employee, resignation: Resignation, *, archived_by: str, notes: str | None, archived_at: datetime
) -> ArchivedEmployee:
    return ArchivedEmployee(
        id=str(uuid.uuid4()),
        employee_id=employee.id,
        archived_at=archived_at,
        archived_by=archived_by,
        resignation_id=resignation.id,
        resignation_date=resignation.resignation_date,
        last_working_date=resignation.last_working_date,
        resignation_reason=resignation.reason,
        notes=notes or f'Approved resignation. Reason: {resignation.reason or "Not specified"}',
        **{name: getattr(employee, name) for name in SNAPSHOT_FIELDS},
    )


class ResignationTransitions:
    def __init__(
        self,
        resignation_repo: ResignationRepository,
        archive_repo: ArchivedEmployeeRepository,
        employee_repo: EmployeeRepository,
        notifications: NotificationFanout,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.resignation_repo = resignation_repo
        self.archive_repo = archive_repo
        self.employee_repo = employee_repo
        self.notifications = notifications
        self.clock = clock

    def _load(self, resignation_id: str) -> Resignation:
        resignation = self.resignation_repo.get(resignation_id)
        if resignation is None:
            raise NotFoundError('Resignation', resignation_id)
        return resignation

    def _move(self, resignation: Resignation, status: ResignationStatus, expected: ResignationStatus) -> None:
        if not self.resignation_repo.update_status(resignation.id, status, expected=expected):
            current = self.resignation_repo.get(resignation.id)
            raise StaleStatusError('Resignation', resignation.id, expected, None if current is None else current.status)

    def _check_approvable(self, resignation_id: str, employee: Employee | None) -> Guard[ApprovalRequest]:
        try:
            resignation = self._load(resignation_id)
        except NotFoundError as exc:
            return Guard.fail(exc)

        if resignation.status == ResignationStatus.APPROVED:
            return Guard.already_applied(
                ApprovedResignation(resignation, self.archive_repo.find_by_resignation(resignation.id))
            )

        if resignation.status != ResignationStatus.PENDING:
            return Guard.fail(InvalidStatusError('Resignation', resignation.id, resignation.status, 'approve'))

        if employee is not None and employee.id != resignation.employee_id:
            return Guard.fail(
                PreconditionError(f"Resignation '{resignation.id}' does not belong to employee '{employee.id}'")
            )

        # The caller's record is what gets archived, but the row must still be active
        active = self.employee_repo.get(resignation.employee_id)
        if active is None:
            return Guard.fail(NotFoundError('Employee', resignation.employee_id))

        return Guard.proceed(ApprovalRequest(resignation, employee or active))

    def _check_submittable(self, employee_id: str) -> Guard[Employee]:
        employee = self.employee_repo.get(employee_id)
        if employee is None:
            return Guard.fail(NotFoundError('Employee', employee_id))

        for pending in self.resignation_repo.get_all(ResignationStatus.PENDING):
            if pending.employee_id == employee.id:
                return Guard.fail(
                    PreconditionError(f"Employee '{employee.id}' already has a pending resignation '{pending.id}'")
                )

        return Guard.proceed(employee)

    def submit(
        self,
        employee_id: str,
        *,
        resignation_date: date,
        last_working_date: date,
        reason: str | None = None,
    ) -> TransitionResult[Resignation]:
        """File a pending resignation for an active employee and let the admins know."""

        def body(saga: Saga) -> Resignation:
            employee = saga.guard(lambda: self._check_submittable(employee_id))
            resignation = Resignation(
                id=str(uuid.uuid4()),
                employee_id=employee.id,
                employee_name=employee.name,
                resignation_date=resignation_date,
                last_working_date=last_working_date,
                created_at=self.clock(),
                reason=reason,
            )
            saga.step('create resignation', lambda: self.resignation_repo.create(resignation))
            return resignation

        result = Saga('resignation_submission').run(body, success_message='Resignation submitted successfully')

        if result.success and result.data is not None:
            self.notifications.publish(events.resignation_submitted(result.data))

        return result

    def approve(
        self,
        resignation_id: str,
        employee: Employee | None = None,
        *,
        archived_by: str = 'System',
        actor_id: str | None = None,
        notes: str | None = None,
    ) -> TransitionResult[ApprovedResignation]:
        """Approve a resignation, archive the employee and drop them from the active roster.

        Approving a resignation that is already approved is a no-op that returns
        the existing archive record.
        """

        def body(saga: Saga) -> ApprovedResignation:
            request = saga.guard(lambda: self._check_approvable(resignation_id, employee))
            resignation = request.resignation

            def mark_approved() -> None:
                try:
                    self._move(resignation, ResignationStatus.APPROVED, ResignationStatus.PENDING)
                except StaleStatusError as exc:
                    if exc.actual == ResignationStatus.APPROVED:
                        # Another approver got there first
                        raise AlreadyApplied(
                            ApprovedResignation(
                                self._load(resignation.id), self.archive_repo.find_by_resignation(resignation.id)
                            )
                        ) from exc
                    raise

            saga.step(
                'mark resignation approved',
                mark_approved,
                compensate=lambda _: self._move(resignation, ResignationStatus.PENDING, ResignationStatus.APPROVED),
            )

            archived = archive_snapshot(
                request.employee, resignation, archived_by=archived_by, notes=notes, archived_at=self.clock()
            )
            saga.step(
                'archive employee',
                lambda: self.archive_repo.create(archived),
                compensate=lambda _: self.archive_repo.delete(archived.id),
            )

            saga.step('remove active employee', lambda: self.employee_repo.delete(request.employee.id))

            resignation.status = ResignationStatus.APPROVED
            return ApprovedResignation(resignation, archived)

        result = Saga('resignation_approval').run(
            body,
            success_message='Resignation approved and employee archived successfully',
            already_applied_message='Resignation was already approved',
        )

        if result.success and not result.short_circuited and result.data is not None:
            approved = result.data
            if approved.archived_employee is not None:
                self.notifications.publish(
                    events.resignation_approved(approved.resignation, approved.archived_employee, actor_id)
                )

        return result

    def reject(
        self, resignation_id: str, *, comments: str | None = None, actor_id: str | None = None
    ) -> TransitionResult[Resignation]:
        def check(resignation_id: str) -> Guard[Resignation]:
            try:
                resignation = self._load(resignation_id)
            except NotFoundError as exc:
                return Guard.fail(exc)

            if resignation.status == ResignationStatus.REJECTED:
                return Guard.already_applied(resignation)

            if resignation.status != ResignationStatus.PENDING:
                return Guard.fail(InvalidStatusError('Resignation', resignation.id, resignation.status, 'reject'))

            return Guard.proceed(resignation)

        def body(saga: Saga) -> Resignation:
            resignation = saga.guard(lambda: check(resignation_id))

            def mark_rejected() -> None:
                if not self.resignation_repo.update_status(
                    resignation.id, ResignationStatus.REJECTED, expected=ResignationStatus.PENDING, comments=comments
                ):
                    current = self._load(resignation.id)
                    if current.status == ResignationStatus.REJECTED:
                        raise AlreadyApplied(current)
                    raise InvalidStatusError('Resignation', resignation.id, current.status, 'reject')

            saga.step('mark resignation rejected', mark_rejected)

            resignation.status = ResignationStatus.REJECTED
            if comments is not None:
                resignation.comments = comments
            return resignation

        result = Saga('resignation_rejection').run(
            body,
            success_message='Resignation rejected',
            already_applied_message='Resignation was already rejected',
        )

        if result.success and not result.short_circuited and result.data is not None:
            self.notifications.publish(events.resignation_rejected(result.data, actor_id))

        return result

    def archive(self, resignation_id: str) -> TransitionResult[Resignation]:
        """Close out a decided resignation. The employee records are not touched."""

        def check(resignation_id: str) -> Guard[Resignation]:
            try:
                resignation = self._load(resignation_id)
            except NotFoundError as exc:
                return Guard.fail(exc)

            if resignation.status == ResignationStatus.ARCHIVED:
                return Guard.already_applied(resignation)

            if resignation.status == ResignationStatus.PENDING:
                return Guard.fail(InvalidStatusError('Resignation', resignation.id, resignation.status, 'archive'))

            return Guard.proceed(resignation)

        def body(saga: Saga) -> Resignation:
            resignation = saga.guard(lambda: check(resignation_id))
            saga.step(
                'mark resignation archived',
                lambda: self._move(resignation, ResignationStatus.ARCHIVED, resignation.status),
            )
            resignation.status = ResignationStatus.ARCHIVED
            return resignation

        return Saga('resignation_archival').run(
            body,
            success_message='Resignation archived',
            already_applied_message='Resignation was already archived',
        )
