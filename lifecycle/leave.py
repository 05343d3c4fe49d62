import uuid
from collections.abc import Callable
from datetime import date, datetime

from models import LeaveRequest, LeaveStatus, LeaveType, leave_days
from repositories import EmployeeRepository, LeaveRequestRepository, StaleStatusError

from . import notifications as events
from .errors import InvalidStatusError, NotFoundError
from .notifications import NotificationFanout
from .saga import AlreadyApplied, Guard, Saga, TransitionResult, utcnow


class LeaveTransitions:
    def __init__(
        self,
        leave_repo: LeaveRequestRepository,
        employee_repo: EmployeeRepository,
        notifications: NotificationFanout,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.leave_repo = leave_repo
        self.employee_repo = employee_repo
        self.notifications = notifications
        self.clock = clock

    def _check(self, leave_id: str, target: LeaveStatus) -> Guard[LeaveRequest]:
        leave = self.leave_repo.get(leave_id)
        if leave is None:
            return Guard.fail(NotFoundError('Leave request', leave_id))

        if leave.status == target:
            return Guard.already_applied(leave)

        if leave.status != LeaveStatus.PENDING:
            action = 'approve' if target == LeaveStatus.APPROVED else 'reject'
            return Guard.fail(InvalidStatusError('Leave request', leave.id, leave.status, action))

        if target == LeaveStatus.APPROVED and self.employee_repo.get(leave.employee_id) is None:
            return Guard.fail(NotFoundError('Employee', leave.employee_id))

        return Guard.proceed(leave)

    def _decide(self, leave: LeaveRequest, status: LeaveStatus) -> None:
        if self.leave_repo.update_status(leave.id, status, expected=LeaveStatus.PENDING):
            return

        current = self.leave_repo.get(leave.id)
        if current is not None and current.status == status:
            raise AlreadyApplied(current)

        raise StaleStatusError('Leave request', leave.id, LeaveStatus.PENDING, None if current is None else current.status)

    def request(
        self,
        employee_id: str,
        *,
        start_date: date,
        end_date: date,
        leave_type: LeaveType,
        reason: str | None = None,
    ) -> TransitionResult[LeaveRequest]:
        def check() -> Guard[str]:
            employee = self.employee_repo.get(employee_id)
            if employee is None:
                return Guard.fail(NotFoundError('Employee', employee_id))
            return Guard.proceed(employee.name)

        def body(saga: Saga) -> LeaveRequest:
            employee_name = saga.guard(check)
            leave = LeaveRequest(
                id=str(uuid.uuid4()),
                employee_id=employee_id,
                employee_name=employee_name,
                start_date=start_date,
                end_date=end_date,
                type=leave_type,
                created_at=self.clock(),
                days=leave_days(start_date, end_date),
                reason=reason,
            )
            saga.step('create leave request', lambda: self.leave_repo.create(leave))
            return leave

        result = Saga('leave_request').run(body, success_message='Leave request submitted successfully')

        if result.success and result.data is not None:
            self.notifications.publish(events.leave_requested(result.data))

        return result

    def approve(self, leave_id: str, *, actor_id: str | None = None) -> TransitionResult[LeaveRequest]:
        """Approve a pending leave request and deduct its days from the employee's balance.

        The balance is deducted before the status flips, and the deduction is
        refunded if the flip fails. A request is therefore either pending with the
        balance untouched or approved with exactly one deduction. Approving an
        approved request does nothing.
        """

        def body(saga: Saga) -> LeaveRequest:
            leave = saga.guard(lambda: self._check(leave_id, LeaveStatus.APPROVED))
            days = leave.day_count

            saga.step(
                'deduct leave balance',
                lambda: self.employee_repo.adjust_leave_balance(leave.employee_id, -days),
                compensate=lambda applied: self.employee_repo.adjust_leave_balance(leave.employee_id, -applied),
            )
            saga.step('mark leave approved', lambda: self._decide(leave, LeaveStatus.APPROVED))

            leave.status = LeaveStatus.APPROVED
            return leave

        result = Saga('leave_approval').run(
            body,
            success_message='Leave request approved successfully',
            already_applied_message='Leave request was already approved',
        )

        if result.success and not result.short_circuited and result.data is not None:
            self.notifications.publish(events.leave_decided(result.data, actor_id))

        return result

    def reject(self, leave_id: str, *, actor_id: str | None = None) -> TransitionResult[LeaveRequest]:
        def body(saga: Saga) -> LeaveRequest:
            leave = saga.guard(lambda: self._check(leave_id, LeaveStatus.REJECTED))
            saga.step('mark leave rejected', lambda: self._decide(leave, LeaveStatus.REJECTED))

            leave.status = LeaveStatus.REJECTED
            return leave

        result = Saga('leave_rejection').run(
            body,
            success_message='Leave request rejected',
            already_applied_message='Leave request was already rejected',
        )

        if result.success and not result.short_circuited and result.data is not None:
            self.notifications.publish(events.leave_decided(result.data, actor_id))

        return result
