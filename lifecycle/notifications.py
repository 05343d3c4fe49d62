import logging
import uuid
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from models import ArchivedEmployee, Employee, LeaveRequest, LeaveStatus, Notification, NotificationType, Resignation
from repositories import NotificationRepository, RecipientResolver

from .saga import utcnow


@dataclass(frozen=True)
class RecipientRule:
    managers: bool = False
    admins: bool = False
    subject: bool = False
    exclude_actor: bool = False


MANAGEMENT = RecipientRule(managers=True, admins=True, exclude_actor=True)
MANAGERS = RecipientRule(managers=True, exclude_actor=True)
ADMINS = RecipientRule(admins=True, exclude_actor=True)
SUBJECT = RecipientRule(subject=True)


@dataclass
class Event:
    type: NotificationType
    title: str
    message: str
    rule: RecipientRule
    subject_id: str | None = None
    actor_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    link: str | None = None


def resignation_submitted(resignation: Resignation) -> Event:
    return Event(
        type=NotificationType.RESIGNATION,
        title='New Resignation Submitted',
        message=f'{resignation.employee_name} has submitted a resignation',
        rule=ADMINS,
        subject_id=resignation.employee_id,
        actor_id=resignation.employee_id,
        data={'resignation_id': resignation.id, 'employee_name': resignation.employee_name},
        link='/resignation',
    )


def resignation_approved(resignation: Resignation, archived: ArchivedEmployee, actor_id: str | None) -> Event:
    return Event(
        type=NotificationType.RESIGNATION,
        title='Resignation Approved',
        message=f'{archived.name} has been archived after resignation approval',
        rule=MANAGEMENT,
        subject_id=resignation.employee_id,
        actor_id=actor_id,
        data={
            'resignation_id': resignation.id,
            'archived_employee_id': archived.id,
            'employee_name': archived.name,
            'last_working_date': resignation.last_working_date.isoformat(),
        },
        link='/archive',
    )


def resignation_rejected(resignation: Resignation, actor_id: str | None) -> Event:
    return Event(
        type=NotificationType.RESIGNATION,
        title='Resignation Rejected',
        message=f'Your resignation submitted on {resignation.resignation_date.isoformat()} has been rejected',
        rule=SUBJECT,
        subject_id=resignation.employee_id,
        actor_id=actor_id,
        data={'resignation_id': resignation.id, 'comments': resignation.comments},
        link='/resignation',
    )


def employee_reinstated(employee: Employee, archived: ArchivedEmployee, actor_id: str | None) -> Event:
    return Event(
        type=NotificationType.EMPLOYEE,
        title='Employee Reinstated',
        message=f'{employee.name} has been reinstated and needs a new password to log in',
        rule=MANAGEMENT,
        subject_id=employee.id,
        actor_id=actor_id,
        data={'employee_id': employee.id, 'archived_employee_id': archived.id, 'employee_name': employee.name},
        link='/employees',
    )


def leave_requested(leave: LeaveRequest) -> Event:
    return Event(
        type=NotificationType.LEAVE_REQUEST,
        title='New Leave Request',
        message=(
            f'{leave.employee_name} has requested leave from {leave.start_date.isoformat()} '
            f'to {leave.end_date.isoformat()}'
        ),
        rule=MANAGERS,
        subject_id=leave.employee_id,
        actor_id=leave.employee_id,
        data={'leave_id': leave.id, 'employee_name': leave.employee_name, 'days': leave.day_count},
        link='/leave',
    )


def leave_decided(leave: LeaveRequest, actor_id: str | None) -> Event:
    decision = 'Approved' if leave.status == LeaveStatus.APPROVED else 'Rejected'
    return Event(
        type=NotificationType.LEAVE_REQUEST,
        title=f'Leave Request {decision}',
        message=(
            f'Your leave request from {leave.start_date.isoformat()} to {leave.end_date.isoformat()} '
            f'has been {decision.lower()}'
        ),
        rule=SUBJECT,
        subject_id=leave.employee_id,
        actor_id=actor_id,
        data={'leave_id': leave.id, 'status': leave.status.value, 'days': leave.day_count},
        link='/leave',
    )


class NotificationFanout:
    """Best-effort publication of lifecycle events to a computed recipient set.

    Publishing never raises. With background=True events are delivered on a
    worker thread and publish returns immediately.
    """

    def __init__(
        self,
        notification_repo: NotificationRepository,
        recipients: RecipientResolver,
        *,
        background: bool = False,
        max_workers: int = 4,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.notification_repo = notification_repo
        self.recipients = recipients
        self.clock = clock
        self.executor = ThreadPoolExecutor(max_workers, thread_name_prefix='notifications') if background else None
        self.logger = logging.getLogger(self.__class__.__name__)

    def resolve(self, event: Event) -> list[str]:
        candidates: list[str] = []

        if event.rule.managers:
            candidates.extend(self.recipients.manager_ids())
        if event.rule.admins:
            candidates.extend(self.recipients.admin_ids())
        if event.rule.subject and event.subject_id is not None:
            candidates.append(event.subject_id)

        excluded = event.actor_id if event.rule.exclude_actor else None

        # Someone can be both manager and admin; notify once
        return [user_id for user_id in dict.fromkeys(candidates) if user_id != excluded]

    def publish(self, event: Event) -> Future[int] | None:
        if self.executor is None:
            self.deliver(event)
            return None

        try:
            return self.executor.submit(self.deliver, event)
        except RuntimeError:
            self.logger.exception('Could not schedule notification "%s"', event.title)
            return None

    def deliver(self, event: Event) -> int:
        try:
            recipients = self.resolve(event)
        except Exception:
            self.logger.exception('Could not resolve recipients for notification "%s"', event.title)
            return 0

        delivered = 0
        for user_id in recipients:
            notification = Notification(
                id=str(uuid.uuid4()),
                user_id=user_id,
                type=event.type,
                title=event.title,
                message=event.message,
                created_at=self.clock(),
                data=dict(event.data),
                link=event.link,
            )

            try:
                self.notification_repo.create(notification)
            except Exception:
                self.logger.exception('Failed to deliver notification "%s" to %s', event.title, user_id)
            else:
                delivered += 1

        return delivered

    def shutdown(self) -> None:
        if self.executor is not None:
            self.executor.shutdown(wait=True)
