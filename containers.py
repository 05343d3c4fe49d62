from zoneinfo import ZoneInfo

from dependency_injector import providers
from dependency_injector.containers import DeclarativeContainer, WiringConfiguration

from lifecycle import ArchiveTransitions, AttendanceSessions, LeaveTransitions, NotificationFanout, ResignationTransitions
from repositories.firestore import (
    FirestoreArchivedEmployeeRepository,
    FirestoreAttendanceRepository,
    FirestoreEmployeeRepository,
    FirestoreLeaveRequestRepository,
    FirestoreNotificationRepository,
    FirestoreRecipientResolver,
    FirestoreResignationRepository,
)
from repositories.memory import (
    MemoryArchivedEmployeeRepository,
    MemoryAttendanceRepository,
    MemoryEmployeeRepository,
    MemoryLeaveRequestRepository,
    MemoryNotificationRepository,
    MemoryRecipientResolver,
    MemoryResignationRepository,
)


class Container(DeclarativeContainer):
    wiring_config = WiringConfiguration(packages=['blueprints'])
    config = providers.Configuration()

    employee_repo = providers.Selector(
        config.store.backend,
        firestore=providers.ThreadSafeSingleton(FirestoreEmployeeRepository, database=config.firestore.database),
        memory=providers.ThreadSafeSingleton(MemoryEmployeeRepository),
    )
    archive_repo = providers.Selector(
        config.store.backend,
        firestore=providers.ThreadSafeSingleton(FirestoreArchivedEmployeeRepository, database=config.firestore.database),
        memory=providers.ThreadSafeSingleton(MemoryArchivedEmployeeRepository),
    )
    resignation_repo = providers.Selector(
        config.store.backend,
        firestore=providers.ThreadSafeSingleton(FirestoreResignationRepository, database=config.firestore.database),
        memory=providers.ThreadSafeSingleton(MemoryResignationRepository),
    )
    leave_repo = providers.Selector(
        config.store.backend,
        firestore=providers.ThreadSafeSingleton(FirestoreLeaveRequestRepository, database=config.firestore.database),
        memory=providers.ThreadSafeSingleton(MemoryLeaveRequestRepository),
    )
    attendance_repo = providers.Selector(
        config.store.backend,
        firestore=providers.ThreadSafeSingleton(FirestoreAttendanceRepository, database=config.firestore.database),
        memory=providers.ThreadSafeSingleton(MemoryAttendanceRepository),
    )
    notification_repo = providers.Selector(
        config.store.backend,
        firestore=providers.ThreadSafeSingleton(FirestoreNotificationRepository, database=config.firestore.database),
        memory=providers.ThreadSafeSingleton(MemoryNotificationRepository),
    )
    recipient_resolver = providers.Selector(
        config.store.backend,
        firestore=providers.ThreadSafeSingleton(FirestoreRecipientResolver, database=config.firestore.database),
        memory=providers.ThreadSafeSingleton(
            MemoryRecipientResolver, employee_repo=employee_repo, admin_ids=config.notifications.admins
        ),
    )

    timezone = providers.Singleton(ZoneInfo, config.timezone)

    notification_fanout = providers.ThreadSafeSingleton(
        NotificationFanout,
        notification_repo=notification_repo,
        recipients=recipient_resolver,
        background=config.notifications.background,
        max_workers=config.notifications.workers,
    )

    resignations = providers.Factory(
        ResignationTransitions,
        resignation_repo=resignation_repo,
        archive_repo=archive_repo,
        employee_repo=employee_repo,
        notifications=notification_fanout,
    )
    archive = providers.Factory(
        ArchiveTransitions,
        archive_repo=archive_repo,
        employee_repo=employee_repo,
        notifications=notification_fanout,
        tz=timezone,
    )
    leaves = providers.Factory(
        LeaveTransitions,
        leave_repo=leave_repo,
        employee_repo=employee_repo,
        notifications=notification_fanout,
    )
    attendance = providers.Factory(AttendanceSessions, attendance_repo=attendance_repo, tz=timezone)
