from .archived_employee import FirestoreArchivedEmployeeRepository
from .attendance import FirestoreAttendanceRepository
from .employee import FirestoreEmployeeRepository
from .leave_request import FirestoreLeaveRequestRepository
from .notification import FirestoreNotificationRepository
from .recipients import FirestoreRecipientResolver
from .resignation import FirestoreResignationRepository

__all__ = [
    'FirestoreArchivedEmployeeRepository',
    'FirestoreAttendanceRepository',
    'FirestoreEmployeeRepository',
    'FirestoreLeaveRequestRepository',
    'FirestoreNotificationRepository',
    'FirestoreRecipientResolver',
    'FirestoreResignationRepository',
]
