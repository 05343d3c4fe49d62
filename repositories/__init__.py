from .archived_employee import ArchivedEmployeeRepository
from .attendance import AttendanceRepository, attendance_id
from .employee import EmployeeRepository
from .errors import DuplicateAttendanceError, DuplicateEmailError, EntityNotFoundError, StaleStatusError
from .leave_request import LeaveRequestRepository
from .notification import NotificationRepository
from .recipients import RecipientResolver
from .resignation import ResignationRepository

__all__ = [
    'ArchivedEmployeeRepository',
    'AttendanceRepository',
    'attendance_id',
    'EmployeeRepository',
    'DuplicateAttendanceError',
    'DuplicateEmailError',
    'EntityNotFoundError',
    'StaleStatusError',
    'LeaveRequestRepository',
    'NotificationRepository',
    'RecipientResolver',
    'ResignationRepository',
]
