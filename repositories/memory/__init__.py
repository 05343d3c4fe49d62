from .attendance import MemoryAttendanceRepository
from .employee import MemoryArchivedEmployeeRepository, MemoryEmployeeRepository
from .notification import MemoryNotificationRepository, MemoryRecipientResolver
from .requests import MemoryLeaveRequestRepository, MemoryResignationRepository

__all__ = [
    'MemoryArchivedEmployeeRepository',
    'MemoryAttendanceRepository',
    'MemoryEmployeeRepository',
    'MemoryLeaveRequestRepository',
    'MemoryNotificationRepository',
    'MemoryRecipientResolver',
    'MemoryResignationRepository',
]
