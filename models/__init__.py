from .archived_employee import ArchivedEmployee
from .attendance import AttendanceRecord, AttendanceStatus
from .employee import Employee
from .leave_request import LeaveRequest, LeaveStatus, LeaveType, leave_days
from .notification import Notification, NotificationType
from .resignation import Resignation, ResignationStatus
from .role import Role

__all__ = [
    'ArchivedEmployee',
    'AttendanceRecord',
    'AttendanceStatus',
    'Employee',
    'LeaveRequest',
    'LeaveStatus',
    'LeaveType',
    'leave_days',
    'Notification',
    'NotificationType',
    'Resignation',
    'ResignationStatus',
    'Role',
]
