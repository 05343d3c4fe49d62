from .archive import ArchiveTransitions
from .attendance import AttendanceSessions
from .errors import (
    AlreadyClockedInError,
    InvalidStatusError,
    NoOpenSessionError,
    NotFoundError,
    PreconditionError,
    TransitionError,
)
from .leave import LeaveTransitions
from .notifications import NotificationFanout, RecipientRule
from .resignation import ApprovedResignation, ResignationTransitions
from .saga import CompensationLog, Guard, GuardOutcome, Saga, TransitionResult

__all__ = [
    'ArchiveTransitions',
    'AttendanceSessions',
    'AlreadyClockedInError',
    'InvalidStatusError',
    'NoOpenSessionError',
    'NotFoundError',
    'PreconditionError',
    'TransitionError',
    'LeaveTransitions',
    'NotificationFanout',
    'RecipientRule',
    'ApprovedResignation',
    'ResignationTransitions',
    'CompensationLog',
    'Guard',
    'GuardOutcome',
    'Saga',
    'TransitionResult',
]
