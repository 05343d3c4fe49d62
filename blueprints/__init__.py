# ruff: noqa: N812

from .archive import blp as BlueprintArchive
from .attendance import blp as BlueprintAttendance
from .health import blp as BlueprintHealth
from .leave import blp as BlueprintLeave
from .notification import blp as BlueprintNotification
from .reset import blp as BlueprintReset
from .resignation import blp as BlueprintResignation

__all__ = [
    'BlueprintArchive',
    'BlueprintAttendance',
    'BlueprintHealth',
    'BlueprintLeave',
    'BlueprintNotification',
    'BlueprintReset',
    'BlueprintResignation',
]
