from collections.abc import Generator
from datetime import UTC, datetime

from models import LeaveRequest, LeaveStatus, Resignation, ResignationStatus
from repositories import LeaveRequestRepository, ResignationRepository

from .base import MemoryCollection


class MemoryResignationRepository(ResignationRepository):
    def __init__(self) -> None:
        self.resignations: MemoryCollection[Resignation] = MemoryCollection()

    def get(self, resignation_id: str) -> Resignation | None:
        return self.resignations.get(resignation_id)

    def get_all(self, status: ResignationStatus | None = None) -> Generator[Resignation, None, None]:
        rows = self.resignations.rows(lambda r: status is None or r.status == status)
        yield from sorted(rows, key=lambda r: r.created_at, reverse=True)

    def create(self, resignation: Resignation) -> None:
        self.resignations.insert(resignation)

    def update_status(
        self,
        resignation_id: str,
        status: ResignationStatus,
        *,
        expected: ResignationStatus,
        comments: str | None = None,
    ) -> bool:
        def apply(resignation: Resignation) -> bool:
            if resignation.status != expected:
                return False
            resignation.status = status
            resignation.updated_at = datetime.now(UTC)
            if comments is not None:
                resignation.comments = comments
            return True

        return self.resignations.modify(resignation_id, apply)

    def delete_all(self) -> None:
        self.resignations.clear()


class MemoryLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self) -> None:
        self.leaves: MemoryCollection[LeaveRequest] = MemoryCollection()

    def get(self, leave_id: str) -> LeaveRequest | None:
        return self.leaves.get(leave_id)

    def get_all(
        self, status: LeaveStatus | None = None, employee_id: str | None = None
    ) -> Generator[LeaveRequest, None, None]:
        rows = self.leaves.rows(
            lambda r: (status is None or r.status == status) and (employee_id is None or r.employee_id == employee_id)
        )
        yield from sorted(rows, key=lambda r: r.created_at, reverse=True)

    def create(self, leave: LeaveRequest) -> None:
        self.leaves.insert(leave)

    def update_status(self, leave_id: str, status: LeaveStatus, *, expected: LeaveStatus) -> bool:
        def apply(leave: LeaveRequest) -> bool:
            if leave.status != expected:
                return False
            leave.status = status
            return True

        return self.leaves.modify(leave_id, apply)

    def delete_all(self) -> None:
        self.leaves.clear()
