from collections.abc import Generator

from models import LeaveRequest, LeaveStatus


class LeaveRequestRepository:
    def get(self, leave_id: str) -> LeaveRequest | None:
        raise NotImplementedError  # pragma: no cover

    def get_all(
        self, status: LeaveStatus | None = None, employee_id: str | None = None
    ) -> Generator[LeaveRequest, None, None]:
        raise NotImplementedError  # pragma: no cover

    def create(self, leave: LeaveRequest) -> None:
        raise NotImplementedError  # pragma: no cover

    def update_status(self, leave_id: str, status: LeaveStatus, *, expected: LeaveStatus) -> bool:
        raise NotImplementedError  # pragma: no cover

    def delete_all(self) -> None:
        raise NotImplementedError  # pragma: no cover
