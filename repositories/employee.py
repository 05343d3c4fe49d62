from collections.abc import Generator

from models import Employee


class EmployeeRepository:
    def get(self, employee_id: str) -> Employee | None:
        raise NotImplementedError  # pragma: no cover

    def get_all(self) -> Generator[Employee, None, None]:
        raise NotImplementedError  # pragma: no cover

    def find_by_email(self, email: str) -> Employee | None:
        raise NotImplementedError  # pragma: no cover

    def create(self, employee: Employee) -> None:
        raise NotImplementedError  # pragma: no cover

    def delete(self, employee_id: str) -> None:
        raise NotImplementedError  # pragma: no cover

    def adjust_leave_balance(self, employee_id: str, delta: int) -> int:
        """Add delta to the employee's leave balance, never going below zero.

        Returns the delta actually applied, which differs from the requested one
        when the floor kicks in.
        """
        raise NotImplementedError  # pragma: no cover

    def delete_all(self) -> None:
        raise NotImplementedError  # pragma: no cover
