import logging
from collections.abc import Generator

from models import ArchivedEmployee, Employee
from repositories import ArchivedEmployeeRepository, DuplicateEmailError, EmployeeRepository, EntityNotFoundError

from .base import MemoryCollection


class MemoryEmployeeRepository(EmployeeRepository):
    def __init__(self) -> None:
        self.employees: MemoryCollection[Employee] = MemoryCollection()
        self.logger = logging.getLogger(self.__class__.__name__)

    def get(self, employee_id: str) -> Employee | None:
        return self.employees.get(employee_id)

    def get_all(self) -> Generator[Employee, None, None]:
        yield from sorted(self.employees.rows(), key=lambda e: e.name)

    def find_by_email(self, email: str) -> Employee | None:
        matches = list(self.employees.rows(lambda e: e.email == email))

        if len(matches) > 1:
            self.logger.error('Multiple employees found with email %s', email)
            return None

        return matches[0] if matches else None

    def create(self, employee: Employee) -> None:
        with self.employees.lock:
            if self.find_by_email(employee.email) is not None:
                raise DuplicateEmailError(employee.email)

            self.employees.insert(employee)

    def delete(self, employee_id: str) -> None:
        self.employees.remove(employee_id)

    def adjust_leave_balance(self, employee_id: str, delta: int) -> int:
        applied = 0

        def apply(employee: Employee) -> bool:
            nonlocal applied
            balance = max(employee.leave_balance + delta, 0)
            applied = balance - employee.leave_balance
            employee.leave_balance = balance
            return True

        if not self.employees.modify(employee_id, apply):
            raise EntityNotFoundError('Employee', employee_id)

        return applied

    def delete_all(self) -> None:
        self.employees.clear()


class MemoryArchivedEmployeeRepository(ArchivedEmployeeRepository):
    def __init__(self) -> None:
        self.archived: MemoryCollection[ArchivedEmployee] = MemoryCollection()

    def get(self, archived_id: str) -> ArchivedEmployee | None:
        return self.archived.get(archived_id)

    def get_all(self) -> Generator[ArchivedEmployee, None, None]:
        yield from sorted(self.archived.rows(), key=lambda a: a.archived_at, reverse=True)

    def find_by_resignation(self, resignation_id: str) -> ArchivedEmployee | None:
        return next(self.archived.rows(lambda a: a.resignation_id == resignation_id), None)

    def create(self, archived: ArchivedEmployee) -> None:
        self.archived.insert(archived)

    def update_notes(self, archived_id: str, notes: str) -> None:
        def apply(archived: ArchivedEmployee) -> bool:
            archived.notes = notes
            return True

        self.archived.modify(archived_id, apply)

    def delete(self, archived_id: str) -> None:
        self.archived.remove(archived_id)

    def delete_all(self) -> None:
        self.archived.clear()
