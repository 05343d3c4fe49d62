class DuplicateEmailError(Exception):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"A user with the email '{email}' already exists.")


class DuplicateAttendanceError(Exception):
    def __init__(self, employee_id: str, day: str) -> None:
        self.employee_id = employee_id
        self.day = day
        super().__init__(f"An attendance record for employee '{employee_id}' on {day} already exists.")


class StaleStatusError(Exception):
    def __init__(self, entity: str, entity_id: str, expected: str, actual: str | None) -> None:
        self.entity = entity
        self.entity_id = entity_id
        self.expected = expected
        self.actual = actual
        super().__init__(f"{entity} '{entity_id}' is in status '{actual}', expected '{expected}'.")


class EntityNotFoundError(Exception):
    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' does not exist.")
