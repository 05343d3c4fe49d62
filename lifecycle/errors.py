class TransitionError(Exception):
    pass


class PreconditionError(TransitionError):
    """The transition cannot start; nothing was written."""


class NotFoundError(PreconditionError):
    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' not found")


class InvalidStatusError(PreconditionError):
    def __init__(self, entity: str, entity_id: str, status: str, action: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        self.status = status
        super().__init__(f"Cannot {action} {entity.lower()} '{entity_id}' in status '{status}'")


class AlreadyClockedInError(PreconditionError):
    def __init__(self, employee_id: str) -> None:
        self.employee_id = employee_id
        super().__init__('Already clocked in today')


class NoOpenSessionError(PreconditionError):
    def __init__(self, employee_id: str) -> None:
        self.employee_id = employee_id
        super().__init__('No open session to clock out of')
