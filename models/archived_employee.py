from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class ArchivedEmployee:
    id: str
    employee_id: str
    name: str
    email: str
    archived_at: datetime
    archived_by: str
    employee_code: str | None = None
    position: str | None = None
    department: str | None = None
    phone: str | None = None
    salary: float = 0.0
    bank_name: str | None = None
    bank_account: str | None = None
    payment_mode: str | None = None
    join_date: date | None = None
    leave_balance: int = 0
    can_login: bool = False
    is_manager: bool = False
    resignation_id: str | None = None
    resignation_date: date | None = None
    last_working_date: date | None = None
    resignation_reason: str | None = None
    notes: str | None = None
