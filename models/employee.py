from dataclasses import dataclass
from datetime import date


@dataclass
class Employee:
    id: str
    name: str
    email: str
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
    can_login: bool = True
    is_manager: bool = False
