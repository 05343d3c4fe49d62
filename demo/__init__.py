from .data import archived_employees, employees, leave_requests, resignations

__all__ = ['archived_employees', 'employees', 'leave_requests', 'resignations']
