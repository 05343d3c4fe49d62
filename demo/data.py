from datetime import UTC, date, datetime

from models import (
    ArchivedEmployee,
    Employee,
    LeaveRequest,
    LeaveStatus,
    LeaveType,
    Resignation,
    ResignationStatus,
)

# Engineering
employee_lucia = Employee(
    id='5f0d2a3c-6b1e-4a7f-9c42-1d8e7b3a6f01',
    name='Lucía Fernández Ortiz',
    email='lucia.fernandez@acme-hr.io',
    employee_code='EMP-001',
    position='Engineering Manager',
    department='Engineering',
    phone='+34 612 345 678',
    salary=72000.0,
    bank_name='Banco Sabadell',
    bank_account='ES7600810216110001234567',
    payment_mode='bank_transfer',
    join_date=date(2019, 3, 4),
    leave_balance=22,
    is_manager=True,
)

employee_tomas = Employee(
    id='a4c71e9b-2f35-4d08-8e6a-7b19c0d4e512',
    name='Tomás Herrera Vidal',
    email='tomas.herrera@acme-hr.io',
    employee_code='EMP-014',
    position='Backend Developer',
    department='Engineering',
    phone='+34 633 210 984',
    salary=48000.0,
    bank_name='CaixaBank',
    bank_account='ES9121000418450200051332',
    payment_mode='bank_transfer',
    join_date=date(2021, 9, 13),
    leave_balance=18,
)

employee_ines = Employee(
    id='c93b0f4e-8d2a-4b61-a7e5-0f3c9d1b8a27',
    name='Inés Navarro Gil',
    email='ines.navarro@acme-hr.io',
    employee_code='EMP-021',
    position='QA Engineer',
    department='Engineering',
    join_date=date(2022, 5, 2),
    leave_balance=3,
)

# Operations
employee_marco = Employee(
    id='e2816d5a-37fb-4c9e-b0d1-64a8f2e7c930',
    name='Marco Ruiz Castillo',
    email='marco.ruiz@acme-hr.io',
    employee_code='EMP-007',
    position='Operations Lead',
    department='Operations',
    join_date=date(2020, 1, 20),
    leave_balance=15,
    is_manager=True,
)

employee_paula = Employee(
    id='1b7e4c2d-9a05-4f3b-8d6c-2e1f0a9b7c48',
    name='Paula Méndez Soto',
    email='paula.mendez@acme-hr.io',
    employee_code='EMP-030',
    position='Logistics Analyst',
    department='Operations',
    join_date=date(2023, 2, 6),
    leave_balance=10,
)

employees = [employee_lucia, employee_tomas, employee_ines, employee_marco, employee_paula]

resignations = [
    Resignation(
        id='7d3f9a1e-4c6b-4e28-a05f-b9c2d1e8f364',
        employee_id=employee_tomas.id,
        employee_name=employee_tomas.name,
        resignation_date=date(2024, 11, 4),
        last_working_date=date(2024, 12, 4),
        created_at=datetime(2024, 11, 4, 9, 12, 40, tzinfo=UTC),
        reason='Relocating to another city',
    ),
    Resignation(
        id='2a8c6e0f-b1d3-4f57-9e24-c7a5b3d9f180',
        employee_id=employee_paula.id,
        employee_name=employee_paula.name,
        resignation_date=date(2024, 10, 21),
        last_working_date=date(2024, 11, 4),
        created_at=datetime(2024, 10, 21, 16, 3, 11, tzinfo=UTC),
        reason='Career change',
        comments='Notice period below the agreed minimum',
        status=ResignationStatus.REJECTED,
        updated_at=datetime(2024, 10, 23, 10, 45, 2, tzinfo=UTC),
    ),
]

leave_requests = [
    LeaveRequest(
        id='f4b2d8c6-0e1a-4d39-b7f5-3a9c8e2d1b06',
        employee_id=employee_ines.id,
        employee_name=employee_ines.name,
        start_date=date(2024, 12, 23),
        end_date=date(2024, 12, 27),
        type=LeaveType.ANNUAL,
        created_at=datetime(2024, 11, 12, 8, 30, 0, tzinfo=UTC),
        days=5,
        reason='Holidays with family',
    ),
    LeaveRequest(
        id='9e6a4c2b-7d1f-4a80-93c5-e8b0f2d4a617',
        employee_id=employee_marco.id,
        employee_name=employee_marco.name,
        start_date=date(2024, 11, 18),
        end_date=date(2024, 11, 19),
        type=LeaveType.SICK,
        created_at=datetime(2024, 11, 18, 7, 55, 21, tzinfo=UTC),
        reason='Flu',
    ),
    LeaveRequest(
        id='3c1e5a7b-9f2d-4b64-8a0e-d6c4b2f8e935',
        employee_id=employee_tomas.id,
        employee_name=employee_tomas.name,
        start_date=date(2024, 8, 5),
        end_date=date(2024, 8, 16),
        type=LeaveType.ANNUAL,
        created_at=datetime(2024, 6, 30, 12, 0, 0, tzinfo=UTC),
        days=10,
        status=LeaveStatus.APPROVED,
    ),
]

archived_employees = [
    ArchivedEmployee(
        id='b8d0f2a4-6c3e-4195-a7b9-0e2d4f6a8c13',
        employee_id='6e4c2a08-f1d3-4b5a-9c7e-8a0b2d4f6e91',
        name='Raúl Domínguez Prieto',
        email='raul.dominguez@acme-hr.io',
        archived_at=datetime(2024, 7, 31, 18, 0, 0, tzinfo=UTC),
        archived_by='Lucía Fernández Ortiz',
        employee_code='EMP-011',
        position='Frontend Developer',
        department='Engineering',
        join_date=date(2020, 6, 1),
        leave_balance=4,
        resignation_date=date(2024, 7, 1),
        last_working_date=date(2024, 7, 31),
        resignation_reason='Pursuing a master degree',
        notes='Approved resignation. Reason: Pursuing a master degree',
    ),
]
