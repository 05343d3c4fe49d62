import base64
import json
from datetime import UTC, datetime, timedelta
from typing import Any, cast
from unittest.mock import Mock

from faker import Faker
from unittest_parametrize import ParametrizedTestCase, parametrize
from werkzeug.test import TestResponse

from app import create_app
from lifecycle import ResignationTransitions, TransitionResult
from lifecycle.saga import CompensationFailure
from models import Employee, Resignation, ResignationStatus, Role
from repositories import ArchivedEmployeeRepository, EmployeeRepository, ResignationRepository


class TestResignationApi(ParametrizedTestCase):
    SUBMIT_API_URL = '/api/v1/resignations'
    APPROVE_API_URL = '/api/v1/resignations/{}/approve'
    REJECT_API_URL = '/api/v1/resignations/{}/reject'
    ARCHIVE_API_URL = '/api/v1/resignations/{}/archive'

    def setUp(self) -> None:
        self.faker = Faker()
        self.app = create_app()
        self.app.container.config.store.backend.override('memory')
        self.client = self.app.test_client()

        self.employee_repo: EmployeeRepository = self.app.container.employee_repo()
        self.archive_repo: ArchivedEmployeeRepository = self.app.container.archive_repo()
        self.resignation_repo: ResignationRepository = self.app.container.resignation_repo()

        self.employee = Employee(
            id=cast(str, self.faker.uuid4()),
            name=self.faker.name(),
            email=self.faker.unique.email(),
            leave_balance=8,
        )
        self.employee_repo.create(self.employee)

    def tearDown(self) -> None:
        self.app.container.unwire()

    def gen_token(self, role: Role = Role.MANAGER) -> dict[str, Any]:
        return {'sub': cast(str, self.faker.uuid4()), 'role': role.value, 'name': self.faker.name()}

    def call_api(self, url: str, token: dict[str, Any] | None, payload: dict[str, Any] | None = None) -> TestResponse:
        headers = {}
        if token is not None:
            token_encoded = base64.urlsafe_b64encode(json.dumps(token).encode()).decode()
            headers = {'X-Apigateway-Api-Userinfo': token_encoded}

        return self.client.post(url, json=payload, headers=headers)

    def add_resignation(self, status: ResignationStatus = ResignationStatus.PENDING) -> Resignation:
        resignation_date = self.faker.past_date(start_date='-10d')
        resignation = Resignation(
            id=cast(str, self.faker.uuid4()),
            employee_id=self.employee.id,
            employee_name=self.employee.name,
            resignation_date=resignation_date,
            last_working_date=resignation_date + timedelta(days=15),
            created_at=datetime.now(UTC),
            reason=self.faker.sentence(),
            status=status,
        )
        self.resignation_repo.create(resignation)
        return resignation

    def test_approve(self) -> None:
        resignation = self.add_resignation()
        token = self.gen_token()

        resp = self.call_api(self.APPROVE_API_URL.format(resignation.id), token, {'notes': 'Good luck'})

        self.assertEqual(resp.status_code, 200)
        resp_data = json.loads(resp.get_data())

        self.assertEqual(resp_data['message'], 'Resignation approved and employee archived successfully')
        self.assertFalse(resp_data['alreadyApplied'])
        self.assertEqual(resp_data['data']['resignation']['status'], 'Approved')
        self.assertEqual(resp_data['data']['resignation']['noticePeriod'], 15)
        self.assertEqual(resp_data['data']['archivedEmployee']['employeeId'], self.employee.id)
        self.assertEqual(resp_data['data']['archivedEmployee']['archivedBy'], token['name'])
        self.assertEqual(resp_data['data']['archivedEmployee']['notes'], 'Good luck')
        self.assertIsNone(self.employee_repo.get(self.employee.id))

    def test_approve_twice(self) -> None:
        resignation = self.add_resignation()

        self.call_api(self.APPROVE_API_URL.format(resignation.id), self.gen_token())
        resp = self.call_api(self.APPROVE_API_URL.format(resignation.id), self.gen_token())

        self.assertEqual(resp.status_code, 200)
        resp_data = json.loads(resp.get_data())
        self.assertTrue(resp_data['alreadyApplied'])
        self.assertEqual(len(list(self.archive_repo.get_all())), 1)

    def test_approve_no_token(self) -> None:
        resignation = self.add_resignation()

        resp = self.call_api(self.APPROVE_API_URL.format(resignation.id), None)

        self.assertEqual(resp.status_code, 401)
        self.assertEqual(json.loads(resp.get_data()), {'code': 401, 'message': 'Token not found'})

    def test_approve_forbidden(self) -> None:
        resignation = self.add_resignation()

        resp = self.call_api(self.APPROVE_API_URL.format(resignation.id), self.gen_token(Role.EMPLOYEE))

        self.assertEqual(resp.status_code, 403)
        self.assertIsNotNone(self.employee_repo.get(self.employee.id))

    def test_approve_not_found(self) -> None:
        resp = self.call_api(self.APPROVE_API_URL.format('missing'), self.gen_token(Role.ADMIN))

        self.assertEqual(resp.status_code, 404)
        self.assertEqual(json.loads(resp.get_data()), {'code': 404, 'message': "Resignation 'missing' not found"})

    def test_approve_rejected(self) -> None:
        resignation = self.add_resignation(ResignationStatus.REJECTED)

        resp = self.call_api(self.APPROVE_API_URL.format(resignation.id), self.gen_token())

        self.assertEqual(resp.status_code, 409)

    def test_approve_invalid_body(self) -> None:
        resignation = self.add_resignation()

        resp = self.call_api(self.APPROVE_API_URL.format(resignation.id), self.gen_token(), {'notes': 'x' * 2001})

        self.assertEqual(resp.status_code, 400)
        self.assertIn('Invalid value for notes', json.loads(resp.get_data())['message'])

    def test_approve_manual_intervention(self) -> None:
        transitions_mock = Mock(ResignationTransitions)
        cast(Mock, transitions_mock.approve).return_value = TransitionResult.failed(
            RuntimeError('employee store unavailable'),
            [CompensationFailure('archive employee', RuntimeError('archive store unavailable'))],
        )

        with self.app.container.resignations.override(transitions_mock):
            resp = self.call_api(self.APPROVE_API_URL.format('any'), self.gen_token())

        self.assertEqual(resp.status_code, 500)
        resp_data = json.loads(resp.get_data())
        self.assertTrue(resp_data['manualIntervention'])
        self.assertEqual(
            resp_data['message'],
            'employee store unavailable. Manual intervention required: could not undo archive employee',
        )

    @parametrize(
        ('payload', 'expected_comments'),
        [
            (None, None),
            ({'comments': 'Let us talk first'}, 'Let us talk first'),
        ],
    )
    def test_reject(self, payload: dict[str, Any] | None, expected_comments: str | None) -> None:
        resignation = self.add_resignation()

        resp = self.call_api(self.REJECT_API_URL.format(resignation.id), self.gen_token(), payload)

        self.assertEqual(resp.status_code, 200)
        resp_data = json.loads(resp.get_data())
        self.assertEqual(resp_data['data']['status'], 'Rejected')
        self.assertEqual(resp_data['data']['comments'], expected_comments)
        self.assertIsNotNone(self.employee_repo.get(self.employee.id))

    @parametrize(
        ('status', 'expected_status_code'),
        [
            (ResignationStatus.PENDING, 409),
            (ResignationStatus.REJECTED, 200),
        ],
    )
    def test_archive(self, status: ResignationStatus, expected_status_code: int) -> None:
        resignation = self.add_resignation(status)

        resp = self.call_api(self.ARCHIVE_API_URL.format(resignation.id), self.gen_token(Role.ADMIN))

        self.assertEqual(resp.status_code, expected_status_code)

    def test_submit(self) -> None:
        token = {'sub': self.employee.id, 'role': Role.EMPLOYEE.value}

        resp = self.call_api(
            self.SUBMIT_API_URL,
            token,
            {'resignationDate': '2025-01-10', 'lastWorkingDate': '2025-02-09', 'reason': 'New opportunity'},
        )

        self.assertEqual(resp.status_code, 201)
        resp_data = json.loads(resp.get_data())
        self.assertEqual(resp_data['message'], 'Resignation submitted successfully')
        self.assertEqual(resp_data['data']['employeeId'], self.employee.id)
        self.assertEqual(resp_data['data']['employeeName'], self.employee.name)
        self.assertEqual(resp_data['data']['noticePeriod'], 30)
        self.assertEqual(resp_data['data']['status'], 'Pending')

        stored = self.resignation_repo.get(resp_data['data']['id'])
        assert stored is not None
        self.assertEqual(stored.reason, 'New opportunity')

    @parametrize(
        ('payload', 'expected_message'),
        [
            ({'lastWorkingDate': '2025-02-09'}, 'Invalid value for resignationDate: Missing data for required field.'),
            (
                {'resignationDate': '2025-01-10', 'lastWorkingDate': 'soon'},
                'Invalid value for lastWorkingDate: Not a valid date.',
            ),
            (
                {'resignationDate': '2025-01-10', 'lastWorkingDate': '2025-01-09'},
                'Invalid value for lastWorkingDate: Must not be before resignationDate.',
            ),
        ],
    )
    def test_submit_invalid_body(self, payload: dict[str, Any], expected_message: str) -> None:
        token = {'sub': self.employee.id, 'role': Role.EMPLOYEE.value}

        resp = self.call_api(self.SUBMIT_API_URL, token, payload)

        self.assertEqual(resp.status_code, 400)
        self.assertEqual(json.loads(resp.get_data()), {'code': 400, 'message': expected_message})
        self.assertEqual(list(self.resignation_repo.get_all()), [])

    def test_submit_invalid_json(self) -> None:
        token = {'sub': self.employee.id, 'role': Role.EMPLOYEE.value}
        token_encoded = base64.urlsafe_b64encode(json.dumps(token).encode()).decode()

        resp = self.client.post(
            self.SUBMIT_API_URL,
            data='not json',
            content_type='application/json',
            headers={'X-Apigateway-Api-Userinfo': token_encoded},
        )

        self.assertEqual(resp.status_code, 400)
        self.assertEqual(json.loads(resp.get_data())['message'], 'The request body could not be parsed as valid JSON.')

    def test_submit_unknown_employee(self) -> None:
        payload = {'resignationDate': '2025-01-10', 'lastWorkingDate': '2025-02-09'}

        resp = self.call_api(self.SUBMIT_API_URL, self.gen_token(Role.EMPLOYEE), payload)

        self.assertEqual(resp.status_code, 404)

    def test_submit_already_pending(self) -> None:
        self.add_resignation()
        token = {'sub': self.employee.id, 'role': Role.EMPLOYEE.value}

        resp = self.call_api(self.SUBMIT_API_URL, token, {'resignationDate': '2025-01-10', 'lastWorkingDate': '2025-02-09'})

        self.assertEqual(resp.status_code, 409)
        self.assertEqual(len(list(self.resignation_repo.get_all())), 1)
