import base64
import json
from typing import Any, cast

from faker import Faker
from unittest_parametrize import ParametrizedTestCase
from werkzeug.test import TestResponse

from app import create_app
from repositories import AttendanceRepository


class TestAttendanceApi(ParametrizedTestCase):
    CLOCK_IN_API_URL = '/api/v1/attendance/clock-in'
    CLOCK_OUT_API_URL = '/api/v1/attendance/clock-out'
    TODAY_API_URL = '/api/v1/attendance/today'

    def setUp(self) -> None:
        self.faker = Faker()
        self.app = create_app()
        self.app.container.config.store.backend.override('memory')
        self.client = self.app.test_client()

        self.attendance_repo: AttendanceRepository = self.app.container.attendance_repo()

        self.token = {'sub': cast(str, self.faker.uuid4()), 'role': 'employee', 'name': self.faker.name()}

    def tearDown(self) -> None:
        self.app.container.unwire()

    def headers(self) -> dict[str, str]:
        return {'X-Apigateway-Api-Userinfo': base64.urlsafe_b64encode(json.dumps(self.token).encode()).decode()}

    def call_clock_in_api(self) -> TestResponse:
        return self.client.post(self.CLOCK_IN_API_URL, headers=self.headers())

    def call_clock_out_api(self, payload: dict[str, Any] | None = None) -> TestResponse:
        return self.client.post(self.CLOCK_OUT_API_URL, json=payload, headers=self.headers())

    def test_clock_in(self) -> None:
        resp = self.call_clock_in_api()

        self.assertEqual(resp.status_code, 201)
        resp_data = json.loads(resp.get_data())
        self.assertEqual(resp_data['message'], 'Clocked in successfully')
        self.assertEqual(resp_data['data']['employeeId'], self.token['sub'])
        self.assertEqual(resp_data['data']['employeeName'], self.token['name'])
        self.assertEqual(resp_data['data']['status'], 'present')
        self.assertIsNotNone(resp_data['data']['clockIn'])
        self.assertIsNone(resp_data['data']['clockOut'])

    def test_clock_in_twice(self) -> None:
        self.call_clock_in_api()
        resp = self.call_clock_in_api()

        self.assertEqual(resp.status_code, 409)
        self.assertEqual(json.loads(resp.get_data()), {'code': 409, 'message': 'Already clocked in today'})

    def test_clock_out(self) -> None:
        self.call_clock_in_api()

        resp = self.call_clock_out_api({'location': 'Head office'})

        self.assertEqual(resp.status_code, 200)
        resp_data = json.loads(resp.get_data())
        self.assertIsNotNone(resp_data['data']['clockOut'])
        self.assertEqual(resp_data['data']['notes'], 'Clock-out location: Head office')

    def test_clock_out_without_clock_in(self) -> None:
        resp = self.call_clock_out_api()

        self.assertEqual(resp.status_code, 409)
        self.assertEqual(json.loads(resp.get_data())['message'], 'No open session to clock out of')

    def test_clock_out_invalid_location(self) -> None:
        self.call_clock_in_api()

        resp = self.call_clock_out_api({'location': ''})

        self.assertEqual(resp.status_code, 400)

    def test_today(self) -> None:
        resp = self.client.get(self.TODAY_API_URL, headers=self.headers())
        self.assertEqual(resp.status_code, 404)

        self.call_clock_in_api()

        resp = self.client.get(self.TODAY_API_URL, headers=self.headers())
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(json.loads(resp.get_data())['employeeId'], self.token['sub'])

    def test_no_token(self) -> None:
        resp = self.client.post(self.CLOCK_IN_API_URL)

        self.assertEqual(resp.status_code, 401)
