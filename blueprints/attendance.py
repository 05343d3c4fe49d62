from dataclasses import dataclass, field
from typing import Any

import marshmallow.validate
import marshmallow_dataclass
from dependency_injector.wiring import Provide
from flask import Blueprint, Response, request
from flask.views import MethodView
from marshmallow import ValidationError

from containers import Container
from lifecycle import AttendanceSessions
from models import AttendanceRecord

from .util import class_route, error_response, json_response, requires_token, transition_response, validation_error_response

blp = Blueprint('Attendance', __name__)


def attendance_to_dict(record: AttendanceRecord) -> dict[str, Any]:
    return {
        'id': record.id,
        'employeeId': record.employee_id,
        'employeeName': record.employee_name,
        'date': record.date.isoformat(),
        'clockIn': None if record.clock_in is None else record.clock_in.isoformat(),
        'clockOut': None if record.clock_out is None else record.clock_out.isoformat(),
        'workedMinutes': int(record.worked.total_seconds() // 60),
        'status': record.status.value,
        'notes': record.notes,
    }


@dataclass
class ClockOutBody:
    location: str | None = field(default=None, metadata={'validate': marshmallow.validate.Length(min=1, max=200)})


@class_route(blp, '/api/v1/attendance/clock-in')
class ClockIn(MethodView):
    init_every_request = False

    @requires_token
    def post(self, token: dict[str, Any], attendance: AttendanceSessions = Provide[Container.attendance]) -> Response:
        result = attendance.clock_in(token['sub'], token.get('name') or token['sub'])
        return transition_response(result, attendance_to_dict, 201)


@class_route(blp, '/api/v1/attendance/clock-out')
class ClockOut(MethodView):
    init_every_request = False

    @requires_token
    def post(self, token: dict[str, Any], attendance: AttendanceSessions = Provide[Container.attendance]) -> Response:
        clock_out_schema = marshmallow_dataclass.class_schema(ClockOutBody)()

        try:
            data: ClockOutBody = clock_out_schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return validation_error_response(err)

        result = attendance.clock_out(token['sub'], location=data.location)
        return transition_response(result, attendance_to_dict)


@class_route(blp, '/api/v1/attendance/today')
class TodayAttendance(MethodView):
    init_every_request = False

    @requires_token
    def get(self, token: dict[str, Any], attendance: AttendanceSessions = Provide[Container.attendance]) -> Response:
        record = attendance.today(token['sub'])

        if record is None:
            return error_response('Not clocked in today', 404)

        return json_response(attendance_to_dict(record), 200)
