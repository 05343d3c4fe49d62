from dataclasses import dataclass, field
from datetime import date
from typing import Any

import marshmallow.validate
import marshmallow_dataclass
from dependency_injector.wiring import Provide
from flask import Blueprint, Response, request
from flask.views import MethodView
from marshmallow import ValidationError

from containers import Container
from lifecycle import LeaveTransitions
from models import LeaveRequest, LeaveType

from .util import (
    class_route,
    error_response,
    requires_approver,
    requires_token,
    transition_response,
    validation_error_response,
)

blp = Blueprint('Leaves', __name__)


def leave_to_dict(leave: LeaveRequest) -> dict[str, Any]:
    return {
        'id': leave.id,
        'employeeId': leave.employee_id,
        'employeeName': leave.employee_name,
        'startDate': leave.start_date.isoformat(),
        'endDate': leave.end_date.isoformat(),
        'days': leave.day_count,
        'type': leave.type.value,
        'reason': leave.reason,
        'status': leave.status.value,
    }


@dataclass
class RequestLeaveBody:
    startDate: date  # noqa: N815
    endDate: date  # noqa: N815
    type: str = field(metadata={'validate': marshmallow.validate.OneOf([t.value for t in LeaveType])})
    reason: str | None = field(default=None, metadata={'validate': marshmallow.validate.Length(max=2000)})


@class_route(blp, '/api/v1/leaves')
class RequestLeave(MethodView):
    init_every_request = False

    @requires_token
    def post(self, token: dict[str, Any], leaves: LeaveTransitions = Provide[Container.leaves]) -> Response:
        leave_schema = marshmallow_dataclass.class_schema(RequestLeaveBody)()
        req_json = request.get_json(silent=True)

        if req_json is None:
            return error_response('The request body could not be parsed as valid JSON.', 400)

        try:
            data: RequestLeaveBody = leave_schema.load(req_json)
        except ValidationError as err:
            return validation_error_response(err)

        if data.endDate < data.startDate:
            return error_response('Invalid value for endDate: Must not be before startDate.', 400)

        result = leaves.request(
            token['sub'],
            start_date=data.startDate,
            end_date=data.endDate,
            leave_type=LeaveType(data.type),
            reason=data.reason,
        )
        return transition_response(result, leave_to_dict, 201)


@class_route(blp, '/api/v1/leaves/<leave_id>/approve')
class ApproveLeave(MethodView):
    init_every_request = False

    @requires_token
    @requires_approver
    def post(
        self,
        leave_id: str,
        token: dict[str, Any],
        leaves: LeaveTransitions = Provide[Container.leaves],
    ) -> Response:
        return transition_response(leaves.approve(leave_id, actor_id=token['sub']), leave_to_dict)


@class_route(blp, '/api/v1/leaves/<leave_id>/reject')
class RejectLeave(MethodView):
    init_every_request = False

    @requires_token
    @requires_approver
    def post(
        self,
        leave_id: str,
        token: dict[str, Any],
        leaves: LeaveTransitions = Provide[Container.leaves],
    ) -> Response:
        return transition_response(leaves.reject(leave_id, actor_id=token['sub']), leave_to_dict)
