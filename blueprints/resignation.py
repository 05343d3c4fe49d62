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
from lifecycle import ApprovedResignation, ResignationTransitions
from models import Resignation

from .archive import archived_to_dict
from .util import (
    class_route,
    error_response,
    requires_approver,
    requires_token,
    transition_response,
    validation_error_response,
)

blp = Blueprint('Resignations', __name__)


def resignation_to_dict(resignation: Resignation) -> dict[str, Any]:
    return {
        'id': resignation.id,
        'employeeId': resignation.employee_id,
        'employeeName': resignation.employee_name,
        'resignationDate': resignation.resignation_date.isoformat(),
        'lastWorkingDate': resignation.last_working_date.isoformat(),
        'noticePeriod': resignation.notice_period,
        'reason': resignation.reason,
        'comments': resignation.comments,
        'status': resignation.status.value,
    }


def approved_to_dict(approved: ApprovedResignation) -> dict[str, Any]:
    return {
        'resignation': resignation_to_dict(approved.resignation),
        'archivedEmployee': None if approved.archived_employee is None else archived_to_dict(approved.archived_employee),
    }


@dataclass
class SubmitResignationBody:
    resignationDate: date  # noqa: N815
    lastWorkingDate: date  # noqa: N815
    reason: str | None = field(default=None, metadata={'validate': marshmallow.validate.Length(max=2000)})


@class_route(blp, '/api/v1/resignations')
class SubmitResignation(MethodView):
    init_every_request = False

    @requires_token
    def post(
        self,
        token: dict[str, Any],
        resignations: ResignationTransitions = Provide[Container.resignations],
    ) -> Response:
        submit_schema = marshmallow_dataclass.class_schema(SubmitResignationBody)()
        req_json = request.get_json(silent=True)

        if req_json is None:
            return error_response('The request body could not be parsed as valid JSON.', 400)

        try:
            data: SubmitResignationBody = submit_schema.load(req_json)
        except ValidationError as err:
            return validation_error_response(err)

        if data.lastWorkingDate < data.resignationDate:
            return error_response('Invalid value for lastWorkingDate: Must not be before resignationDate.', 400)

        result = resignations.submit(
            token['sub'],
            resignation_date=data.resignationDate,
            last_working_date=data.lastWorkingDate,
            reason=data.reason,
        )
        return transition_response(result, resignation_to_dict, 201)


@dataclass
class ApproveBody:
    notes: str | None = field(default=None, metadata={'validate': marshmallow.validate.Length(max=2000)})


@dataclass
class RejectBody:
    comments: str | None = field(default=None, metadata={'validate': marshmallow.validate.Length(max=2000)})


@class_route(blp, '/api/v1/resignations/<resignation_id>/approve')
class ApproveResignation(MethodView):
    init_every_request = False

    @requires_token
    @requires_approver
    def post(
        self,
        resignation_id: str,
        token: dict[str, Any],
        resignations: ResignationTransitions = Provide[Container.resignations],
    ) -> Response:
        approve_schema = marshmallow_dataclass.class_schema(ApproveBody)()

        # An empty body is fine, notes are optional
        try:
            data: ApproveBody = approve_schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return validation_error_response(err)

        result = resignations.approve(
            resignation_id,
            archived_by=token.get('name') or token['sub'],
            actor_id=token['sub'],
            notes=data.notes,
        )
        return transition_response(result, approved_to_dict)


@class_route(blp, '/api/v1/resignations/<resignation_id>/reject')
class RejectResignation(MethodView):
    init_every_request = False

    @requires_token
    @requires_approver
    def post(
        self,
        resignation_id: str,
        token: dict[str, Any],
        resignations: ResignationTransitions = Provide[Container.resignations],
    ) -> Response:
        reject_schema = marshmallow_dataclass.class_schema(RejectBody)()

        try:
            data: RejectBody = reject_schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return validation_error_response(err)

        result = resignations.reject(resignation_id, comments=data.comments, actor_id=token['sub'])
        return transition_response(result, resignation_to_dict)


@class_route(blp, '/api/v1/resignations/<resignation_id>/archive')
class ArchiveResignation(MethodView):
    init_every_request = False

    @requires_token
    @requires_approver
    def post(
        self,
        resignation_id: str,
        token: dict[str, Any],  # noqa: ARG002
        resignations: ResignationTransitions = Provide[Container.resignations],
    ) -> Response:
        return transition_response(resignations.archive(resignation_id), resignation_to_dict)
