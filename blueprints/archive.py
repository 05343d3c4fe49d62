from dataclasses import dataclass, field
from typing import Any

import marshmallow.validate
import marshmallow_dataclass
from dependency_injector.wiring import Provide
from flask import Blueprint, Response, request
from flask.views import MethodView
from marshmallow import ValidationError

from containers import Container
from lifecycle import ArchiveTransitions
from models import ArchivedEmployee, Employee

from .util import (
    class_route,
    error_response,
    requires_approver,
    requires_token,
    transition_response,
    validation_error_response,
)

blp = Blueprint('Archive', __name__)


def employee_to_dict(employee: Employee) -> dict[str, Any]:
    return {
        'id': employee.id,
        'name': employee.name,
        'email': employee.email,
        'employeeCode': employee.employee_code,
        'position': employee.position,
        'department': employee.department,
        'joinDate': None if employee.join_date is None else employee.join_date.isoformat(),
        'leaveBalance': employee.leave_balance,
        'canLogin': employee.can_login,
        'isManager': employee.is_manager,
    }


def archived_to_dict(archived: ArchivedEmployee) -> dict[str, Any]:
    return {
        'id': archived.id,
        'employeeId': archived.employee_id,
        'name': archived.name,
        'email': archived.email,
        'employeeCode': archived.employee_code,
        'position': archived.position,
        'department': archived.department,
        'resignationId': archived.resignation_id,
        'resignationDate': None if archived.resignation_date is None else archived.resignation_date.isoformat(),
        'lastWorkingDate': None if archived.last_working_date is None else archived.last_working_date.isoformat(),
        'resignationReason': archived.resignation_reason,
        'archivedAt': archived.archived_at.isoformat(),
        'archivedBy': archived.archived_by,
        'notes': archived.notes,
    }


@dataclass
class NotesBody:
    notes: str = field(metadata={'validate': marshmallow.validate.Length(max=2000)})


@class_route(blp, '/api/v1/archive/<archived_id>/reinstate')
class ReinstateEmployee(MethodView):
    init_every_request = False

    @requires_token
    @requires_approver
    def post(
        self,
        archived_id: str,
        token: dict[str, Any],
        archive: ArchiveTransitions = Provide[Container.archive],
    ) -> Response:
        result = archive.reinstate(archived_id, actor_id=token['sub'])
        return transition_response(result, employee_to_dict, 201)


@class_route(blp, '/api/v1/archive/<archived_id>')
class PurgeArchivedEmployee(MethodView):
    init_every_request = False

    @requires_token
    @requires_approver
    def delete(
        self,
        archived_id: str,
        token: dict[str, Any],  # noqa: ARG002
        archive: ArchiveTransitions = Provide[Container.archive],
    ) -> Response:
        return transition_response(archive.purge(archived_id), archived_to_dict)


@class_route(blp, '/api/v1/archive/<archived_id>/notes')
class ArchivedEmployeeNotes(MethodView):
    init_every_request = False

    @requires_token
    @requires_approver
    def put(
        self,
        archived_id: str,
        token: dict[str, Any],  # noqa: ARG002
        archive: ArchiveTransitions = Provide[Container.archive],
    ) -> Response:
        notes_schema = marshmallow_dataclass.class_schema(NotesBody)()
        req_json = request.get_json(silent=True)

        if req_json is None:
            return error_response('The request body could not be parsed as valid JSON.', 400)

        try:
            data: NotesBody = notes_schema.load(req_json)
        except ValidationError as err:
            return validation_error_response(err)

        return transition_response(archive.update_notes(archived_id, data.notes), archived_to_dict)
