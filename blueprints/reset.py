from dependency_injector.wiring import Provide, inject
from flask import Blueprint, Response, request
from flask.views import MethodView

import demo
from containers import Container
from repositories import (
    ArchivedEmployeeRepository,
    AttendanceRepository,
    EmployeeRepository,
    LeaveRequestRepository,
    NotificationRepository,
    ResignationRepository,
)

from .util import class_route, json_response

blp = Blueprint('Reset database', __name__)


@class_route(blp, '/api/v1/reset')
class ResetDB(MethodView):
    init_every_request = False

    @inject
    def post(  # noqa: PLR0913
        self,
        employee_repo: EmployeeRepository = Provide[Container.employee_repo],
        archive_repo: ArchivedEmployeeRepository = Provide[Container.archive_repo],
        resignation_repo: ResignationRepository = Provide[Container.resignation_repo],
        leave_repo: LeaveRequestRepository = Provide[Container.leave_repo],
        attendance_repo: AttendanceRepository = Provide[Container.attendance_repo],
        notification_repo: NotificationRepository = Provide[Container.notification_repo],
    ) -> Response:
        employee_repo.delete_all()
        archive_repo.delete_all()
        resignation_repo.delete_all()
        leave_repo.delete_all()
        attendance_repo.delete_all()
        notification_repo.delete_all()

        if request.args.get('demo', 'false') == 'true':
            for employee in demo.employees:
                employee_repo.create(employee)

            for archived in demo.archived_employees:
                archive_repo.create(archived)

            for resignation in demo.resignations:
                resignation_repo.create(resignation)

            for leave in demo.leave_requests:
                leave_repo.create(leave)

        return json_response({'status': 'Ok'}, 200)
