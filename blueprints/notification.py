from typing import Any

from dependency_injector.wiring import Provide
from flask import Blueprint, Response, request
from flask.views import MethodView

from containers import Container
from models import Notification
from repositories import NotificationRepository

from .util import class_route, error_response, json_response, requires_token

blp = Blueprint('Notifications', __name__)


def notification_to_dict(notification: Notification) -> dict[str, Any]:
    return {
        'id': notification.id,
        'type': notification.type.value,
        'title': notification.title,
        'message': notification.message,
        'data': notification.data,
        'link': notification.link,
        'isRead': notification.is_read,
        'createdAt': notification.created_at.isoformat(),
    }


@class_route(blp, '/api/v1/notifications')
class ListNotifications(MethodView):
    init_every_request = False

    @requires_token
    def get(
        self, token: dict[str, Any], notification_repo: NotificationRepository = Provide[Container.notification_repo]
    ) -> Response:
        unread_only = request.args.get('unread', 'false') == 'true'
        notifications = notification_repo.get_all(token['sub'], unread_only=unread_only)

        return json_response([notification_to_dict(n) for n in notifications], 200)


@class_route(blp, '/api/v1/notifications/<notification_id>/read')
class ReadNotification(MethodView):
    init_every_request = False

    @requires_token
    def post(
        self,
        notification_id: str,
        token: dict[str, Any],
        notification_repo: NotificationRepository = Provide[Container.notification_repo],
    ) -> Response:
        notification = notification_repo.get(notification_id)

        if notification is None or notification.user_id != token['sub']:
            return error_response('Notification not found', 404)

        notification_repo.mark_read(notification_id)

        return json_response({'status': 'Ok'}, 200)


@class_route(blp, '/api/v1/notifications/read')
class ReadAllNotifications(MethodView):
    init_every_request = False

    @requires_token
    def post(
        self, token: dict[str, Any], notification_repo: NotificationRepository = Provide[Container.notification_repo]
    ) -> Response:
        count = notification_repo.mark_all_read(token['sub'])

        return json_response({'status': 'Ok', 'count': count}, 200)
