import base64
import binascii
import json
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from flask import Blueprint, Response, request
from flask.views import View
from marshmallow import ValidationError

from lifecycle import NotFoundError, PreconditionError, TransitionResult
from models import Role
from repositories import StaleStatusError

T = TypeVar('T')
ViewType = TypeVar('ViewType', bound=type[View])

USERINFO_HEADER = 'X-Apigateway-Api-Userinfo'
APPROVER_ROLES = {Role.ADMIN.value, Role.MANAGER.value}


def class_route(blueprint: Blueprint, rule: str, **options: Any) -> Callable[[ViewType], ViewType]:
    def decorator(cls: ViewType) -> ViewType:
        blueprint.add_url_rule(rule, view_func=cls.as_view(cls.__name__), **options)
        return cls

    return decorator


def json_response(data: Any, status: int) -> Response:
    return Response(json.dumps(data), status=status, mimetype='application/json')


def error_response(message: str, status: int) -> Response:
    return json_response({'code': status, 'message': message}, status)


def validation_error_response(err: ValidationError) -> Response:
    messages: list[str] = []
    for field_name, field_errors in err.normalized_messages().items():
        if isinstance(field_errors, dict):
            field_errors = [str(e) for e in field_errors.values()]
        for error in field_errors:
            messages.append(f'Invalid value for {field_name}: {error}')

    return error_response(' '.join(messages), 400)


def read_token() -> dict[str, Any] | None:
    encoded = request.headers.get(USERINFO_HEADER)
    if encoded is None:
        return None

    try:
        # The gateway strips base64 padding
        token = json.loads(base64.urlsafe_b64decode(encoded + '=' * (-len(encoded) % 4)))
    except (binascii.Error, ValueError):
        return None

    return token if isinstance(token, dict) else None


def requires_token(f: Callable[..., Response]) -> Callable[..., Response]:
    @wraps(f)
    def decorated(*args: Any, **kwargs: Any) -> Response:
        token = read_token()
        if token is None or 'sub' not in token:
            return error_response('Token not found', 401)

        return f(*args, token=token, **kwargs)

    return decorated


def requires_approver(f: Callable[..., Response]) -> Callable[..., Response]:
    @wraps(f)
    def decorated(*args: Any, token: dict[str, Any], **kwargs: Any) -> Response:
        if token.get('role') not in APPROVER_ROLES:
            return error_response('Forbidden: You do not have access to this resource.', 403)

        return f(*args, token=token, **kwargs)

    return decorated


def transition_response(result: TransitionResult[T], serialize: Callable[[T], Any], status: int = 200) -> Response:
    if result.success:
        body = {
            'message': result.message,
            'alreadyApplied': result.short_circuited,
            'data': None if result.data is None else serialize(result.data),
        }
        return json_response(body, 200 if result.short_circuited else status)

    if result.manual_intervention:
        return json_response({'code': 500, 'message': result.message, 'manualIntervention': True}, 500)

    if isinstance(result.error, NotFoundError):
        return error_response(result.message, 404)

    # Precondition not met, or lost a race to a conflicting decision
    if isinstance(result.error, PreconditionError | StaleStatusError):
        return error_response(result.message, 409)

    return error_response(result.message, 500)
