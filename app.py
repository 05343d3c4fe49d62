import logging
import os

from flask import Flask

from blueprints import (
    BlueprintArchive,
    BlueprintAttendance,
    BlueprintHealth,
    BlueprintLeave,
    BlueprintNotification,
    BlueprintReset,
    BlueprintResignation,
)
from containers import Container


class FlaskMicroservice(Flask):
    container: Container


def setup_cloud_logging() -> None:  # pragma: no cover
    import google.cloud.logging

    client = google.cloud.logging.Client()  # type: ignore[no-untyped-call]
    client.setup_logging()  # type: ignore[no-untyped-call]


def create_app() -> FlaskMicroservice:
    if os.getenv('ENABLE_CLOUD_LOGGING') == '1':
        setup_cloud_logging()  # pragma: no cover
    else:
        logging.basicConfig(level=os.getenv('LOG_LEVEL', 'INFO'))

    app = FlaskMicroservice(__name__)
    app.container = Container()

    app.container.config.firestore.database.from_env('FIRESTORE_DATABASE', '(default)')
    app.container.config.store.backend.from_env('STORE_BACKEND', 'firestore')
    app.container.config.timezone.from_env('TIMEZONE', 'UTC')
    app.container.config.notifications.background.from_value(os.getenv('NOTIFICATIONS_BACKGROUND') == '1')
    app.container.config.notifications.workers.from_env('NOTIFICATIONS_WORKERS', as_=int, default=4)
    app.container.config.notifications.admins.from_value(
        [admin_id.strip() for admin_id in os.getenv('ADMIN_USER_IDS', '').split(',') if admin_id.strip()]
    )

    app.register_blueprint(BlueprintArchive)
    app.register_blueprint(BlueprintAttendance)
    app.register_blueprint(BlueprintHealth)
    app.register_blueprint(BlueprintLeave)
    app.register_blueprint(BlueprintNotification)
    app.register_blueprint(BlueprintReset)
    app.register_blueprint(BlueprintResignation)

    return app
