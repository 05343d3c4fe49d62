from collections.abc import Generator
from datetime import UTC, datetime

from google.cloud.firestore import Client as FirestoreClient  # type: ignore[import-untyped]
from google.cloud.firestore_v1 import DocumentSnapshot, Query
from google.cloud.firestore_v1.base_query import FieldFilter

from models import Notification
from repositories import NotificationRepository

from .util import delete_collection, from_document, to_document

COLLECTION = 'notifications'


class FirestoreNotificationRepository(NotificationRepository):
    def __init__(self, database: str) -> None:
        self.db = FirestoreClient(database=database)

    def doc_to_notification(self, doc: DocumentSnapshot) -> Notification:
        return from_document(Notification, doc)

    def create(self, notification: Notification) -> None:
        self.db.collection(COLLECTION).document(notification.id).set(to_document(notification, 'id'))

    def get(self, notification_id: str) -> Notification | None:
        doc = self.db.collection(COLLECTION).document(notification_id).get()

        if not doc.exists:
            return None

        return self.doc_to_notification(doc)

    def _query(self, user_id: str, *, unread_only: bool) -> Query:
        query = self.db.collection(COLLECTION).where(filter=FieldFilter('user_id', '==', user_id))  # type: ignore[no-untyped-call]
        if unread_only:
            query = query.where(filter=FieldFilter('is_read', '==', False))  # type: ignore[no-untyped-call]
        return query

    def get_all(self, user_id: str, *, unread_only: bool = False) -> Generator[Notification, None, None]:
        query = self._query(user_id, unread_only=unread_only).order_by('created_at', direction=Query.DESCENDING)
        for doc in query.stream():
            yield self.doc_to_notification(doc)

    def mark_read(self, notification_id: str) -> None:
        self.db.collection(COLLECTION).document(notification_id).update({'is_read': True, 'read_at': datetime.now(UTC)})

    def mark_all_read(self, user_id: str) -> int:
        now = datetime.now(UTC)
        count = 0
        for doc in self._query(user_id, unread_only=True).stream():
            doc.reference.update({'is_read': True, 'read_at': now})
            count += 1
        return count

    def delete_all(self) -> None:
        delete_collection(self.db.collection(COLLECTION))
