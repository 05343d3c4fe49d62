from collections.abc import Generator
from datetime import UTC, datetime
from typing import Any, cast

from google.cloud.firestore import Client as FirestoreClient  # type: ignore[import-untyped]
from google.cloud.firestore import transactional
from google.cloud.firestore_v1 import DocumentSnapshot, Query, Transaction
from google.cloud.firestore_v1.base_query import FieldFilter

from models import Resignation, ResignationStatus
from repositories import ResignationRepository

from .util import delete_collection, from_document, to_document

COLLECTION = 'resignations'


class FirestoreResignationRepository(ResignationRepository):
    def __init__(self, database: str) -> None:
        self.db = FirestoreClient(database=database)

    def doc_to_resignation(self, doc: DocumentSnapshot) -> Resignation:
        return from_document(Resignation, doc)

    def get(self, resignation_id: str) -> Resignation | None:
        doc = self.db.collection(COLLECTION).document(resignation_id).get()

        if not doc.exists:
            return None

        return self.doc_to_resignation(doc)

    def get_all(self, status: ResignationStatus | None = None) -> Generator[Resignation, None, None]:
        query: Query = self.db.collection(COLLECTION)
        if status is not None:
            query = query.where(filter=FieldFilter('status', '==', status.value))  # type: ignore[no-untyped-call]

        for doc in query.order_by('created_at', direction=Query.DESCENDING).stream():
            yield self.doc_to_resignation(doc)

    def create(self, resignation: Resignation) -> None:
        self.db.collection(COLLECTION).document(resignation.id).create(to_document(resignation, 'id'))

    def update_status(
        self,
        resignation_id: str,
        status: ResignationStatus,
        *,
        expected: ResignationStatus,
        comments: str | None = None,
    ) -> bool:
        resignation_ref = self.db.collection(COLLECTION).document(resignation_id)

        update: dict[str, Any] = {'status': status.value, 'updated_at': datetime.now(UTC)}
        if comments is not None:
            update['comments'] = comments

        @transactional  # type: ignore[misc]
        def update_status_transaction(transaction: Transaction) -> bool:
            snapshot = resignation_ref.get(transaction=transaction)
            data = snapshot.to_dict() if snapshot.exists else None
            if data is None or data.get('status') != expected.value:
                return False

            transaction.update(resignation_ref, update)
            return True

        return cast(bool, update_status_transaction(self.db.transaction()))

    def delete_all(self) -> None:
        delete_collection(self.db.collection(COLLECTION))
