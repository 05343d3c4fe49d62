from collections.abc import Generator
from typing import cast

from google.cloud.firestore import Client as FirestoreClient  # type: ignore[import-untyped]
from google.cloud.firestore import transactional
from google.cloud.firestore_v1 import DocumentSnapshot, Query, Transaction
from google.cloud.firestore_v1.base_query import FieldFilter

from models import LeaveRequest, LeaveStatus
from repositories import LeaveRequestRepository

from .util import delete_collection, from_document, to_document

COLLECTION = 'leave_requests'


class FirestoreLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, database: str) -> None:
        self.db = FirestoreClient(database=database)

    def doc_to_leave(self, doc: DocumentSnapshot) -> LeaveRequest:
        return from_document(LeaveRequest, doc)

    def get(self, leave_id: str) -> LeaveRequest | None:
        doc = self.db.collection(COLLECTION).document(leave_id).get()

        if not doc.exists:
            return None

        return self.doc_to_leave(doc)

    def get_all(
        self, status: LeaveStatus | None = None, employee_id: str | None = None
    ) -> Generator[LeaveRequest, None, None]:
        query: Query = self.db.collection(COLLECTION)
        if status is not None:
            query = query.where(filter=FieldFilter('status', '==', status.value))  # type: ignore[no-untyped-call]
        if employee_id is not None:
            query = query.where(filter=FieldFilter('employee_id', '==', employee_id))  # type: ignore[no-untyped-call]

        for doc in query.order_by('created_at', direction=Query.DESCENDING).stream():
            yield self.doc_to_leave(doc)

    def create(self, leave: LeaveRequest) -> None:
        self.db.collection(COLLECTION).document(leave.id).create(to_document(leave, 'id'))

    def update_status(self, leave_id: str, status: LeaveStatus, *, expected: LeaveStatus) -> bool:
        leave_ref = self.db.collection(COLLECTION).document(leave_id)

        @transactional  # type: ignore[misc]
        def update_status_transaction(transaction: Transaction) -> bool:
            snapshot = leave_ref.get(transaction=transaction)
            data = snapshot.to_dict() if snapshot.exists else None
            if data is None or data.get('status') != expected.value:
                return False

            transaction.update(leave_ref, {'status': status.value})
            return True

        return cast(bool, update_status_transaction(self.db.transaction()))

    def delete_all(self) -> None:
        delete_collection(self.db.collection(COLLECTION))
