from datetime import date, time
from typing import cast

from google.api_core.exceptions import AlreadyExists
from google.cloud.firestore import Client as FirestoreClient  # type: ignore[import-untyped]
from google.cloud.firestore import transactional
from google.cloud.firestore_v1 import DocumentSnapshot, Transaction

from models import AttendanceRecord
from repositories import AttendanceRepository, DuplicateAttendanceError, attendance_id

from .util import delete_collection, from_document, to_document

COLLECTION = 'attendance'


class FirestoreAttendanceRepository(AttendanceRepository):
    def __init__(self, database: str) -> None:
        self.db = FirestoreClient(database=database)

    def doc_to_record(self, doc: DocumentSnapshot) -> AttendanceRecord:
        return from_document(AttendanceRecord, doc)

    def get(self, record_id: str) -> AttendanceRecord | None:
        doc = self.db.collection(COLLECTION).document(record_id).get()

        if not doc.exists:
            return None

        return self.doc_to_record(doc)

    def get_for_day(self, employee_id: str, day: date) -> AttendanceRecord | None:
        return self.get(attendance_id(employee_id, day))

    def create(self, record: AttendanceRecord) -> None:
        # The document id is derived from (employee, date), so create() doubles as a uniqueness constraint
        record_ref = self.db.collection(COLLECTION).document(attendance_id(record.employee_id, record.date))
        try:
            record_ref.create(to_document(record, 'id'))
        except AlreadyExists as exc:
            raise DuplicateAttendanceError(record.employee_id, record.date.isoformat()) from exc

    def close(self, record_id: str, clock_out: time, notes: str) -> bool:
        record_ref = self.db.collection(COLLECTION).document(record_id)

        @transactional  # type: ignore[misc]
        def close_transaction(transaction: Transaction) -> bool:
            snapshot = record_ref.get(transaction=transaction)
            data = snapshot.to_dict() if snapshot.exists else None
            if data is None or data.get('clock_in') is None or data.get('clock_out') is not None:
                return False

            transaction.update(record_ref, {'clock_out': clock_out.isoformat(), 'notes': notes})
            return True

        return cast(bool, close_transaction(self.db.transaction()))

    def delete_all(self) -> None:
        delete_collection(self.db.collection(COLLECTION))
