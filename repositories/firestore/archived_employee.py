import logging
from collections.abc import Generator
from typing import cast

from google.cloud.firestore import Client as FirestoreClient  # type: ignore[import-untyped]
from google.cloud.firestore_v1 import DocumentSnapshot, Query
from google.cloud.firestore_v1.base_query import FieldFilter

from models import ArchivedEmployee
from repositories import ArchivedEmployeeRepository

from .util import delete_collection, from_document, to_document

COLLECTION = 'archived_employees'


class FirestoreArchivedEmployeeRepository(ArchivedEmployeeRepository):
    def __init__(self, database: str) -> None:
        self.db = FirestoreClient(database=database)
        self.logger = logging.getLogger(self.__class__.__name__)

    def doc_to_archived(self, doc: DocumentSnapshot) -> ArchivedEmployee:
        return from_document(ArchivedEmployee, doc)

    def get(self, archived_id: str) -> ArchivedEmployee | None:
        doc = self.db.collection(COLLECTION).document(archived_id).get()

        if not doc.exists:
            return None

        return self.doc_to_archived(doc)

    def get_all(self) -> Generator[ArchivedEmployee, None, None]:
        query = self.db.collection(COLLECTION).order_by('archived_at', direction=Query.DESCENDING)
        for doc in query.stream():
            yield self.doc_to_archived(doc)

    def find_by_resignation(self, resignation_id: str) -> ArchivedEmployee | None:
        docs = (
            self.db.collection(COLLECTION).where(filter=FieldFilter('resignation_id', '==', resignation_id)).get()  # type: ignore[no-untyped-call]
        )

        if len(docs) == 0:
            return None

        if len(docs) > 1:
            self.logger.error('Multiple archive records found for resignation %s', resignation_id)

        return self.doc_to_archived(cast(DocumentSnapshot, docs[0]))

    def create(self, archived: ArchivedEmployee) -> None:
        self.db.collection(COLLECTION).document(archived.id).create(to_document(archived, 'id'))

    def update_notes(self, archived_id: str, notes: str) -> None:
        self.db.collection(COLLECTION).document(archived_id).update({'notes': notes})

    def delete(self, archived_id: str) -> None:
        self.db.collection(COLLECTION).document(archived_id).delete()

    def delete_all(self) -> None:
        delete_collection(self.db.collection(COLLECTION))
