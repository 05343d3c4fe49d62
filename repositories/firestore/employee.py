import logging
from collections.abc import Generator
from typing import Any, cast

from google.cloud.firestore import Client as FirestoreClient  # type: ignore[import-untyped]
from google.cloud.firestore import transactional
from google.cloud.firestore_v1 import DocumentSnapshot, Transaction
from google.cloud.firestore_v1.base_query import FieldFilter

from models import Employee
from repositories import DuplicateEmailError, EmployeeRepository, EntityNotFoundError

from .util import delete_collection, from_document, to_document

COLLECTION = 'employees'


class FirestoreEmployeeRepository(EmployeeRepository):
    def __init__(self, database: str) -> None:
        self.db = FirestoreClient(database=database)
        self.logger = logging.getLogger(self.__class__.__name__)

    def doc_to_employee(self, doc: DocumentSnapshot) -> Employee:
        return from_document(Employee, doc)

    def get(self, employee_id: str) -> Employee | None:
        doc = self.db.collection(COLLECTION).document(employee_id).get()

        if not doc.exists:
            return None

        return self.doc_to_employee(doc)

    def get_all(self) -> Generator[Employee, None, None]:
        stream: Generator[DocumentSnapshot, None, None] = self.db.collection(COLLECTION).order_by('name').stream()
        for doc in stream:
            yield self.doc_to_employee(doc)

    def _find_by_email(self, email: str, transaction: Transaction | None = None) -> DocumentSnapshot | None:
        docs = (
            self.db.collection(COLLECTION).where(filter=FieldFilter('email', '==', email)).get(transaction=transaction)  # type: ignore[no-untyped-call]
        )

        if len(docs) == 0:
            return None

        if len(docs) > 1:
            self.logger.error('Multiple employees found with email %s', email)
            return None

        return cast(DocumentSnapshot, docs[0])

    def find_by_email(self, email: str) -> Employee | None:
        doc = self._find_by_email(email)

        if doc is None:
            return None

        return self.doc_to_employee(doc)

    def create(self, employee: Employee) -> None:
        employee_dict = to_document(employee, 'id')
        employee_ref = self.db.collection(COLLECTION).document(employee.id)

        @transactional  # type: ignore[misc]
        def create_employee_transaction(transaction: Transaction, employee_dict_trans: dict[str, Any]) -> None:
            if self._find_by_email(employee_dict_trans['email'], transaction) is not None:
                raise DuplicateEmailError(employee_dict_trans['email'])

            transaction.create(employee_ref, employee_dict_trans)

        create_employee_transaction(self.db.transaction(), employee_dict)

    def delete(self, employee_id: str) -> None:
        self.db.collection(COLLECTION).document(employee_id).delete()

    def adjust_leave_balance(self, employee_id: str, delta: int) -> int:
        employee_ref = self.db.collection(COLLECTION).document(employee_id)

        @transactional  # type: ignore[misc]
        def adjust_transaction(transaction: Transaction) -> int:
            snapshot = employee_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise EntityNotFoundError('Employee', employee_id)

            current = int(cast(dict[str, Any], snapshot.to_dict()).get('leave_balance') or 0)
            balance = max(current + delta, 0)
            transaction.update(employee_ref, {'leave_balance': balance})
            return balance - current

        return cast(int, adjust_transaction(self.db.transaction()))

    def delete_all(self) -> None:
        delete_collection(self.db.collection(COLLECTION))
