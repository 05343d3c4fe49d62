from google.cloud.firestore import Client as FirestoreClient  # type: ignore[import-untyped]
from google.cloud.firestore_v1.base_query import FieldFilter

from repositories import RecipientResolver


class FirestoreRecipientResolver(RecipientResolver):
    def __init__(self, database: str) -> None:
        self.db = FirestoreClient(database=database)

    def manager_ids(self) -> list[str]:
        query = self.db.collection('employees').where(filter=FieldFilter('is_manager', '==', True))  # type: ignore[no-untyped-call]
        return [doc.id for doc in query.stream()]

    def admin_ids(self) -> list[str]:
        return [doc.id for doc in self.db.collection('admin_users').stream()]
