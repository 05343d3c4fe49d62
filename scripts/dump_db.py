import os

from google.cloud.firestore import Client as FirestoreClient  # type: ignore[import-untyped]

FIRESTORE_DATABASE = os.getenv('FIRESTORE_DATABASE') or '(default)'

COLLECTIONS = [
    'employees',
    'archived_employees',
    'resignations',
    'leave_requests',
    'attendance',
    'notifications',
    'admin_users',
]

db = FirestoreClient(database=FIRESTORE_DATABASE)

for name in COLLECTIONS:
    print(f'#### {name} ####')

    for doc in db.collection(name).stream():
        print(f'{doc.id}')

        for k, v in doc.to_dict().items():
            print(f'    {k}: {v}')
        print('')
    print('')
