from collections.abc import Generator
from dataclasses import asdict
from datetime import date, datetime, time
from enum import Enum
from typing import Any, TypeVar, cast

import dacite
from google.cloud.firestore_v1 import CollectionReference, DocumentReference, DocumentSnapshot

T = TypeVar('T')


def _parse_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return date.fromisoformat(value)
    return value


def _parse_time(value: Any) -> Any:
    if isinstance(value, str):
        return time.fromisoformat(value)
    return value


DACITE_CONFIG = dacite.Config(
    cast=[Enum, float, int],
    type_hooks={date: _parse_date, time: _parse_time},
)


def encode_value(value: Any) -> Any:
    # Firestore has no native date or time type, only timestamps
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value
    if isinstance(value, date | time):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: encode_value(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [encode_value(v) for v in value]
    return value


def to_document(obj: Any, *exclude: str) -> dict[str, Any]:
    data = asdict(obj)
    for key in exclude:
        del data[key]

    return {key: encode_value(value) for key, value in data.items()}


def from_document(data_class: type[T], doc: DocumentSnapshot) -> T:
    return dacite.from_dict(
        data_class=data_class,
        data={
            # Can never be None, as it's a Firestore DocumentSnapshot and therefore always exists
            **cast(dict[str, Any], doc.to_dict()),
            'id': doc.id,
        },
        config=DACITE_CONFIG,
    )


def delete_collection(collection: CollectionReference) -> None:
    batch_size = 100

    while True:
        docs: Generator[DocumentReference, DocumentReference, None] = collection.list_documents(page_size=batch_size)
        deleted = 0

        for doc in docs:
            doc.delete()
            deleted = deleted + 1

        if deleted < batch_size:
            break
