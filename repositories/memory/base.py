import copy
import threading
from collections.abc import Callable, Iterator
from typing import Generic, Protocol, TypeVar


class HasId(Protocol):
    id: str


T = TypeVar('T', bound=HasId)


class MemoryCollection(Generic[T]):
    """Dict-backed document collection.

    Rows are deep-copied on the way in and out so callers never share state with
    the store, which mirrors how a remote store behaves.
    """

    def __init__(self) -> None:
        self._rows: dict[str, T] = {}
        self.lock = threading.RLock()

    def get(self, row_id: str) -> T | None:
        with self.lock:
            row = self._rows.get(row_id)
            return None if row is None else copy.deepcopy(row)

    def insert(self, row: T) -> bool:
        with self.lock:
            if row.id in self._rows:
                return False
            self._rows[row.id] = copy.deepcopy(row)
            return True

    def put(self, row: T) -> None:
        with self.lock:
            self._rows[row.id] = copy.deepcopy(row)

    def modify(self, row_id: str, mutate: Callable[[T], bool]) -> bool:
        """Apply mutate to the stored row under the lock; it returns False to abort."""
        with self.lock:
            row = self._rows.get(row_id)
            if row is None:
                return False
            working = copy.deepcopy(row)
            if not mutate(working):
                return False
            self._rows[row_id] = working
            return True

    def remove(self, row_id: str) -> None:
        with self.lock:
            self._rows.pop(row_id, None)

    def rows(self, predicate: Callable[[T], bool] | None = None) -> Iterator[T]:
        with self.lock:
            snapshot = [copy.deepcopy(row) for row in self._rows.values()]

        for row in snapshot:
            if predicate is None or predicate(row):
                yield row

    def clear(self) -> None:
        with self.lock:
            self._rows.clear()

    def __contains__(self, row_id: object) -> bool:
        return row_id in self._rows

    def __len__(self) -> int:
        return len(self._rows)
