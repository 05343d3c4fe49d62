from collections.abc import Generator

from models import ArchivedEmployee


class ArchivedEmployeeRepository:
    def get(self, archived_id: str) -> ArchivedEmployee | None:
        raise NotImplementedError  # pragma: no cover

    def get_all(self) -> Generator[ArchivedEmployee, None, None]:
        raise NotImplementedError  # pragma: no cover

    def find_by_resignation(self, resignation_id: str) -> ArchivedEmployee | None:
        raise NotImplementedError  # pragma: no cover

    def create(self, archived: ArchivedEmployee) -> None:
        raise NotImplementedError  # pragma: no cover

    def update_notes(self, archived_id: str, notes: str) -> None:
        raise NotImplementedError  # pragma: no cover

    def delete(self, archived_id: str) -> None:
        raise NotImplementedError  # pragma: no cover

    def delete_all(self) -> None:
        raise NotImplementedError  # pragma: no cover
