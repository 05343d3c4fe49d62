from collections.abc import Generator

from models import Resignation, ResignationStatus


class ResignationRepository:
    def get(self, resignation_id: str) -> Resignation | None:
        raise NotImplementedError  # pragma: no cover

    def get_all(self, status: ResignationStatus | None = None) -> Generator[Resignation, None, None]:
        raise NotImplementedError  # pragma: no cover

    def create(self, resignation: Resignation) -> None:
        raise NotImplementedError  # pragma: no cover

    def update_status(
        self,
        resignation_id: str,
        status: ResignationStatus,
        *,
        expected: ResignationStatus,
        comments: str | None = None,
    ) -> bool:
        """Move the resignation to status only if it is currently in expected.

        Returns False, leaving the document untouched, when the current status
        differs or the resignation does not exist.
        """
        raise NotImplementedError  # pragma: no cover

    def delete_all(self) -> None:
        raise NotImplementedError  # pragma: no cover
