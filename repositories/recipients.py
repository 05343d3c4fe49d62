class RecipientResolver:
    def manager_ids(self) -> list[str]:
        raise NotImplementedError  # pragma: no cover

    def admin_ids(self) -> list[str]:
        raise NotImplementedError  # pragma: no cover
