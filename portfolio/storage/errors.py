# portfolio/storage/errors.py


class StorageError(Exception):
    """Backend failure while reading or writing rows."""


class ConflictError(StorageError):
    """Unique constraint violation (slug, email, username)."""


class UnknownTableError(StorageError, KeyError):
    def __init__(self, table: str):
        super().__init__(table)
        self.table = table

    def __str__(self) -> str:
        return f"unknown table: {self.table}"


class UnknownFieldError(StorageError, ValueError):
    def __init__(self, table: str, field: str):
        super().__init__(table, field)
        self.table = table
        self.field = field

    def __str__(self) -> str:
        return f"unknown field {self.field!r} for table {self.table}"
