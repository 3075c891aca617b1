"""Custom exceptions for the storage context."""

from pathlib import Path
from typing import Optional, Union


class StoreError(Exception):
    """Base class for record store failures."""


class StoreUnavailableError(StoreError):
    """
    Exception raised when the record store cannot be opened or queried.

    Attributes:
        message: Error description
        db_path: Database location
        original_error: The underlying sqlite3 error
    """

    def __init__(
        self,
        message: str,
        db_path: Optional[Union[str, Path]] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.db_path = db_path
        self.original_error = original_error

        parts = [message]
        if db_path:
            parts.append(f"Database: {db_path}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class RecordNotFoundError(StoreError, KeyError):
    """Exception raised when a record id does not exist in a table."""

    def __init__(self, table: str, record_id: str):
        self.table = table
        self.record_id = record_id
        super().__init__(f"No record '{record_id}' in table '{table}'")

    def __str__(self) -> str:
        return self.args[0]


class UnknownTableError(StoreError, ValueError):
    """Exception raised for a table name outside the known schema."""

    def __init__(self, table: str, known_tables):
        self.table = table
        super().__init__(f"Unknown table '{table}'. Known tables: {', '.join(known_tables)}")
