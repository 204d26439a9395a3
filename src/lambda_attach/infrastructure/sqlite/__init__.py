"""SQLite-backed record persistence."""

from lambda_attach.infrastructure.sqlite.client import RecordValidationError, SQLiteRecordStore

__all__ = [
    "RecordValidationError",
    "SQLiteRecordStore",
]
