"""SQLite record store for hosts without their own persistence layer."""

from __future__ import annotations

import json
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Generator, Mapping

from loguru import logger

from lambda_attach.domain.entities.record import Record
from lambda_attach.domain.errors import RecordNotFoundError

Validator = Callable[[Record], None]


class RecordValidationError(ValueError):
    """Raised by a validator when a record must not be saved."""


class SQLiteRecordStore:
    """Stores records as JSON attribute maps keyed by (type, id)."""

    def __init__(
        self,
        db_path: str | Path = "/app/data/records.db",
        validators: Mapping[str, Validator] | None = None,
    ):
        self.db_path = Path(db_path)
        self.validators = dict(validators or {})
        self._ensure_db()

    def _ensure_db(self) -> None:
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with self._connection() as conn:
            conn.executescript("""
                PRAGMA journal_mode=WAL;

                CREATE TABLE IF NOT EXISTS records (
                    record_type TEXT NOT NULL,
                    record_id TEXT NOT NULL,
                    fields_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,

                    PRIMARY KEY(record_type, record_id)
                );
            """)
            logger.info(f"SQLite record store initialized at {self.db_path}")

    @contextmanager
    def _connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for database connections."""
        conn = sqlite3.connect(self.db_path, timeout=30.0)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def create(self, record_type: str, fields: dict[str, Any] | None = None, record_id: str | None = None) -> Record:
        """Insert a new record and return it."""
        record = Record(type=record_type, id=record_id or str(uuid.uuid4()), fields=dict(fields or {}))
        return self.save(record)

    def find(self, record_type: str, record_id: str) -> Record:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT * FROM records WHERE record_type = ? AND record_id = ?",
                (record_type, record_id),
            ).fetchone()

        if row is None:
            raise RecordNotFoundError(record_type, record_id)

        return Record(
            type=row["record_type"],
            id=row["record_id"],
            fields=json.loads(row["fields_json"]),
        )

    def save(self, record: Record, *, validate: bool = True) -> Record:
        """Upsert a record; validators only run when ``validate`` is set."""
        if validate and record.type in self.validators:
            self.validators[record.type](record)

        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            conn.execute(
                """INSERT INTO records (record_type, record_id, fields_json, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?)
                   ON CONFLICT(record_type, record_id)
                   DO UPDATE SET fields_json = excluded.fields_json, updated_at = excluded.updated_at""",
                (record.type, record.id, json.dumps(record.fields), now, now),
            )

        logger.debug(f"Saved {record.type}#{record.id}")
        return record
