from __future__ import annotations
from typing import Protocol
from lambda_attach.domain.entities.record import Record

class RecordStore(Protocol):
    def find(self, record_type: str, record_id: str) -> Record: ...
    def save(self, record: Record, *, validate: bool = True) -> Record: ...
