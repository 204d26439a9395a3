"""Attacher: mediates between a host record and one of its attached files."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from loguru import logger

from lambda_attach.application.ports.record_store import RecordStore
from lambda_attach.domain.entities.attachment import SIGNING_KEY, AttachmentState, UploadedFile
from lambda_attach.domain.entities.record import Record
from lambda_attach.domain.errors import RecordNotFoundError


class Attacher:
    """Reads and writes the ``<name>_data`` attribute of a record."""

    def __init__(self, record: Record, name: str, records: RecordStore):
        self.record = record
        self.name = name
        self.records = records

    @classmethod
    def load(cls, data: Mapping[str, Any], records: RecordStore) -> "Attacher":
        """Reload the attacher identified by a promote payload or callback context."""
        try:
            record_type, record_id = data["record"]
            name = data["name"]
        except (KeyError, TypeError, ValueError) as e:
            raise RecordNotFoundError(message=f"Cannot identify record from context: {e}") from e

        record = records.find(str(record_type), str(record_id))
        return cls(record, str(name), records)

    @property
    def data_attribute(self) -> str:
        return f"{self.name}_data"

    @property
    def context(self) -> dict[str, Any]:
        return {"record": [self.record.type, self.record.id], "name": self.name}

    def read(self) -> Optional[Any]:
        """Parsed content of the attachment field, or None when empty."""
        raw = self.record.get(self.data_attribute)
        if not raw:
            return None
        return json.loads(raw) if isinstance(raw, str) else raw

    @property
    def file(self) -> Optional[UploadedFile]:
        data = self.read()
        if isinstance(data, dict) and "id" in data and "storage" in data:
            return UploadedFile.from_dict(data)
        return None

    @property
    def signing_key(self) -> Optional[str]:
        """Signing key as persisted on the record, not on any in-memory file."""
        data = self.read()
        if not isinstance(data, dict):
            return None
        metadata = data.get("metadata")
        if not isinstance(metadata, dict):
            return None
        return metadata.get(SIGNING_KEY)

    @property
    def state(self) -> Optional[AttachmentState]:
        data = self.read()
        if data is None:
            return None
        file = self.file
        # Versioned results are a mapping of variant name to descriptor
        return file.state if file else AttachmentState.FINALIZED

    def uploaded_file(self, data: Mapping[str, Any] | str) -> UploadedFile:
        return UploadedFile.from_dict(data if isinstance(data, str) else dict(data))

    def write(self, content: str) -> None:
        self.record.set(self.data_attribute, content)

    def set(self, file: UploadedFile) -> UploadedFile:
        self.write(file.to_json())
        return file

    def persist(self, validate: bool = True) -> Record:
        self.record = self.records.save(self.record, validate=validate)
        return self.record

    def swap(self, file: UploadedFile) -> Optional[UploadedFile]:
        """Persist ``file`` only if the stored attachment has not changed meanwhile."""
        current = Attacher(self.records.find(self.record.type, self.record.id), self.name, self.records)
        stored = current.file
        if stored is None or stored.id != file.id or stored.storage != file.storage:
            logger.warning(
                f"Attachment {self.data_attribute} of {self.record.type}#{self.record.id} changed, not swapping"
            )
            return None

        self.record = current.record
        self.set(file)
        self.persist(validate=False)
        return file

    def promote_data(self, action: str = "store") -> dict[str, Any]:
        """Payload handed to the backgrounding job after a cache upload."""
        file = self.file
        if file is None:
            raise ValueError(f"{self.data_attribute} holds no attachment")
        return {
            **self.context,
            "attachment": file.to_dict(),
            "action": action,
            "phase": action,
        }
