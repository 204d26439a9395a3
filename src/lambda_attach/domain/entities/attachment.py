from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

# Reserved metadata field holding the per-dispatch signing key
SIGNING_KEY = "key"

CACHE = "cache"


class AttachmentState(str, Enum):
    """Where an attachment is in the remote processing lifecycle."""

    UPLOADED = "uploaded"
    PROCESSING = "processing"
    FINALIZED = "finalized"


@dataclass
class UploadedFile:
    id: str
    storage: str
    metadata: dict[str, Any] = field(default_factory=dict)
    state: AttachmentState = AttachmentState.UPLOADED

    @classmethod
    def from_dict(cls, data: dict[str, Any] | str) -> "UploadedFile":
        if isinstance(data, str):
            data = json.loads(data)
        metadata = dict(data.get("metadata") or {})
        storage = str(data["storage"])
        if storage != CACHE:
            state = AttachmentState.FINALIZED
        elif metadata.get(SIGNING_KEY):
            state = AttachmentState.PROCESSING
        else:
            state = AttachmentState.UPLOADED
        return cls(id=str(data["id"]), storage=storage, metadata=metadata, state=state)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "storage": self.storage, "metadata": dict(self.metadata)}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @property
    def signing_key(self) -> Optional[str]:
        return self.metadata.get(SIGNING_KEY)

    @property
    def filename(self) -> Optional[str]:
        return self.metadata.get("filename")

    @property
    def mime_type(self) -> Optional[str]:
        return self.metadata.get("mime_type")

    @property
    def size(self) -> Optional[int]:
        return self.metadata.get("size")

    @property
    def extension(self) -> Optional[str]:
        ext = os.path.splitext(self.id)[1] or os.path.splitext(self.filename or "")[1]
        return ext.lstrip(".").lower() or None

    def mark_processing(self, signing_key: str) -> None:
        """Tag the cached file with a live signing key."""
        if self.storage != CACHE:
            raise ValueError(f"Only cached files can be processed, got storage {self.storage!r}")
        self.metadata[SIGNING_KEY] = signing_key
        self.state = AttachmentState.PROCESSING
