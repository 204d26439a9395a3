"""Domain entities."""

from lambda_attach.domain.entities.attachment import SIGNING_KEY, AttachmentState, UploadedFile
from lambda_attach.domain.entities.record import Record

__all__ = [
    "SIGNING_KEY",
    "AttachmentState",
    "UploadedFile",
    "Record",
]
