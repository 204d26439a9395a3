"""Writes an authenticated Lambda result into the owning record."""

from __future__ import annotations

import json

from loguru import logger

from lambda_attach.application.attacher import Attacher
from lambda_attach.domain.entities.attachment import SIGNING_KEY
from lambda_attach.domain.models import CallbackResult


class CallbackReconciler:
    def reconcile(self, attacher: Attacher, result: CallbackResult) -> None:
        """Persist ``result`` into the attacher's data attribute.

        Versioned results are stored as one mapping of variant name to descriptor, otherwise
        the single file descriptor is stored. The signing key is dropped from every metadata
        block first. Validations are skipped; persistence errors propagate.
        """
        document = result.document()
        blocks = document.values() if result.is_versioned else [document]
        for block in blocks:
            metadata = block.get("metadata") if isinstance(block, dict) else None
            if isinstance(metadata, dict):
                metadata.pop(SIGNING_KEY, None)

        attacher.write(json.dumps(document))
        attacher.persist(validate=False)
        logger.info(
            f"Lambda result saved to {attacher.record.type}#{attacher.record.id}.{attacher.data_attribute}"
            + (f" ({len(document)} versions)" if result.is_versioned else "")
        )
