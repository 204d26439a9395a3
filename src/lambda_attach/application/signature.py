"""Authenticates Lambda callbacks against the signing key stored on the record."""

from __future__ import annotations

import hmac
import json
from typing import Any, Literal, Mapping, Union

from loguru import logger
from pydantic import ValidationError

from lambda_attach.application.attacher import Attacher
from lambda_attach.application.ports.record_store import RecordStore
from lambda_attach.domain.models import CallbackResult
from lambda_attach.infrastructure.aws.sigv4 import parse_authorization_header, sign_callback

AuthenticationResult = Union[tuple[Attacher, CallbackResult], Literal[False]]


class SignatureVerifier:
    def __init__(self, callback_url: str, records: RecordStore):
        self.callback_url = callback_url
        self.records = records

    def authenticate(self, headers: Mapping[str, str], body: bytes | str) -> AuthenticationResult:
        """Verify a callback request.

        Parses the body, reloads the attacher from its embedded context and recomputes the
        SigV4 signature with the signing key found in the record's persisted metadata.

        Returns:
            (attacher, result) when the signature matches, False for a mismatch or a
            garbled request. RecordNotFoundError propagates when the context does not
            resolve to a record.
        """
        headers = {key.lower(): value for key, value in headers.items()}

        try:
            payload: Any = json.loads(body)
        except (TypeError, ValueError):
            logger.warning("Lambda callback rejected: body is not JSON")
            return False
        if not isinstance(payload, dict) or "context" not in payload:
            logger.warning("Lambda callback rejected: no context in body")
            return False

        attacher = Attacher.load(payload.pop("context"), self.records)

        claimed = parse_authorization_header(headers.get("authorization", ""))
        credential = claimed.get("Credential", "").split("/")
        if len(credential) < 4 or "Signature" not in claimed or not headers.get("x-amz-date"):
            logger.warning(f"Lambda callback for {attacher.record.type}#{attacher.record.id} has a malformed Authorization header")
            return False

        signing_key = attacher.signing_key
        if not signing_key:
            logger.warning(f"No signing key stored for {attacher.record.type}#{attacher.record.id}, callback rejected")
            return False

        expected, _ = sign_callback(
            callback_url=self.callback_url,
            body=body,
            amz_date=headers["x-amz-date"],
            access_key_id=credential[0],
            signing_key=signing_key,
            region=credential[2],
            service=credential[3],
            security_token=headers.get("x-amz-security-token"),
        )
        if not hmac.compare_digest(claimed["Signature"].encode(), expected.encode()):
            logger.warning(f"Lambda callback signature mismatch for {attacher.record.type}#{attacher.record.id}")
            return False

        try:
            result = CallbackResult.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Lambda callback for {attacher.record.type}#{attacher.record.id} is malformed: {e}")
            return False

        return attacher, result
