"""SigV4 signing of Lambda callback requests.

The Lambda function signs its ``PUT`` to the callback URL with the per-dispatch signing key
used as the secret access key. The same computation run here verifies it.
"""

from __future__ import annotations

import re
from typing import Optional

from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

ALGORITHM = "AWS4-HMAC-SHA256"
CALLBACK_METHOD = "PUT"

_AUTH_HEADER_SPLIT = re.compile(r" |, |=")


def parse_authorization_header(header: str) -> dict[str, str]:
    """Turn ``AWS4-HMAC-SHA256 Credential=.., SignedHeaders=.., Signature=..`` into a dict."""
    parts = [p for p in _AUTH_HEADER_SPLIT.split(header.strip()) if p]
    if len(parts) < 3 or len(parts) % 2 == 0:
        return {}
    pairs = parts[1:]
    return dict(zip(pairs[0::2], pairs[1::2]))


def sign_callback(
    *,
    callback_url: str,
    body: bytes | str,
    amz_date: str,
    access_key_id: str,
    signing_key: str,
    region: str,
    service: str,
    security_token: Optional[str] = None,
) -> tuple[str, str]:
    """Compute the signature of a callback request.

    Returns:
        (signature, signed headers) pair, both as they appear in the Authorization header
    """
    if isinstance(body, str):
        body = body.encode("utf-8")

    headers = {"X-Amz-Date": amz_date}
    if security_token:
        headers["X-Amz-Security-Token"] = security_token

    request = AWSRequest(method=CALLBACK_METHOD, url=callback_url, headers=headers, data=body)
    request.context["timestamp"] = amz_date

    signer = SigV4Auth(Credentials(access_key_id, signing_key, security_token), service, region)
    canonical_request = signer.canonical_request(request)
    string_to_sign = signer.string_to_sign(request, canonical_request)
    signed_headers = signer.signed_headers(signer.headers_to_sign(request))
    return signer.signature(string_to_sign, request), signed_headers


def authorization_header(
    *,
    callback_url: str,
    body: bytes | str,
    amz_date: str,
    access_key_id: str,
    signing_key: str,
    region: str,
    service: str,
    security_token: Optional[str] = None,
) -> str:
    """Full Authorization header value, as the Lambda function sends it."""
    signature, signed_headers = sign_callback(
        callback_url=callback_url,
        body=body,
        amz_date=amz_date,
        access_key_id=access_key_id,
        signing_key=signing_key,
        region=region,
        service=service,
        security_token=security_token,
    )
    credential = f"{access_key_id}/{amz_date[:8]}/{region}/{service}/aws4_request"
    return f"{ALGORITHM} Credential={credential}, SignedHeaders={signed_headers}, Signature={signature}"
