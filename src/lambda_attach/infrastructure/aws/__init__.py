"""AWS integration: Lambda client and SigV4 callback signing."""

from lambda_attach.infrastructure.aws.lambda_client import (
    LambdaGateway,
    lambda_client_from_settings,
)
from lambda_attach.infrastructure.aws.sigv4 import (
    authorization_header,
    parse_authorization_header,
    sign_callback,
)

__all__ = [
    "LambdaGateway",
    "lambda_client_from_settings",
    "authorization_header",
    "parse_authorization_header",
    "sign_callback",
]
