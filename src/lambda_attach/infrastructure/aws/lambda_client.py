"""AWS Lambda gateway: asynchronous invocation and function listing."""

from __future__ import annotations

from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError
from loguru import logger

from lambda_attach.application.ports.function_gateway import Accepted, InvocationResult, Rejected
from lambda_attach.domain.models import FunctionDescriptor
from lambda_attach.infrastructure.settings import LambdaSettings

# Fire-and-forget: Lambda queues the event and answers 202 right away
INVOCATION_TYPE = "Event"


class LambdaGateway:
    """Wraps a boto3 Lambda client."""

    def __init__(self, client: Any):
        self.client = client

    @classmethod
    def from_settings(cls, settings: LambdaSettings) -> "LambdaGateway":
        return cls(lambda_client_from_settings(settings))

    def invoke(self, function_name: str, payload: str) -> InvocationResult:
        try:
            response = self.client.invoke(
                FunctionName=function_name,
                InvocationType=INVOCATION_TYPE,
                Payload=payload.encode("utf-8"),
            )
        except ClientError as e:
            error = e.response.get("Error", {})
            return Rejected(
                error_code=error.get("Code", "ClientError"),
                message=error.get("Message", str(e)),
            )

        function_error = response.get("FunctionError")
        if function_error:
            body = response.get("Payload")
            message = body.read().decode("utf-8", errors="replace") if body is not None else ""
            return Rejected(error_code=function_error, message=message)

        return Accepted(status_code=response.get("StatusCode", 202))

    def list_functions(
        self,
        master_region: Optional[str] = None,
        function_version: str = "ALL",
        marker: Optional[str] = None,
        items: int = 100,
    ) -> list[FunctionDescriptor]:
        params: dict[str, Any] = {"FunctionVersion": function_version, "MaxItems": items}
        if master_region:
            params["MasterRegion"] = master_region
        if marker:
            params["Marker"] = marker

        response = self.client.list_functions(**params)
        functions = [FunctionDescriptor.from_aws(f) for f in response.get("Functions", [])]
        logger.debug(f"Lambda list_functions returned {len(functions)} functions")
        return functions


def lambda_client_from_settings(settings: LambdaSettings) -> Any:
    """Create a boto3 Lambda client honouring profile, endpoint, credentials and retries."""
    session = boto3.session.Session(profile_name=settings.profile) if settings.profile else boto3.session.Session()

    config_kwargs: dict[str, Any] = {"parameter_validation": settings.validate_params}
    if settings.retry_limit is not None:
        config_kwargs["retries"] = {"max_attempts": settings.retry_limit}

    client_kwargs: dict[str, Any] = {"config": Config(**config_kwargs)}
    if settings.region:
        client_kwargs["region_name"] = settings.region
    if settings.endpoint:
        client_kwargs["endpoint_url"] = settings.endpoint
    if settings.access_key_id:
        client_kwargs["aws_access_key_id"] = settings.access_key_id
    if settings.secret_access_key:
        client_kwargs["aws_secret_access_key"] = settings.secret_access_key.get_secret_value()
    if settings.session_token:
        client_kwargs["aws_session_token"] = settings.session_token.get_secret_value()

    return session.client("lambda", **client_kwargs)
