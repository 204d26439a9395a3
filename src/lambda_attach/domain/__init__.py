"""Domain models, entities and errors."""

from lambda_attach.domain.entities import SIGNING_KEY, AttachmentState, Record, UploadedFile
from lambda_attach.domain.errors import (
    ConfigurationError,
    FunctionUnavailableError,
    LambdaError,
    NoFunctionError,
    RecordNotFoundError,
    RemoteInvocationError,
)
from lambda_attach.domain.models import (
    Assembly,
    CallbackResult,
    FunctionDescriptor,
    StorageDescriptor,
    VersionSpec,
)

__all__ = [
    "SIGNING_KEY",
    "AttachmentState",
    "Record",
    "UploadedFile",
    "LambdaError",
    "ConfigurationError",
    "NoFunctionError",
    "FunctionUnavailableError",
    "RemoteInvocationError",
    "RecordNotFoundError",
    "Assembly",
    "CallbackResult",
    "FunctionDescriptor",
    "StorageDescriptor",
    "VersionSpec",
]
