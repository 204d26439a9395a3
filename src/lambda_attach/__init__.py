"""Delegate attachment processing to AWS Lambda and reconcile its signed callbacks."""

from lambda_attach.application import Attacher
from lambda_attach.domain import (
    AttachmentState,
    CallbackResult,
    ConfigurationError,
    FunctionUnavailableError,
    LambdaError,
    NoFunctionError,
    Record,
    RecordNotFoundError,
    RemoteInvocationError,
    UploadedFile,
)
from lambda_attach.infrastructure.settings import LambdaSettings
from lambda_attach.plugin import LambdaPlugin

__version__ = "0.1.0"

__all__ = [
    "LambdaPlugin",
    "LambdaSettings",
    "Attacher",
    "AttachmentState",
    "CallbackResult",
    "Record",
    "UploadedFile",
    "LambdaError",
    "ConfigurationError",
    "NoFunctionError",
    "FunctionUnavailableError",
    "RemoteInvocationError",
    "RecordNotFoundError",
]
