"""Exceptions raised by the Lambda processing plugin."""

from __future__ import annotations

from typing import Any, Optional


class LambdaError(Exception):
    """Base exception for the Lambda plugin."""

    def __init__(
        self,
        message: str,
        code: str = "LAMBDA_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


class ConfigurationError(LambdaError):
    """Raised for a missing, unknown or invalid setting."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "CONFIGURATION_ERROR", details)


class NoFunctionError(ConfigurationError):
    """Raised when the version-building hook names no Lambda function."""

    def __init__(self, message: str = "No Lambda function specified!"):
        super().__init__(message)
        self.code = "NO_FUNCTION"


class FunctionUnavailableError(LambdaError):
    """Raised when the requested function is not deployed on Lambda."""

    def __init__(self, function_name: str):
        super().__init__(
            f"Function {function_name} not available on Lambda!",
            "FUNCTION_UNAVAILABLE",
            {"function_name": function_name},
        )
        self.function_name = function_name


class RemoteInvocationError(LambdaError):
    """Raised when Lambda rejects an invocation synchronously."""

    def __init__(self, error_code: str, error_message: str):
        super().__init__(
            f"{error_code}: {error_message}",
            "REMOTE_INVOCATION_ERROR",
            {"error_code": error_code, "error_message": error_message},
        )
        self.error_code = error_code
        self.error_message = error_message


class RecordNotFoundError(LambdaError):
    """Raised when a callback context does not resolve to a stored record."""

    def __init__(
        self,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
        message: Optional[str] = None,
    ):
        msg = message or f"{record_type or 'Record'} not found{f': {record_id}' if record_id else ''}"
        super().__init__(msg, "RECORD_NOT_FOUND", {"record_type": record_type, "record_id": record_id})
        self.record_type = record_type
        self.record_id = record_id
