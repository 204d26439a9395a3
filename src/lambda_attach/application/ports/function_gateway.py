from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Protocol, Union

from lambda_attach.domain.models import FunctionDescriptor


@dataclass(frozen=True)
class Accepted:
    # Lambda queued the event; completion arrives through the callback
    status_code: int = 202


@dataclass(frozen=True)
class Rejected:
    error_code: str
    message: str


InvocationResult = Union[Accepted, Rejected]


class FunctionGateway(Protocol):
    def invoke(self, function_name: str, payload: str) -> InvocationResult: ...

    def list_functions(
        self,
        master_region: Optional[str] = None,
        function_version: str = "ALL",
        marker: Optional[str] = None,
        items: int = 100,
    ) -> list[FunctionDescriptor]: ...
