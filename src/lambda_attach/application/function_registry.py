"""Memoized list of the Lambda functions deployed on the account."""

from __future__ import annotations

from typing import Optional

from loguru import logger

from lambda_attach.application.ports.function_gateway import FunctionGateway
from lambda_attach.domain.models import FunctionDescriptor


class FunctionRegistry:
    def __init__(self, gateway: FunctionGateway, functions: Optional[list[FunctionDescriptor]] = None):
        self.gateway = gateway
        self._functions = functions

    def list_functions(
        self,
        force: bool = False,
        master_region: Optional[str] = None,
        function_version: str = "ALL",
        marker: Optional[str] = None,
        items: int = 100,
    ) -> list[FunctionDescriptor]:
        """Return the cached list, querying Lambda when forced or when nothing is cached."""
        if self._functions and not force:
            return self._functions

        self._functions = self.gateway.list_functions(
            master_region=master_region,
            function_version=function_version,
            marker=marker,
            items=items,
        )
        logger.info(f"Lambda function list refreshed: {len(self._functions)} functions")
        return self._functions

    def function_names(self) -> list[str]:
        return [f.function_name for f in self.list_functions()]

    def available(self, name: object) -> bool:
        return str(name) in self.function_names()
