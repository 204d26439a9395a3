"""Sends cached files to Lambda for processing."""

from __future__ import annotations

from typing import Any, Mapping

from loguru import logger

from lambda_attach.application.assembly import AssemblyBuilder
from lambda_attach.application.attacher import Attacher
from lambda_attach.application.function_registry import FunctionRegistry
from lambda_attach.application.ports.function_gateway import FunctionGateway, Rejected
from lambda_attach.application.ports.record_store import RecordStore
from lambda_attach.domain.errors import FunctionUnavailableError, RemoteInvocationError

# Keys of the promote payload that never travel in the callback context
EXCLUDED_CONTEXT_KEYS = frozenset({"attachment", "action", "phase"})


class Dispatcher:
    """Invokes the Lambda function asynchronously for a freshly cached attachment.

    Flow:
    1. Reload the attacher and the cached file from the promote payload
    2. Build the assembly (raises NoFunctionError without a function)
    3. Check the function is deployed (raises FunctionUnavailableError)
    4. Attach the correlation context
    5. Persist the cached file, now carrying its signing key
    6. Invoke with the "Event" invocation type; on rejection restore the keyless
       file and raise RemoteInvocationError
    """

    def __init__(
        self,
        builder: AssemblyBuilder,
        registry: FunctionRegistry,
        gateway: FunctionGateway,
        records: RecordStore,
    ):
        self.builder = builder
        self.registry = registry
        self.gateway = gateway
        self.records = records

    def dispatch(self, data: Mapping[str, Any]) -> Attacher:
        attacher = Attacher.load(data, self.records)
        cached_file = attacher.uploaded_file(data["attachment"])
        logger.info(f"Dispatching {cached_file.id} of {attacher.record.type}#{attacher.record.id} to Lambda")

        assembly = self.builder.build(cached_file, attacher.context)
        if not self.registry.available(assembly.function):
            logger.error(f"Lambda function {assembly.function} is not available")
            raise FunctionUnavailableError(assembly.function)

        context = {key: value for key, value in data.items() if key not in EXCLUDED_CONTEXT_KEYS}
        assembly = assembly.model_copy(update={"context": context})

        # The key must be on the record before Lambda can call back
        swapped = attacher.swap(cached_file) is not None
        if not swapped:
            attacher.set(cached_file)

        result = self.gateway.invoke(assembly.function, assembly.to_json())
        if isinstance(result, Rejected):
            logger.error(f"Lambda rejected {assembly.function}: {result.error_code}: {result.message}")
            self._restore(attacher, data, swapped)
            raise RemoteInvocationError(result.error_code, result.message)

        logger.debug(f"Lambda accepted {assembly.function} for {cached_file.id} (status {result.status_code})")
        return attacher

    def _restore(self, attacher: Attacher, data: Mapping[str, Any], swapped: bool) -> None:
        """Put back the keyless cached file after a rejected invocation."""
        uploaded = attacher.uploaded_file(data["attachment"])
        if not swapped or attacher.swap(uploaded) is None:
            attacher.set(uploaded)
