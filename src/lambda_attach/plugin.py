"""Composition root wiring settings, storages, Lambda and the host record store."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from loguru import logger

from lambda_attach.application.assembly import AssemblyBuilder, BuildVersions, UploadOptions, generate_location
from lambda_attach.application.attacher import Attacher
from lambda_attach.application.dispatcher import Dispatcher
from lambda_attach.application.function_registry import FunctionRegistry
from lambda_attach.application.ports.function_gateway import FunctionGateway
from lambda_attach.application.ports.record_store import RecordStore
from lambda_attach.application.ports.storage import Storage
from lambda_attach.application.reconciler import CallbackReconciler
from lambda_attach.application.signature import AuthenticationResult, SignatureVerifier
from lambda_attach.domain.entities.attachment import CACHE, UploadedFile
from lambda_attach.domain.entities.record import Record
from lambda_attach.domain.errors import ConfigurationError
from lambda_attach.domain.models import CallbackResult, FunctionDescriptor
from lambda_attach.infrastructure.settings import LambdaSettings


class LambdaPlugin:
    """Delegates attachment processing to AWS Lambda.

    Args:
        settings: Validated plugin settings
        storages: Storage per role; "cache" and the target storage are required
        records: Host record persistence
        build_versions: Hook returning the function name and version specs for a file
        gateway: Lambda gateway (built from settings when omitted)
        upload_options: Per-storage upload options, static or ``(file, context) -> dict``
        target_storage: Storage role receiving processed files
    """

    def __init__(
        self,
        settings: LambdaSettings,
        storages: Mapping[str, Storage],
        records: RecordStore,
        build_versions: BuildVersions,
        gateway: Optional[FunctionGateway] = None,
        upload_options: Optional[Mapping[str, UploadOptions]] = None,
        target_storage: str = "store",
    ):
        for role in (CACHE, target_storage):
            if role not in storages:
                raise ConfigurationError(f"The :{role} storage is required for Lambda plugin")

        if gateway is None:
            from lambda_attach.infrastructure.aws.lambda_client import LambdaGateway

            gateway = LambdaGateway.from_settings(settings)

        self.settings = settings
        self.storages = storages
        self.records = records
        self.gateway = gateway
        self.registry = FunctionRegistry(gateway)
        self.builder = AssemblyBuilder(
            callback_url=settings.callback_url,
            storages=storages,
            build_versions=build_versions,
            upload_options=upload_options,
            target_storage=target_storage,
            default_storages=(CACHE, target_storage),
        )
        self.dispatcher = Dispatcher(self.builder, self.registry, gateway, records)
        self.verifier = SignatureVerifier(settings.callback_url, records)
        self.reconciler = CallbackReconciler()

    def attach(
        self,
        record: Record,
        name: str,
        data: bytes,
        filename: str,
        mime_type: Optional[str] = None,
    ) -> dict[str, Any]:
        """Upload ``data`` to the cache storage, save the record and return the promote payload."""
        attacher = Attacher(record, name, self.records)
        location = generate_location(None, attacher.context, filename=filename)
        self.storages[CACHE].upload(data, location, content_type=mime_type)

        cached = UploadedFile(
            id=location,
            storage=CACHE,
            metadata={"filename": filename, "size": len(data), "mime_type": mime_type},
        )
        attacher.set(cached)
        attacher.persist()
        logger.info(f"Cached {filename} as {location} for {record.type}#{record.id}")
        return attacher.promote_data()

    def lambda_process(self, data: Mapping[str, Any]) -> Attacher:
        """Backgrounding hook: load the attacher from ``data`` and invoke Lambda."""
        return self.dispatcher.dispatch(data)

    promote = lambda_process

    def lambda_authorize(self, headers: Mapping[str, str], body: bytes | str) -> AuthenticationResult:
        return self.verifier.authenticate(headers, body)

    def lambda_save(self, attacher: Attacher, result: CallbackResult) -> None:
        self.reconciler.reconcile(attacher, result)

    def lambda_function_list(self, force: bool = False, **params: Any) -> list[FunctionDescriptor]:
        return self.registry.list_functions(force=force, **params)
