"""Builds the processing request ("assembly") for a cached file."""

from __future__ import annotations

import base64
import secrets
import uuid
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from loguru import logger

from lambda_attach.application.ports.storage import Storage
from lambda_attach.domain.entities.attachment import UploadedFile
from lambda_attach.domain.errors import ConfigurationError, NoFunctionError
from lambda_attach.domain.models import Assembly

# User hook: returns at least {"function": ...}, usually also "versions"
BuildVersions = Callable[[UploadedFile, dict[str, Any]], Optional[Mapping[str, Any]]]
UploadOptions = Union[Mapping[str, Any], Callable[[UploadedFile, dict[str, Any]], Optional[Mapping[str, Any]]]]

SIGNING_KEY_BYTES = 12  # 96 bits


def generate_signing_key() -> str:
    return base64.b64encode(secrets.token_bytes(SIGNING_KEY_BYTES)).decode("ascii")


def generate_location(file: Optional[UploadedFile], context: Mapping[str, Any], filename: Optional[str] = None) -> str:
    """Storage key for a file: ``<record type>/<id>/<name>/<random hex><ext>``."""
    ext = file.extension if file else None
    if ext is None and filename and "." in filename:
        ext = filename.rsplit(".", 1)[1].lower()
    basename = uuid.uuid4().hex + (f".{ext}" if ext else "")

    record = context.get("record")
    name = context.get("name")
    if record and name:
        record_type, record_id = record
        return f"{str(record_type).lower()}/{record_id}/{name}/{basename}"
    return basename


class AssemblyBuilder:
    """Merges default values with the output of the version-building hook."""

    def __init__(
        self,
        callback_url: str,
        storages: Mapping[str, Storage],
        build_versions: BuildVersions,
        upload_options: Optional[Mapping[str, UploadOptions]] = None,
        target_storage: str = "store",
        default_storages: Iterable[str] = ("cache", "store"),
    ):
        self.callback_url = callback_url
        self.storages = storages
        self.build_versions = build_versions
        self.upload_options = upload_options or {}
        self.target_storage = target_storage
        self.default_storages = tuple(default_storages)

    def buckets_to_use(self, roles: Iterable[str]) -> dict[str, dict[str, Any]]:
        buckets = {}
        for role in roles:
            try:
                storage = self.storages[role]
            except KeyError:
                raise ConfigurationError(f"Storage :{role} is not registered") from None
            buckets[role] = {"name": storage.bucket, "prefix": storage.prefix}
        return buckets

    def default_values(self) -> dict[str, Any]:
        return {
            "callbackURL": self.callback_url,
            "copy_original": True,
            "storages": self.buckets_to_use(self.default_storages),
            "target_storage": self.target_storage,
        }

    def build(self, cached_file: UploadedFile, context: dict[str, Any]) -> Assembly:
        """Build the assembly and tag ``cached_file`` with a fresh signing key."""
        values = self.default_values()
        values.update(self.build_versions(cached_file, context) or {})

        if not values.get("function"):
            raise NoFunctionError()
        values["function"] = str(values["function"])

        values["path"] = generate_location(cached_file, context)
        values["storages"] = dict(values["storages"])
        for role, storage in values["storages"].items():
            options = self._upload_options(cached_file, context, role)
            if options:
                storage = dict(storage)
                storage["upload_options"] = dict(options)
                values["storages"][role] = storage

        cached_file.mark_processing(generate_signing_key())
        values["attachment"] = cached_file.to_dict()

        assembly = Assembly.model_validate(values)
        logger.debug(
            f"Built assembly for {cached_file.id}: function={assembly.function}, "
            f"versions={[v.name for v in assembly.versions]}"
        )
        return assembly

    def _upload_options(self, cached_file: UploadedFile, context: dict[str, Any], role: str) -> Optional[Mapping[str, Any]]:
        options = self.upload_options.get(role)
        if callable(options):
            options = options(cached_file, context)
        return options
