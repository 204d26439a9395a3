"""Domain models for the Lambda processing protocol."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StorageDescriptor(BaseModel):
    """A storage role as seen by the Lambda function: bucket name and key prefix."""

    model_config = ConfigDict(extra="allow")

    name: str
    prefix: Optional[str] = None
    upload_options: Optional[dict[str, Any]] = None


class VersionSpec(BaseModel):
    """A derived variant the Lambda function should produce.

    Transform parameters (``width``, ``height``, ``format``...) are kept as extra fields
    and passed through to the function untouched.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    storage: str = "store"


class Assembly(BaseModel):
    """The processing request sent to the Lambda function."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    function: str
    callback_url: str = Field(alias="callbackURL")
    copy_original: bool = True
    storages: dict[str, StorageDescriptor] = Field(default_factory=dict)
    target_storage: str = "store"
    path: Optional[str] = None
    attachment: Optional[dict[str, Any]] = None
    versions: list[VersionSpec] = Field(default_factory=list)
    context: dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Invocation payload; the function name travels outside of it."""
        return self.model_dump(mode="json", by_alias=True, exclude={"function"}, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude={"function"}, exclude_none=True)


class FunctionDescriptor(BaseModel):
    """A Lambda function known to the account."""

    function_name: str
    function_arn: Optional[str] = None
    runtime: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_aws(cls, data: dict[str, Any]) -> "FunctionDescriptor":
        return cls(
            function_name=data["FunctionName"],
            function_arn=data.get("FunctionArn"),
            runtime=data.get("Runtime"),
            description=data.get("Description"),
        )


class CallbackResult(BaseModel):
    """Result reported by the Lambda function, with the context already removed.

    Either a single file descriptor (``id``, ``storage``, ``metadata``...) when the original
    was only moved, or ``versions`` mapping each variant name (``original`` included) to
    its descriptor.
    """

    model_config = ConfigDict(extra="allow")

    versions: Optional[dict[str, dict[str, Any]]] = None

    @field_validator("versions", mode="before")
    @classmethod
    def _merge_versions(cls, value: Any) -> Any:
        # Lambda may send [{"original": {...}}, {"size40": {...}}]
        if isinstance(value, list):
            merged: dict[str, Any] = {}
            for item in value:
                if not isinstance(item, dict):
                    raise ValueError(f"version entries must be objects, got {item!r}")
                merged.update(item)
            return merged
        return value

    @property
    def is_versioned(self) -> bool:
        return bool(self.versions)

    def document(self) -> dict[str, Any]:
        """The structure to be written into the record's attachment field."""
        if self.versions:
            return {name: _copy_block(variant) for name, variant in self.versions.items()}
        extra = _copy_block(self.model_extra or {})
        extra.pop("context", None)
        return extra


def _copy_block(block: dict[str, Any]) -> dict[str, Any]:
    copied = dict(block)
    if isinstance(copied.get("metadata"), dict):
        copied["metadata"] = dict(copied["metadata"])
    return copied
