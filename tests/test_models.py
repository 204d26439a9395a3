"""Tests for domain entities and models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from lambda_attach.domain.entities.attachment import SIGNING_KEY, AttachmentState, UploadedFile
from lambda_attach.domain.errors import FunctionUnavailableError, RecordNotFoundError, RemoteInvocationError
from lambda_attach.domain.models import Assembly, CallbackResult, FunctionDescriptor


class TestUploadedFile:
    def test_state_is_inferred_from_storage_and_key(self):
        assert UploadedFile.from_dict({"id": "a.jpg", "storage": "cache"}).state is AttachmentState.UPLOADED
        assert (
            UploadedFile.from_dict({"id": "a.jpg", "storage": "cache", "metadata": {SIGNING_KEY: "k"}}).state
            is AttachmentState.PROCESSING
        )
        assert UploadedFile.from_dict({"id": "a.jpg", "storage": "store"}).state is AttachmentState.FINALIZED

    def test_from_json_string(self):
        file = UploadedFile.from_dict(json.dumps({"id": "x/a.PNG", "storage": "cache", "metadata": {"size": 3}}))
        assert file.size == 3
        assert file.extension == "png"

    def test_to_dict_omits_state(self):
        file = UploadedFile("a.jpg", "cache", {"filename": "a.jpg"})
        assert file.to_dict() == {"id": "a.jpg", "storage": "cache", "metadata": {"filename": "a.jpg"}}

    def test_mark_processing(self):
        file = UploadedFile("a.jpg", "cache")
        file.mark_processing("secret")
        assert file.signing_key == "secret"
        assert file.state is AttachmentState.PROCESSING

    def test_stored_file_cannot_be_processed(self):
        with pytest.raises(ValueError):
            UploadedFile("a.jpg", "store").mark_processing("secret")


class TestAssembly:
    def test_payload_uses_wire_names_and_drops_function(self):
        assembly = Assembly.model_validate(
            {
                "function": "Resize",
                "callbackURL": "https://app.example.com/cb",
                "storages": {"cache": {"name": "cache-bucket", "prefix": "cache"}},
                "versions": [{"name": "size40", "width": 40}],
            }
        )
        payload = assembly.to_payload()
        assert "function" not in payload
        assert payload["callbackURL"] == "https://app.example.com/cb"
        assert payload["versions"] == [{"name": "size40", "storage": "store", "width": 40}]
        assert payload["storages"]["cache"] == {"name": "cache-bucket", "prefix": "cache"}
        assert json.loads(assembly.to_json()) == payload

    def test_is_frozen(self):
        assembly = Assembly(function="Resize", callback_url="https://app.example.com/cb")
        with pytest.raises(Exception):
            assembly.function = "Other"


class TestCallbackResult:
    def test_list_of_versions_is_merged(self):
        result = CallbackResult.model_validate(
            {"versions": [{"original": {"storage": "store"}}, {"size40": {"storage": "store"}}]}
        )
        assert result.is_versioned
        assert set(result.versions) == {"original", "size40"}

    @pytest.mark.parametrize("versions", [["x"], [1]])
    def test_non_object_version_entries_are_invalid(self, versions):
        with pytest.raises(ValidationError):
            CallbackResult.model_validate({"versions": versions})

    def test_unversioned_document_is_the_descriptor(self):
        result = CallbackResult.model_validate(
            {"id": "a.jpg", "storage": "store", "metadata": {"size": 1}, "context": {"name": "avatar"}}
        )
        assert not result.is_versioned
        assert result.document() == {"id": "a.jpg", "storage": "store", "metadata": {"size": 1}}


def test_function_descriptor_from_aws():
    descriptor = FunctionDescriptor.from_aws({"FunctionName": "Resize", "Runtime": "nodejs18.x"})
    assert descriptor.function_name == "Resize"
    assert descriptor.runtime == "nodejs18.x"
    assert descriptor.function_arn is None


class TestErrors:
    def test_remote_invocation_error_carries_provider_details(self):
        error = RemoteInvocationError("Unhandled", "boom")
        assert str(error) == "Unhandled: boom"
        assert error.to_dict()["details"] == {"error_code": "Unhandled", "error_message": "boom"}

    def test_function_unavailable_message(self):
        assert str(FunctionUnavailableError("Resize")) == "Function Resize not available on Lambda!"

    def test_record_not_found_message(self):
        assert str(RecordNotFoundError("User", "42")) == "User not found: 42"
