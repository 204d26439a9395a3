"""Shared test fixtures for lambda-attach."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import pytest
from loguru import logger

from lambda_attach.application.ports.function_gateway import Accepted, InvocationResult
from lambda_attach.domain.entities.record import Record
from lambda_attach.domain.models import FunctionDescriptor
from lambda_attach.infrastructure.aws.sigv4 import authorization_header
from lambda_attach.infrastructure.settings import LambdaSettings
from lambda_attach.infrastructure.sqlite.client import SQLiteRecordStore
from lambda_attach.plugin import LambdaPlugin

CALLBACK_URL = "https://app.example.com/lambda/callback"
AMZ_DATE = "20200307T000000Z"
ACCESS_KEY_ID = "AKIAEXAMPLE"


class FakeStorage:
    """In-memory storage standing in for an S3 bucket."""

    def __init__(self, bucket: str, prefix: Optional[str] = None):
        self.bucket = bucket
        self.prefix = prefix
        self.objects: dict[str, bytes] = {}

    def upload(self, data: bytes, location: str, *, content_type: Optional[str] = None) -> None:
        self.objects[location] = data


class FakeGateway:
    """Records invocations instead of calling Lambda."""

    def __init__(self, functions: tuple[str, ...] = ("Resize",), result: Optional[InvocationResult] = None):
        self.functions = [FunctionDescriptor(function_name=name) for name in functions]
        self.result = result or Accepted()
        self.invocations: list[tuple[str, dict[str, Any]]] = []
        self.list_calls = 0

    def invoke(self, function_name: str, payload: str) -> InvocationResult:
        self.invocations.append((function_name, json.loads(payload)))
        return self.result

    def list_functions(self, master_region=None, function_version="ALL", marker=None, items=100):
        self.list_calls += 1
        return list(self.functions)


def resize_versions(file, context):
    return {
        "function": "Resize",
        "versions": [{"name": "size40", "storage": "store", "width": 40, "height": 40}],
    }


def signed_headers(body: bytes, signing_key: str, *, amz_date: str = AMZ_DATE, security_token: Optional[str] = None) -> dict[str, str]:
    """Headers the Lambda function would send along ``body``."""
    headers = {
        "Authorization": authorization_header(
            callback_url=CALLBACK_URL,
            body=body,
            amz_date=amz_date,
            access_key_id=ACCESS_KEY_ID,
            signing_key=signing_key,
            region="us-east-1",
            service="handler",
            security_token=security_token,
        ),
        "X-Amz-Date": amz_date,
    }
    if security_token:
        headers["x-amz-security-token"] = security_token
    return headers


@pytest.fixture
def settings() -> LambdaSettings:
    return LambdaSettings.from_options(callback_url=CALLBACK_URL, region="us-east-1")


@pytest.fixture
def records(tmp_path: Path) -> SQLiteRecordStore:
    """Provide a fresh record store backed by a temp SQLite database."""
    return SQLiteRecordStore(tmp_path / "records.db")


@pytest.fixture
def storages() -> dict[str, FakeStorage]:
    return {
        "cache": FakeStorage("cache-bucket", "cache"),
        "store": FakeStorage("store-bucket", "store"),
    }


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def plugin(settings, storages, records, gateway) -> LambdaPlugin:
    return LambdaPlugin(settings, storages, records, resize_versions, gateway=gateway)


@pytest.fixture
def user(records) -> Record:
    return records.create("User", {"name": "Jane"}, record_id="1")


@pytest.fixture
def promote_data(plugin, user) -> dict[str, Any]:
    """Promote payload of a JPEG freshly uploaded to the cache."""
    return plugin.attach(user, "avatar", b"\xff\xd8jpeg-bytes", "photo.jpg", "image/jpeg")


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
