from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional

import boto3
from botocore.config import Config
from loguru import logger


@dataclass(frozen=True)
class S3StorageConfig:
    bucket: str
    region: str = "us-east-1"
    endpoint: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    prefix: Optional[str] = None
    force_path_style: bool = False
    upload_options: dict[str, Any] = field(default_factory=dict)


class S3Storage:
    def __init__(self, cfg: S3StorageConfig, client: Any = None) -> None:
        self.cfg = cfg
        if client is None:
            s3_cfg = Config(s3={"addressing_style": "path"} if cfg.force_path_style else {})
            client = boto3.client(
                "s3",
                endpoint_url=cfg.endpoint,
                aws_access_key_id=cfg.access_key,
                aws_secret_access_key=cfg.secret_key,
                region_name=cfg.region,
                config=s3_cfg,
            )
        self.client = client

    @property
    def bucket(self) -> str:
        return self.cfg.bucket

    @property
    def prefix(self) -> Optional[str]:
        return self.cfg.prefix

    def object_key(self, location: str) -> str:
        return f"{self.cfg.prefix}/{location}" if self.cfg.prefix else location

    def upload(self, data: bytes, location: str, *, content_type: Optional[str] = None) -> None:
        params: dict[str, Any] = {"Bucket": self.cfg.bucket, "Key": self.object_key(location), "Body": data}
        if content_type:
            params["ContentType"] = content_type
        params.update(self.cfg.upload_options)

        resp = self.client.put_object(**params)
        logger.debug(f"Uploaded {params['Key']} to {self.cfg.bucket} (etag {resp.get('ETag')})")


def s3_storage_from_env(role: str) -> S3Storage:
    """Storage for a role ("cache", "store") from ``S3_<ROLE>_*`` variables."""
    env = f"S3_{role.upper()}_"
    cfg = S3StorageConfig(
        bucket=os.environ[f"{env}BUCKET"],
        region=os.getenv(f"{env}REGION", os.getenv("S3_REGION", "us-east-1")),
        endpoint=os.getenv(f"{env}ENDPOINT", os.getenv("S3_ENDPOINT")),
        access_key=os.getenv("S3_ACCESS_KEY"),
        secret_key=os.getenv("S3_SECRET_KEY"),
        prefix=os.getenv(f"{env}PREFIX", role),
        force_path_style=os.getenv("S3_FORCE_PATH_STYLE", "false").lower() == "true",
    )
    return S3Storage(cfg)
