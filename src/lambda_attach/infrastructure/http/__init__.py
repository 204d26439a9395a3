"""HTTP surface: the Lambda callback webhook."""

from lambda_attach.infrastructure.http.app import create_app

__all__ = ["create_app"]
