"""FastAPI application exposing the Lambda callback."""

from urllib.parse import urlsplit

from fastapi import FastAPI

from lambda_attach.infrastructure.http.callback import lambda_callback, lambda_health
from lambda_attach.plugin import LambdaPlugin


def create_app(plugin: LambdaPlugin, app: FastAPI | None = None) -> FastAPI:
    """Mount the callback route at the path of the configured callback URL."""
    app = app or FastAPI(title="Lambda Attach")
    app.state.lambda_plugin = plugin

    callback_path = urlsplit(plugin.settings.callback_url).path or "/"
    app.add_api_route(callback_path, lambda_callback, methods=["PUT"])
    app.add_api_route("/lambda/health", lambda_health, methods=["GET"])
    return app
