"""Callback endpoint receiving Lambda processing results."""

from __future__ import annotations

from fastapi import HTTPException, Request
from loguru import logger

from lambda_attach.plugin import LambdaPlugin


def get_plugin(request: Request) -> LambdaPlugin:
    return request.app.state.lambda_plugin


async def lambda_callback(request: Request) -> dict:
    """
    Receive a signed result from the Lambda function.

    This endpoint:
    1. Authenticates the SigV4 signature against the record's signing key
    2. Writes the result into the record's attachment field

    A mismatching signature gets a bare 403; unknown records propagate.
    """
    plugin = get_plugin(request)
    body = await request.body()

    authorized = plugin.lambda_authorize(request.headers, body)
    if not authorized:
        raise HTTPException(status_code=403, detail="Forbidden")

    attacher, result = authorized
    plugin.lambda_save(attacher, result)

    return {
        "status": "saved",
        "record": attacher.context["record"],
        "name": attacher.name,
        "versions": sorted(result.versions) if result.versions else [],
    }


async def lambda_health(request: Request) -> dict:
    """Health check for the Lambda subsystem."""
    plugin = get_plugin(request)
    try:
        functions = plugin.lambda_function_list()
        return {
            "status": "healthy",
            "functions": len(functions),
        }
    except Exception as e:
        logger.error(f"Lambda health check failed: {e}")
        return {
            "status": "unhealthy",
            "error": str(e),
        }
