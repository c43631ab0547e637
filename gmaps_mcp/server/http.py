"""
HTTP bridge: JSON-RPC over a single ``/mcp`` endpoint plus health checks.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from gmaps_mcp.config import SessionConfig, Settings
from gmaps_mcp.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    ConfigurationError,
    MapsMcpError,
)
from gmaps_mcp.server.schema import (
    InitializeResult,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
)
from gmaps_mcp.server.session import SessionSlot
from gmaps_mcp.tools.base import describe_errors


router = APIRouter()
logger = logging.getLogger(__name__)


def _settings(request: Request) -> Settings:
    return request.app.state.settings


def _slot(request: Request) -> SessionSlot:
    return request.app.state.session_slot


def _result(result: dict[str, Any], request_id: Any) -> JSONResponse:
    payload = JsonRpcResponse(result=result).model_dump(exclude_none=True)
    payload["id"] = request_id
    return JSONResponse(payload)


def _error(code: int, message: str, request_id: Any, status_code: int) -> JSONResponse:
    payload = JsonRpcResponse(error=JsonRpcError(code=code, message=message)).model_dump(exclude_none=True)
    payload["id"] = request_id
    return JSONResponse(payload, status_code=status_code)


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/mcp")
async def mcp_status(request: Request) -> dict[str, str]:
    settings = _settings(request)
    return {"status": "ready", "name": settings.server.name, "version": settings.server.version}


@router.post("/mcp")
async def mcp_endpoint(request: Request) -> JSONResponse:
    request_id: Any = None
    try:
        body = await request.json()
        if isinstance(body, dict):
            request_id = body.get("id")
        rpc = JsonRpcRequest.model_validate(body)

        if rpc.method == "initialize":
            return await _initialize(request, rpc, body)

        session = _slot(request).require()
        result = await session.registry.handle(rpc.method, rpc.params)
        return _result(result, rpc.id)
    except MapsMcpError as exc:
        if exc.http_status >= 500:
            logger.exception("MCP request error")
        else:
            logger.warning("MCP request rejected: %s", exc, extra={"code": exc.code})
        return _error(exc.code, str(exc), request_id, exc.http_status)
    except Exception as exc:
        logger.exception("MCP request error")
        return _error(INTERNAL_ERROR, str(exc), request_id, 500)


async def _initialize(request: Request, rpc: JsonRpcRequest, body: dict[str, Any]) -> JSONResponse:
    settings = _settings(request)
    slot = _slot(request)
    try:
        config = SessionConfig.model_validate(rpc.params or {})
    except ValidationError as exc:
        return _error(INVALID_PARAMS, f"Invalid initialize params: {describe_errors(exc)}", rpc.id, 400)

    try:
        api_key = slot.resolve_api_key(config, request.headers, body)
    except ConfigurationError:
        return _error(INVALID_PARAMS, "GOOGLE_MAPS_API_KEY is required", rpc.id, 400)

    try:
        slot.initialize(api_key, config)
    except Exception as exc:
        logger.exception("Failed to initialize MCP session")
        return _error(INTERNAL_ERROR, f"Failed to initialize server: {exc}", rpc.id, 500)

    result = InitializeResult(
        protocolVersion=settings.server.protocol_version,
        serverInfo=ServerInfo(name=settings.server.name, version=settings.server.version),
    )
    return _result(result.model_dump(), rpc.id)
