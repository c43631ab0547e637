"""Application factory for the HTTP bridge."""

from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI

from gmaps_mcp.config import Settings, get_settings
from gmaps_mcp.server.session import SessionSlot
from gmaps_mcp.utils.logger import setup_logging


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create the FastAPI application with an empty session slot."""
    settings = settings or get_settings()
    setup_logging(settings.logging)
    logger = logging.getLogger(__name__)

    # Import tool modules so the registry catalog is populated.
    import gmaps_mcp.tools  # noqa: F401
    from gmaps_mcp.server.http import router as mcp_router
    from gmaps_mcp.tools.registry import ToolRegistry

    app = FastAPI(title=settings.server.name, version=settings.server.version)
    app.state.settings = settings
    app.state.session_slot = SessionSlot(settings, transport=transport)
    app.include_router(mcp_router)

    logger.info(
        "MCP server config loaded",
        extra={
            "tools_count": len(ToolRegistry.catalog()),
            "maps_api_base": settings.maps.api_base,
        },
    )
    return app
