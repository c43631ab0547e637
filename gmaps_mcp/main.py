"""HTTP bridge ASGI entrypoint (``uvicorn gmaps_mcp.main:app``)."""

from __future__ import annotations

from dotenv import load_dotenv

from gmaps_mcp.server.app_factory import create_app


load_dotenv()
app = create_app()
