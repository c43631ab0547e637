from __future__ import annotations

import asyncio
import json

import httpx
import pytest
from mcp import types

from gmaps_mcp.config import SessionConfig, Settings
from gmaps_mcp.errors import ConfigurationError, ToolValidationError
from gmaps_mcp.server.session import create_stateless_registry
from gmaps_mcp.server.stdio import build_server, call_tool, list_tools


def _elevation_upstream(keys: list[str]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        keys.append(request.url.params["key"])
        return httpx.Response(
            200,
            json={"status": "OK", "results": [{"elevation": 1608.6, "location": {"lat": 39.7, "lng": -104.9}, "resolution": 4.7}]},
        )

    return httpx.MockTransport(handler)


def test_stateless_registry_uses_config_key_before_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "env-key")
    keys: list[str] = []

    async def run() -> None:
        registry = create_stateless_registry(
            SessionConfig(apiKey="config-key"),
            Settings(),
            transport=_elevation_upstream(keys),
        )
        await registry.invoke("maps_elevation", {"locations": [{"latitude": 39.7, "longitude": -104.9}]})

    asyncio.run(run())
    assert keys == ["config-key"]


def test_stateless_registry_falls_back_to_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "env-key")
    keys: list[str] = []

    async def run() -> None:
        registry = create_stateless_registry(SessionConfig(), Settings(), transport=_elevation_upstream(keys))
        await registry.invoke("maps_elevation", {"locations": [{"lat": 39.7, "lng": -104.9}]})

    asyncio.run(run())
    assert keys == ["env-key"]


def test_stateless_registry_without_key_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)
    monkeypatch.delenv("apiKey", raising=False)
    with pytest.raises(ConfigurationError):
        create_stateless_registry(SessionConfig(), Settings())


def test_list_and_call_tool_helpers() -> None:
    keys: list[str] = []

    async def run() -> None:
        registry = create_stateless_registry(
            SessionConfig(apiKey="k"),
            Settings(),
            transport=_elevation_upstream(keys),
        )
        tools = await list_tools(registry)
        assert all(isinstance(tool, types.Tool) for tool in tools)
        assert [tool.name for tool in tools][0] == "maps_geocode"
        assert len(tools) == 7

        content = await call_tool(registry, "maps_elevation", {"locations": [{"lat": 39.7, "lng": -104.9}]})
        assert content[0].type == "text"
        assert json.loads(content[0].text) == {
            "results": [{"elevation": 1608.6, "location": {"lat": 39.7, "lng": -104.9}, "resolution": 4.7}]
        }

        with pytest.raises(ToolValidationError):
            await call_tool(registry, "maps_elevation", {"locations": "nowhere"})

    asyncio.run(run())
    assert keys == ["k"]


def test_build_server_registers_tool_handlers() -> None:
    registry = create_stateless_registry(SessionConfig(apiKey="k"), Settings())
    server = build_server(registry, Settings())
    assert types.ListToolsRequest in server.request_handlers
    assert types.CallToolRequest in server.request_handlers
