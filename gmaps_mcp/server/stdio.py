"""
描述: stdio 传输
主要功能:
    - 启动时一次性解析 API Key (配置 / 环境变量), 立即构建注册中心
    - 使用官方 mcp SDK 的低阶 Server 暴露 tools/list 与 tools/call
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from gmaps_mcp.config import SessionConfig, Settings
from gmaps_mcp.server.session import create_stateless_registry
from gmaps_mcp.tools.registry import ToolRegistry


SERVER_NAME = "google-maps-mcp-server"

logger = logging.getLogger(__name__)


async def list_tools(registry: ToolRegistry) -> list[types.Tool]:
    return [
        types.Tool(name=tool["name"], description=tool["description"], inputSchema=tool["inputSchema"])
        for tool in registry.list_tools()
    ]


async def call_tool(
    registry: ToolRegistry,
    name: str,
    arguments: dict[str, Any] | None,
) -> list[types.TextContent]:
    # Errors propagate; the SDK reports them as an isError tool result.
    result = await registry.invoke(name, arguments)
    return [types.TextContent(type="text", text=json.dumps(result, indent=2, ensure_ascii=False))]


def build_server(registry: ToolRegistry, settings: Settings) -> Server:
    server = Server(SERVER_NAME, version=settings.server.version)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return await list_tools(registry)

    @server.call_tool()
    async def _call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        logger.debug("call_tool", extra={"tool": name})
        return await call_tool(registry, name, arguments)

    return server


async def serve(
    config: SessionConfig,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """
    运行 stdio MCP 服务直到输入流关闭

    抛出:
        ConfigurationError: 启动时没有可用的 API Key
    """
    registry = create_stateless_registry(config, settings, transport=transport)
    server = build_server(registry, settings)
    logger.info("Starting Google Maps MCP server on stdio", extra={"tools": len(registry.list_tools())})
    options = server.create_initialization_options()
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, options)
