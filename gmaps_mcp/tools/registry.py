"""
描述: MCP 工具注册中心
主要功能:
    - 类级别目录: 通过装饰器登记工具类 (按声明顺序)
    - 实例级别: 绑定一个 ToolContext (即一个 API Key), 负责 tools/list 与 tools/call
    - 通用请求分发 handle(method, params)
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Type

from gmaps_mcp.errors import MapsAPIError, MethodNotFoundError, ToolNotFoundError, ToolValidationError
from gmaps_mcp.tools.base import BaseTool, ToolContext


# region 工具注册中心
class ToolRegistry:
    """工具注册中心"""
    _tools: dict[str, Type[BaseTool]] = {}
    _logger = logging.getLogger(__name__)

    @classmethod
    def register(cls, tool_cls: Type[BaseTool]) -> Type[BaseTool]:
        tool_name = getattr(tool_cls, "name", "")
        if not tool_name:
            cls._logger.warning(
                "Tool %s has no 'name' attribute, skipping registration",
                tool_cls.__name__,
            )
            return tool_cls
        if tool_name in cls._tools:
            cls._logger.warning("Tool %s already registered, overwriting", tool_name)
        cls._tools[tool_name] = tool_cls
        return tool_cls

    @classmethod
    def catalog(cls) -> list[Type[BaseTool]]:
        return list(cls._tools.values())

    def __init__(self, context: ToolContext) -> None:
        self.context = context
        self._instances = {name: tool_cls(context) for name, tool_cls in self._tools.items()}

    def list_tools(self) -> list[dict[str, Any]]:
        """获取所有已注册工具的元数据 (MCP tools/list 格式)"""
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "inputSchema": tool.input_schema(),
            }
            for tool in self._instances.values()
        ]

    async def invoke(self, name: str, arguments: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """执行工具, 返回裁剪后的结果; 失败时直接抛出"""
        tool = self._instances.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        return await tool.run(arguments)

    async def call(self, name: str, arguments: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """执行工具并包装为 MCP CallToolResult"""
        try:
            result = await self.invoke(name, arguments)
        except MapsAPIError as exc:
            self._logger.warning(
                "Tool %s failed upstream",
                name,
                extra={"tool": name, "status": exc.status},
            )
            return {"content": [{"type": "text", "text": str(exc)}], "isError": True}
        return {"content": [{"type": "text", "text": json.dumps(result, indent=2, ensure_ascii=False)}]}

    async def handle(self, method: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """通用 MCP 请求分发"""
        params = params or {}
        if method == "tools/list":
            return {"tools": self.list_tools()}
        if method == "tools/call":
            name = params.get("name")
            if not isinstance(name, str) or not name:
                raise ToolValidationError("tools/call", "params.name is required")
            return await self.call(name, params.get("arguments"))
        if method in ("ping", "notifications/initialized"):
            return {}
        raise MethodNotFoundError(method)
# endregion
