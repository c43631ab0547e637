"""
描述: MCP 工具基类定义
主要功能:
    - 定义 BaseTool 抽象基类 (参数校验 -> 上游请求 -> 结果裁剪)
    - 定义 ToolContext 上下文对象
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

from gmaps_mcp.config import Settings
from gmaps_mcp.errors import ToolValidationError
from gmaps_mcp.maps.client import GoogleMapsClient
from gmaps_mcp.maps.shapers import shape


# region 工具上下文与基类
@dataclass
class ToolContext:
    """工具执行上下文 (依赖注入)"""
    settings: Settings
    client: GoogleMapsClient


class NoArguments(BaseModel):
    pass


def describe_errors(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "arguments"
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


class BaseTool(ABC):
    """MCP 工具抽象基类"""
    name: str = "base_tool"
    description: str = "Base tool description"
    arguments: type[BaseModel] = NoArguments

    def __init__(self, context: ToolContext) -> None:
        self.context = context

    @classmethod
    def input_schema(cls) -> dict[str, Any]:
        return cls.arguments.model_json_schema()

    @classmethod
    def validate(cls, params: Mapping[str, Any] | None) -> BaseModel:
        """
        按参数模型校验

        抛出:
            ToolValidationError: 参数缺失或类型不符
        """
        if params is not None and not isinstance(params, Mapping):
            raise ToolValidationError(cls.name, "arguments must be an object")
        try:
            return cls.arguments.model_validate(dict(params or {}))
        except ValidationError as exc:
            raise ToolValidationError(cls.name, describe_errors(exc)) from exc

    @abstractmethod
    async def fetch(self, args: Any) -> dict[str, Any]:
        """
        调用上游接口

        参数:
            args: 已校验的参数模型

        返回:
            status 为 OK 的原始响应
        """
        raise NotImplementedError

    async def run(self, params: Mapping[str, Any] | None) -> dict[str, Any]:
        args = self.validate(params)
        payload = await self.fetch(args)
        return shape(self.name, payload)
# endregion
