"""
描述: HTTP 桥接层 JSON-RPC 数据模型
主要功能:
    - 定义请求 (JsonRpcRequest)
    - 定义成功/错误响应 (JsonRpcResponse / JsonRpcError)
    - 定义 initialize 返回结构
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# region JSON-RPC 数据模型
class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 请求体"""
    model_config = ConfigDict(extra="allow")

    jsonrpc: str = "2.0"
    method: str
    params: dict[str, Any] | None = None
    id: int | str | None = None


class JsonRpcError(BaseModel):
    code: int
    message: str
    data: Any | None = None


class JsonRpcResponse(BaseModel):
    jsonrpc: str = "2.0"
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None
    id: int | str | None = None


class ServerInfo(BaseModel):
    name: str
    version: str


class InitializeResult(BaseModel):
    protocolVersion: str
    capabilities: dict[str, Any] = Field(default_factory=lambda: {"tools": {}})
    serverInfo: ServerInfo
# endregion
