"""
描述: 错误类型定义
主要功能:
    - 统一的异常基类 MapsMcpError
    - 每类错误携带 JSON-RPC 错误码与 HTTP 状态码
"""

from __future__ import annotations

from dataclasses import dataclass


METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
SERVER_NOT_INITIALIZED = -32002


# region 异常层级
class MapsMcpError(Exception):
    """所有服务端错误的基类"""
    code: int = INTERNAL_ERROR
    http_status: int = 500


class ConfigurationError(MapsMcpError):
    """缺少 API Key 等配置问题"""
    code = INVALID_PARAMS
    http_status = 400


class ToolValidationError(MapsMcpError):
    """工具参数未通过 schema 校验"""
    code = INVALID_PARAMS
    http_status = 400

    def __init__(self, tool_name: str, detail: str) -> None:
        self.tool_name = tool_name
        self.detail = detail
        super().__init__(f"Invalid arguments for tool {tool_name}: {detail}")


class ToolNotFoundError(MapsMcpError):
    code = INVALID_PARAMS
    http_status = 400

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}")


class MethodNotFoundError(MapsMcpError):
    code = METHOD_NOT_FOUND
    http_status = 404

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class NotInitializedError(MapsMcpError):
    code = SERVER_NOT_INITIALIZED
    http_status = 400

    def __init__(self) -> None:
        super().__init__("Server not initialized. Call initialize first.")


class UpstreamTransportError(MapsMcpError):
    """网络异常或上游返回了无法解析的响应"""


@dataclass(eq=False)
class MapsAPIError(MapsMcpError):
    """Google Maps 返回了非 OK 状态"""
    status: str
    message: str
    operation: str = ""

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.operation:
            return f"{self.operation} failed: {self.message}"
        return self.message


class NoResultsError(MapsAPIError):
    """状态为 OK 但结果集为空"""

    def __init__(self, operation: str = "") -> None:
        super().__init__(status="ZERO_RESULTS", message="No results returned", operation=operation)
# endregion
