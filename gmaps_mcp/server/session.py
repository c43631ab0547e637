"""
描述: MCP 会话管理
主要功能:
    - McpSession: 持有已解析的 API Key 与绑定的工具注册中心
    - SessionSlot: HTTP 模式下进程内唯一的会话槽位 (后写覆盖)
    - create_stateless_registry: 不经过 initialize 门控, 直接按配置构建注册中心
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from gmaps_mcp.config import SessionConfig, Settings
from gmaps_mcp.credentials import CredentialContext, CredentialSource
from gmaps_mcp.errors import NotInitializedError
from gmaps_mcp.maps.client import GoogleMapsClient
from gmaps_mcp.tools.base import ToolContext
from gmaps_mcp.tools.registry import ToolRegistry
from gmaps_mcp.utils.logger import set_debug


logger = logging.getLogger(__name__)


@dataclass
class McpSession:
    api_key: str
    config: SessionConfig
    registry: ToolRegistry


def build_session(
    api_key: str,
    config: SessionConfig,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> McpSession:
    """根据已解析的 Key 构建会话 (客户端 + 注册中心)"""
    client = GoogleMapsClient(api_key, settings, transport=transport)
    registry = ToolRegistry(ToolContext(settings=settings, client=client))
    set_debug(config.debug or settings.server.debug)
    return McpSession(api_key=api_key, config=config, registry=registry)


def create_stateless_registry(
    config: SessionConfig,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ToolRegistry:
    """
    仅从配置与进程环境解析 Key 并构建注册中心 (stdio 使用)

    抛出:
        ConfigurationError: 所有来源都没有 Key
    """
    context = CredentialContext(config_key=config.api_key or settings.maps.api_key or None)
    api_key = CredentialSource().resolve(context)
    return build_session(api_key, config, settings, transport=transport).registry


# region 会话槽位
class SessionSlot:
    """
    进程级会话槽位

    注意:
        - 同一时刻最多一个会话, 再次 initialize 会直接替换
        - 并发 initialize 之间没有隔离, 按连接区分会话需要更换存储结构
    """

    def __init__(
        self,
        settings: Settings,
        credentials: CredentialSource | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._credentials = credentials or CredentialSource()
        self._transport = transport
        self._session: McpSession | None = None

    def resolve_api_key(
        self,
        config: SessionConfig,
        headers: Mapping[str, str],
        body: Mapping[str, Any] | None,
    ) -> str:
        context = CredentialContext(
            config_key=config.api_key or self._settings.maps.api_key or None,
            headers=headers,
            body=body,
        )
        return self._credentials.resolve(context)

    def initialize(self, api_key: str, config: SessionConfig) -> McpSession:
        session = build_session(api_key, config, self._settings, transport=self._transport)
        if self._session is not None:
            logger.info("Replacing existing MCP session")
        self._session = session
        logger.info("MCP session initialized", extra={"debug": config.debug})
        return session

    def require(self) -> McpSession:
        if self._session is None:
            raise NotInitializedError()
        return self._session
# endregion
