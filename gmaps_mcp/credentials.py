"""
描述: API Key 解析器
主要功能:
    - 按优先级依次尝试多个来源: 显式配置 > 请求头 > 请求体 context.environment > 进程环境变量
    - 每个来源都是纯函数, 便于单独测试
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from gmaps_mcp.errors import ConfigurationError


API_KEY_NAMES: tuple[str, ...] = ("GOOGLE_MAPS_API_KEY", "apiKey")


# region 解析上下文
@dataclass(frozen=True)
class CredentialContext:
    """
    一次解析所需的全部输入

    属性:
        config_key: 配置中显式给出的 Key
        headers: 请求头 (stdio 模式为空)
        body: 原始 JSON-RPC 请求体
        environ: 进程环境变量
    """
    config_key: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Mapping[str, Any] | None = None
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)


CredentialStrategy = Callable[[CredentialContext], str | None]


def _clean(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
# endregion


# region 查找策略
def from_config(context: CredentialContext) -> str | None:
    return _clean(context.config_key)


def from_headers(context: CredentialContext) -> str | None:
    lowered = {str(key).lower(): value for key, value in context.headers.items()}
    for name in API_KEY_NAMES:
        value = _clean(lowered.get(name.lower()))
        if value:
            return value
    return None


def from_body_environment(context: CredentialContext) -> str | None:
    body = context.body if isinstance(context.body, Mapping) else {}
    request_context = body.get("context")
    if not isinstance(request_context, Mapping):
        return None
    environment = request_context.get("environment")
    if not isinstance(environment, Mapping):
        return None
    for name in API_KEY_NAMES:
        value = _clean(environment.get(name))
        if value:
            return value
    return None


def from_process_environment(context: CredentialContext) -> str | None:
    for name in API_KEY_NAMES:
        value = _clean(context.environ.get(name))
        if value:
            return value
    return None


DEFAULT_STRATEGIES: tuple[CredentialStrategy, ...] = (
    from_config,
    from_headers,
    from_body_environment,
    from_process_environment,
)
# endregion


# region 解析器
class CredentialSource:
    """按顺序执行查找策略, 第一个命中即返回"""

    def __init__(self, strategies: Sequence[CredentialStrategy] = DEFAULT_STRATEGIES) -> None:
        self._strategies = tuple(strategies)

    def resolve(self, context: CredentialContext) -> str:
        for strategy in self._strategies:
            value = strategy(context)
            if value:
                return value
        raise ConfigurationError("GOOGLE_MAPS_API_KEY is required but not provided")


def resolve_api_key(context: CredentialContext) -> str:
    return CredentialSource().resolve(context)
# endregion
