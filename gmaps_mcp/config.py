"""
描述: Google Maps MCP Server 全局配置加载器
主要功能:
    - 统一管理 HTTP / stdio 两种传输的配置
    - 支持 YAML 文件加载与环境变量覆盖
    - 定义会话级配置 (apiKey / debug)
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field


_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


# region 基础配置模型
class ServerSettings(BaseModel):
    """服务监听配置"""
    host: str = "0.0.0.0"
    port: int = 3000
    name: str = "Google Maps MCP Server"
    version: str = "0.1.0"
    protocol_version: str = "2024-11-05"
    debug: bool = False


class MapsSettings(BaseModel):
    """Google Maps Web Service 配置"""
    api_base: str = "https://maps.googleapis.com/maps/api"
    # Only an explicit key in the config file lands here; env keys are resolved per session.
    api_key: str = ""
    timeout: float = 30.0


class LoggingSettings(BaseModel):
    """日志系统配置"""
    level: str = "INFO"
    format: str = "json"


class Settings(BaseModel):
    """配置聚合根"""
    server: ServerSettings = Field(default_factory=ServerSettings)
    maps: MapsSettings = Field(default_factory=MapsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class SessionConfig(BaseModel):
    """
    会话配置 (initialize params / stdio 启动参数)

    属性:
        api_key: 显式 API Key, 优先级最高
        debug: 是否开启调试日志
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    api_key: str | None = Field(default=None, alias="apiKey")
    debug: bool = False
# endregion


# region 配置加载逻辑
def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        def replace(match: re.Match[str]) -> str:
            expr = match.group(1)
            if ":-" in expr:
                key, default = expr.split(":-", 1)
                return os.getenv(key, default)
            return os.getenv(expr, "")

        return _ENV_PATTERN.sub(replace, value)
    if isinstance(value, list):
        return [_expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: _expand_env(val) for key, val in value.items()}
    return value


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return _expand_env(data)


def _set_nested(data: dict[str, Any], keys: list[str], value: Any) -> None:
    current = data
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    mapping = {
        "HOST": ["server", "host"],
        "PORT": ["server", "port"],
        "DEBUG": ["server", "debug"],
        "GOOGLE_MAPS_API_BASE": ["maps", "api_base"],
        "MAPS_REQUEST_TIMEOUT": ["maps", "timeout"],
        "LOG_LEVEL": ["logging", "level"],
        "LOG_FORMAT": ["logging", "format"],
    }
    for env_key, path in mapping.items():
        env_value = os.getenv(env_key)
        if env_value is not None and env_value != "":
            _set_nested(data, path, env_value)
    return data


def load_settings(config_path: str | None = None) -> Settings:
    path = Path(config_path or os.getenv("CONFIG_PATH", "config.yaml"))
    data = _load_yaml(path)
    data = _apply_env_overrides(data)
    return Settings.model_validate(data)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """获取单例配置对象"""
    return load_settings()
# endregion
