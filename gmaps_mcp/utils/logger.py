"""
描述: 日志工具库
主要功能:
    - JSON 格式化输出 (包含 extra 字段)
    - 统一日志配置初始化 (输出到 stderr, 不污染 stdio 传输)
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from gmaps_mcp.config import LoggingSettings


PACKAGE_LOGGER = "gmaps_mcp"

# LogRecord 自带属性, 其余视为 extra 字段
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


# region 日志 Formatter
class JsonFormatter(logging.Formatter):
    """简单 JSON 日志格式化器"""
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)
# endregion


# region 日志初始化
def setup_logging(settings: LoggingSettings) -> None:
    """
    初始化日志系统

    参数:
        settings: 日志配置对象
    """
    level = getattr(logging, settings.level.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stderr)
    if settings.format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def set_debug(enabled: bool) -> None:
    """会话级 debug 开关, 只影响本包日志; 关闭时恢复继承 root 级别"""
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if enabled else logging.NOTSET)
# endregion
