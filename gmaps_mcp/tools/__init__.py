"""
描述: MCP 工具注册入口。
主要功能:
    - 导入并注册 Google Maps 工具
    - 在服务启动时完成工具发现
"""

from gmaps_mcp.tools import maps  # noqa: F401
