"""
描述: 命令行入口
主要功能:
    - --transport http: 使用 uvicorn 启动 HTTP 桥接 (默认端口 3000)
    - --transport stdio: 在标准输入输出上运行 MCP 服务
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from gmaps_mcp.config import SessionConfig, get_settings
from gmaps_mcp.errors import ConfigurationError
from gmaps_mcp.utils.logger import setup_logging


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="gmaps-mcp", description="Google Maps MCP server")
    parser.add_argument("--transport", choices=("http", "stdio"), default="http")
    parser.add_argument("--host", default=None, help="HTTP listen host (default from config / HOST)")
    parser.add_argument("--port", type=int, default=None, help="HTTP listen port (default from config / PORT)")
    parser.add_argument("--api-key", default=None, help="Explicit Google Maps API key (stdio only)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _run_http(args: argparse.Namespace) -> None:
    import uvicorn

    from gmaps_mcp.server.app_factory import create_app

    settings = get_settings()
    host = args.host or settings.server.host
    port = args.port or settings.server.port
    if args.debug:
        settings.server.debug = True
    app = create_app(settings)

    logger = logging.getLogger("gmaps_mcp")
    logger.info("Google Maps MCP Server listening on port %s", port)
    logger.info("Health check: http://localhost:%s/health", port)
    logger.info("MCP endpoint: http://localhost:%s/mcp", port)
    uvicorn.run(app, host=host, port=port, log_level="debug" if args.debug else "info")


def _run_stdio(args: argparse.Namespace) -> int:
    from gmaps_mcp.server.stdio import serve

    settings = get_settings()
    setup_logging(settings.logging)
    config = SessionConfig(api_key=args.api_key, debug=args.debug)
    try:
        asyncio.run(serve(config, settings))
    except ConfigurationError as exc:
        logging.getLogger("gmaps_mcp").error(str(exc))
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _parse_args(argv)
    if args.transport == "stdio":
        return _run_stdio(args)
    _run_http(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
