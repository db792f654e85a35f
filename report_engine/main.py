"""Application entrypoint for the wealth report engine MCP server."""

from __future__ import annotations

import asyncio
import logging
import os

from mcp.server.fastmcp import FastMCP
from starlette.responses import JSONResponse, Response

from report_engine.config.settings import Settings, get_settings
from report_engine.tools.registry import ToolServices, build_tool_services, register_all_tools

LOGGER = logging.getLogger(__name__)


def resolve_transport_mode(configured_mode: str) -> str:
    if os.getenv("RENDER") and configured_mode == "stdio":
        return "http"
    if configured_mode in {"stdio", "http"}:
        return configured_mode
    if os.getenv("RENDER") or os.getenv("PORT"):
        return "http"
    return "stdio"


def resolve_http_transport(configured_transport: str) -> str:
    if configured_transport in {"sse", "streamable"}:
        return configured_transport
    return "sse"


def build_server(settings: Settings) -> tuple[FastMCP, ToolServices]:
    mcp = FastMCP(
        name=settings.app_name,
        host=settings.host,
        port=settings.port,
        streamable_http_path=settings.mcp_path,
    )
    services = build_tool_services(settings)
    register_all_tools(mcp, services)

    @mcp.custom_route(settings.health_path, methods=["GET"])
    async def health_check(_: object) -> Response:
        return JSONResponse(
            {
                "status": "ok",
                "service": settings.app_name,
                "version": settings.app_version,
                "report_cache": {"size": services.reports.get_cache_size(), **services.reports.get_stats()},
            }
        )

    return mcp, services


async def run() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    mcp, _ = build_server(settings)
    resolved_mode = resolve_transport_mode(settings.transport_mode)
    resolved_http_transport = resolve_http_transport(settings.http_transport)
    LOGGER.info(
        "starting server: name=%s mode=%s http_transport=%s cache_capacity=%s",
        settings.app_name,
        resolved_mode,
        resolved_http_transport,
        settings.report_cache_capacity,
    )
    if resolved_mode == "stdio":
        await mcp.run_stdio_async()
    elif resolved_http_transport == "streamable":
        await mcp.run_streamable_http_async()
    else:
        await mcp.run_sse_async()


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
