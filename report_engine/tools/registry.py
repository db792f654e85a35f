"""Domain tool registry entrypoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from mcp.server.fastmcp import FastMCP

from report_engine.cache.lru_cache import BoundedResultCache
from report_engine.config.settings import Settings
from report_engine.reports.report_service import ReportCacheService
from report_engine.tools.debt_tools import register_debt_tools
from report_engine.tools.report_tools import register_report_tools


@dataclass
class ToolServices:
    reports: ReportCacheService
    today: Callable[[], date] = field(default=date.today)


def build_tool_services(settings: Settings) -> ToolServices:
    cache = BoundedResultCache(
        capacity=settings.report_cache_capacity,
        ttl_seconds=settings.report_cache_ttl_seconds or None,
    )
    return ToolServices(reports=ReportCacheService(cache=cache))


def register_all_tools(mcp: FastMCP, services: ToolServices) -> None:
    register_report_tools(mcp, services)
    register_debt_tools(mcp, services)
