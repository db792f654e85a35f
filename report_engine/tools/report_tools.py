"""Report-domain MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from report_engine.lib.formatters import format_response, line_money, line_percent
from report_engine.tools.common import load_report_input, to_json

if TYPE_CHECKING:
    from report_engine.tools.registry import ToolServices


def register_report_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="Total owned value and breakdown by asset category for a portfolio snapshot JSON.")
    def get_asset_type_distribution(portfolio_json: str) -> str:
        return to_json(services.reports.get_asset_type_distribution(load_report_input(portfolio_json)))

    @mcp.tool(description="Owned value grouped by liquidity tier (Immediate, Short term, Medium term, Long term).")
    def get_liquidity_analysis(portfolio_json: str) -> str:
        return to_json(services.reports.get_liquidity_analysis(load_report_input(portfolio_json)))

    @mcp.tool(description="Apply the standard stress scenarios to a portfolio snapshot JSON.")
    def get_stress_test_results(portfolio_json: str) -> str:
        return to_json(services.reports.get_stress_test_results(load_report_input(portfolio_json)))

    @mcp.tool(description="Project portfolio value over 1-20 years. scenario: optimistic, realistic, pessimistic.")
    def get_projection_results(portfolio_json: str, scenario: str = "realistic") -> str:
        return to_json(services.reports.get_projection_results(load_report_input(portfolio_json), scenario))

    @mcp.tool(description="Human-readable summary of distribution, liquidity and worst stress scenario.")
    def summarize_portfolio_report(portfolio_json: str) -> str:
        report_input = load_report_input(portfolio_json)
        currency = report_input.filters.currency
        distribution = services.reports.get_asset_type_distribution(report_input)
        liquidity = services.reports.get_liquidity_analysis(report_input)
        stress = services.reports.get_stress_test_results(report_input)

        lines = [line_money("Total value", distribution["totalValue"], currency)]
        for category, bucket in distribution["assetsByType"].items():
            lines.append(f"- {category}: {line_money('value', bucket['value'], currency)} ({bucket['count']} assets)")
        for tier, bucket in liquidity.items():
            lines.append(line_percent(f"Liquidity {tier} ({bucket['days']})", bucket["percentage"]))
        warning = None
        if stress:
            worst = max(stress, key=lambda result: result["totalLoss"])
            lines.append(line_money(f"Worst stress scenario: {worst['scenario']} loss", worst["totalLoss"], currency))
        if not report_input.assets:
            warning = "Portfolio snapshot contains no assets."
        return format_response("Portfolio report", lines, warning=warning)

    @mcp.tool(description="Report cache statistics: size, hits, misses, average computation time (ms).")
    def get_report_cache_stats() -> str:
        return to_json({"size": services.reports.get_cache_size(), **services.reports.get_stats()})

    @mcp.tool(description="Clear every cached report and reset cache statistics.")
    def clear_report_cache() -> str:
        services.reports.clear_cache()
        return to_json({"ok": True, "size": services.reports.get_cache_size()})

    @mcp.tool(description="Drop cached reports whose key contains pattern, e.g. asset_type_distribution.")
    def invalidate_report_cache(pattern: str) -> str:
        removed = services.reports.invalidate_by_pattern(pattern)
        return to_json({"ok": True, "removed": removed, "size": services.reports.get_cache_size()})
