"""Debt-domain MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from report_engine.debts.amortization import build_debt
from report_engine.tools.common import parse_start_date, to_json

if TYPE_CHECKING:
    from report_engine.tools.registry import ToolServices


def register_debt_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="Generate a debt payment schedule. amortization_type: PROGRESSIVE, LINEAR, IN_FINE, BULLET.")
    def generate_amortization_schedule(
        principal: float,
        annual_rate_pct: float,
        duration_months: int,
        amortization_type: str = "PROGRESSIVE",
        start_date: str = "",
        name: str = "Loan",
    ) -> str:
        start = parse_start_date(start_date) if start_date else services.today()
        debt = build_debt(
            name=name,
            initial_amount=principal,
            interest_rate=annual_rate_pct,
            duration_months=duration_months,
            amortization_type=amortization_type,
            start_date=start,
        )
        return to_json(debt.to_dict())
