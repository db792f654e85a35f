"""Response formatting helpers."""

from __future__ import annotations

import math

REPORT_DISCLAIMER = "Informational use only. Projections and stress tests are deterministic estimates."


def _fmt_number(value: float | None, decimals: int = 2) -> str:
    if value is None or math.isnan(value) or math.isinf(value):
        return "n/a"
    return f"{value:,.{decimals}f}".replace(",", " ")


def format_percentage(value: float | None, decimals: int = 1) -> str:
    if value is None:
        return "n/a"
    return f"{_fmt_number(value, decimals)}%"


def format_report_currency(value: float | None, currency: str = "EUR") -> str:
    """Compact amount for reports: 1.2 M€, 350.0 K€, 950.00 €."""
    if value is None:
        return "n/a"
    unit = "€" if currency == "EUR" else currency
    if abs(value) >= 1_000_000:
        return f"{_fmt_number(value / 1_000_000, 1)} M{unit}"
    if abs(value) >= 1_000:
        return f"{_fmt_number(value / 1_000, 1)} K{unit}"
    return f"{_fmt_number(value)} {unit}"


def format_response(
    title: str,
    lines: list[str],
    warning: str | None = None,
    include_disclaimer: bool = True,
) -> str:
    chunks: list[str] = [title]
    if warning:
        chunks.append(f"Warning: {warning}")
    chunks.extend(lines)
    if include_disclaimer:
        chunks.extend(["---", REPORT_DISCLAIMER])
    return "\n".join(chunks)


def line_money(label: str, value: float | None, currency: str = "EUR") -> str:
    return f"{label}: {format_report_currency(value, currency)}"


def line_percent(label: str, value: float | None) -> str:
    return f"{label}: {format_percentage(value)}"
