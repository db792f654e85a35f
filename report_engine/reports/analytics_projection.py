"""Deterministic multi-horizon growth projections."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from report_engine.reports.analytics_core import build_value_frame
from report_engine.reports.models import ReportInput
from report_engine.reports.tables import DEFAULT_HORIZONS, PROJECTION_SCENARIOS, growth_rate_for


def validate_scenario(scenario: str) -> str:
    clean = str(scenario).strip().lower()
    if clean not in PROJECTION_SCENARIOS:
        raise ValueError(f"Unknown projection scenario {scenario!r}; expected one of {list(PROJECTION_SCENARIOS)}.")
    return clean


def validate_horizons(horizons: Sequence[int]) -> tuple[int, ...]:
    values = tuple(horizons)
    if not values:
        raise ValueError("Projection horizons must not be empty.")
    if any(isinstance(years, bool) or not isinstance(years, int) or years <= 0 for years in values):
        raise ValueError(f"Projection horizons must be positive whole years, got {list(values)}.")
    if any(later <= earlier for earlier, later in zip(values, values[1:])):
        raise ValueError(f"Projection horizons must be strictly increasing, got {list(values)}.")
    return values


def calculate_projection_results(
    report_input: ReportInput,
    scenario: str,
    horizons: Sequence[int] = DEFAULT_HORIZONS,
) -> list[dict[str, object]]:
    """Compound each asset at its category growth rate over every horizon.

    Returns one record per horizon with the projected total, the absolute
    growth, the cumulative growth rate in percent, and the projected value
    per category.
    """
    scenario = validate_scenario(scenario)
    years = validate_horizons(horizons)
    frame = build_value_frame(report_input)
    current_total = float(frame["value"].sum()) if not frame.empty else 0.0

    rates = np.array([growth_rate_for(category, scenario) for category in frame["category"]], dtype=float)
    values = frame["value"].to_numpy(dtype=float)
    # factors[i, j] = growth of asset i over horizon j
    factors = np.power(1.0 + rates[:, None] / 100.0, np.array(years, dtype=float)[None, :])
    projected = values[:, None] * factors

    categories = frame["category"].astype(str).tolist()
    results: list[dict[str, object]] = []
    for column, horizon in enumerate(years):
        column_values = projected[:, column]
        total = float(column_values.sum())
        by_category: dict[str, float] = {}
        for category, value in zip(categories, column_values):
            by_category[category] = by_category.get(category, 0.0) + float(value)
        results.append(
            {
                "years": horizon,
                "totalValue": total,
                "growth": total - current_total,
                "growthRate": ((total / current_total) - 1.0) * 100.0 if current_total > 0 else 0.0,
                "assetProjections": dict(sorted(by_category.items())),
            }
        )
    return results
