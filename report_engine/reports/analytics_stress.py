"""Portfolio stress-testing scenarios."""

from __future__ import annotations

import numpy as np
import pandas as pd

from report_engine.reports.analytics_core import build_value_frame
from report_engine.reports.models import ReportInput
from report_engine.reports.tables import STRESS_SCENARIOS, StressScenario


def _scenario_result(frame: pd.DataFrame, scenario: StressScenario) -> dict[str, object]:
    baseline = float(frame["value"].sum()) if not frame.empty else 0.0
    if frame.empty:
        return {
            "scenario": scenario.name,
            "description": scenario.description,
            "baselineValue": 0.0,
            "totalLoss": 0.0,
            "totalValue": 0.0,
            "impactRate": 0.0,
            "impactsByType": {},
        }
    shocked = frame.assign(rate=frame["category"].map(scenario.impact_for).astype(float))
    # Gains in a scenario never offset losses elsewhere.
    shocked["loss"] = np.where(shocked["rate"] < 0, shocked["value"] * (-shocked["rate"] / 100.0), 0.0)
    total_loss = float(shocked["loss"].sum())
    grouped = shocked.groupby("category", sort=True)[["value", "loss"]].sum()
    impacts_by_type = {
        str(category): {
            "value": float(row["value"]),
            "loss": float(row["loss"]),
            "impactRate": scenario.impact_for(str(category)),
        }
        for category, row in grouped.iterrows()
    }
    return {
        "scenario": scenario.name,
        "description": scenario.description,
        "baselineValue": baseline,
        "totalLoss": total_loss,
        "totalValue": baseline - total_loss,
        "impactRate": -(total_loss / baseline) * 100.0 if baseline > 0 else 0.0,
        "impactsByType": impacts_by_type,
    }


def calculate_stress_test_results(
    report_input: ReportInput,
    scenarios: tuple[StressScenario, ...] = STRESS_SCENARIOS,
) -> list[dict[str, object]]:
    frame = build_value_frame(report_input)
    return [_scenario_result(frame, scenario) for scenario in scenarios]
