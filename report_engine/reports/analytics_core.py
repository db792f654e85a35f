"""Value distribution and liquidity analytics over a portfolio snapshot."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from report_engine.reports.models import UNDEFINED_CATEGORY, Asset, Ownership, ReportInput
from report_engine.reports.payloads import sanitize_amount
from report_engine.reports.tables import LIQUIDITY_TIERS, liquidity_tier_for

FRAME_COLUMNS = ["asset_id", "category", "base_value", "ownership_percent", "value"]


def calculate_ownership_percentage(ownerships: Iterable[Ownership]) -> float:
    total = sum(sanitize_amount(ownership.percentage) for ownership in ownerships)
    return max(0.0, min(100.0, total))


def relevant_ownerships(asset: Asset, entity_ids: tuple[str, ...]) -> list[Ownership]:
    if not entity_ids:
        return list(asset.ownerships)
    wanted = set(entity_ids)
    return [ownership for ownership in asset.ownerships if ownership.owner_entity_id in wanted]


def resolve_category(asset: Asset) -> str:
    if not asset.category:
        return UNDEFINED_CATEGORY
    if not asset.valuations and not asset.ownerships:
        return UNDEFINED_CATEGORY
    return asset.category


def effective_value(asset: Asset, entity_ids: tuple[str, ...] = ()) -> float:
    latest = asset.latest_valuation
    if latest is None:
        return 0.0
    percent = calculate_ownership_percentage(relevant_ownerships(asset, entity_ids))
    return sanitize_amount(latest.value) * (percent / 100.0)


def selected_assets(report_input: ReportInput) -> list[Asset]:
    """Assets in scope for the report, in identifier order."""
    wanted = set(report_input.filters.assets)
    assets = [asset for asset in report_input.assets if not wanted or asset.id in wanted]
    return sorted(assets, key=lambda asset: asset.id)


def build_value_frame(report_input: ReportInput) -> pd.DataFrame:
    """One row per in-scope asset with its effective (owned) value."""
    entity_ids = report_input.filters.entities
    rows = []
    for asset in selected_assets(report_input):
        latest = asset.latest_valuation
        base_value = sanitize_amount(latest.value) if latest is not None else 0.0
        percent = calculate_ownership_percentage(relevant_ownerships(asset, entity_ids))
        rows.append(
            {
                "asset_id": asset.id,
                "category": resolve_category(asset),
                "base_value": base_value,
                "ownership_percent": percent,
                "value": base_value * (percent / 100.0),
            }
        )
    frame = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    return frame.astype({"base_value": float, "ownership_percent": float, "value": float})


def _share(value: float, total: float) -> float:
    return (value / total) * 100.0 if total > 0 else 0.0


def calculate_asset_type_distribution(report_input: ReportInput) -> dict[str, object]:
    frame = build_value_frame(report_input)
    if frame.empty:
        return {"totalValue": 0.0, "assetsByType": {}}
    total_value = float(frame["value"].sum())
    grouped = frame.groupby("category", sort=True)["value"].agg(["sum", "count"])
    assets_by_type = {
        str(category): {
            "value": float(row["sum"]),
            "count": int(row["count"]),
            "percentage": _share(float(row["sum"]), total_value),
        }
        for category, row in grouped.iterrows()
    }
    return {"totalValue": total_value, "assetsByType": assets_by_type}


def calculate_liquidity_analysis(report_input: ReportInput) -> dict[str, dict[str, object]]:
    frame = build_value_frame(report_input)
    if frame.empty:
        return {}
    frame["tier"] = frame["category"].map(lambda category: liquidity_tier_for(category).name)
    total_value = float(frame["value"].sum())
    grouped = frame.groupby("tier", sort=False).agg(
        value=("value", "sum"),
        count=("value", "size"),
        asset_ids=("asset_id", lambda ids: list(ids)),
    )
    analysis: dict[str, dict[str, object]] = {}
    for tier in LIQUIDITY_TIERS:
        if tier.name not in grouped.index:
            continue
        row = grouped.loc[tier.name]
        analysis[tier.name] = {
            "value": float(row["value"]),
            "count": int(row["count"]),
            "percentage": _share(float(row["value"]), total_value),
            "days": tier.days,
            "assetIds": list(row["asset_ids"]),
        }
    return analysis
