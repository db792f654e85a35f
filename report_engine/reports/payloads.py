"""Parsing of dashboard JSON payloads into typed report inputs."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from report_engine.reports.models import (
    Asset,
    Entity,
    EntityKind,
    Ownership,
    ReportFilter,
    ReportInput,
    Valuation,
)

LOGGER = logging.getLogger(__name__)
MAX_REASONABLE_AMOUNT = 1_000_000_000.0
MIN_REASONABLE_AMOUNT = -1_000_000_000.0
DEFAULT_CURRENCY = "EUR"


def is_valid_amount(amount: object) -> bool:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    if math.isnan(amount) or math.isinf(amount):
        return False
    return MIN_REASONABLE_AMOUNT <= amount <= MAX_REASONABLE_AMOUNT


def sanitize_amount(amount: object) -> float:
    """Return a usable float, or 0.0 for missing, non-numeric or absurd values."""
    if amount is None:
        return 0.0
    value = amount
    if isinstance(amount, str):
        try:
            value = float(amount.strip())
        except ValueError:
            LOGGER.debug("invalid amount ignored: %r", amount)
            return 0.0
    if not is_valid_amount(value):
        LOGGER.debug("invalid amount ignored: %r", amount)
        return 0.0
    return float(value)  # type: ignore[arg-type]


def _as_date(value: object) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None


def _as_list(value: object) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _as_str_tuple(value: object) -> tuple[str, ...]:
    return tuple(str(item) for item in _as_list(value) if item is not None)


def _as_bool(value: object, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _first(mapping: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in mapping and mapping[name] is not None:
            return mapping[name]
    return None


def parse_valuation(raw: object) -> Valuation | None:
    if not isinstance(raw, Mapping):
        return None
    return Valuation(
        value=sanitize_amount(raw.get("value")),
        currency=str(raw.get("currency") or DEFAULT_CURRENCY),
        valuation_date=_as_date(_first(raw, "valuationDate", "valuation_date", "date")),
    )


def parse_ownership(raw: object) -> Ownership | None:
    if not isinstance(raw, Mapping):
        return None
    owner = raw.get("ownerEntity")
    owner_id = owner.get("id") if isinstance(owner, Mapping) else None
    if owner_id is None:
        owner_id = _first(raw, "ownerEntityId", "owner_entity_id")
    if owner_id is None:
        return None
    return Ownership(owner_entity_id=str(owner_id), percentage=sanitize_amount(raw.get("percentage")))


def parse_asset(raw: object) -> Asset | None:
    if not isinstance(raw, Mapping) or raw.get("id") is None:
        return None
    asset_type = raw.get("assetType")
    category = asset_type.get("name") if isinstance(asset_type, Mapping) else None
    if category is None:
        category = raw.get("category")
    if category is not None:
        category = str(category).strip() or None
    valuations = [parse_valuation(item) for item in _as_list(raw.get("valuations"))]
    ownerships = [parse_ownership(item) for item in _as_list(raw.get("ownerships"))]
    return Asset(
        id=str(raw["id"]),
        name=str(raw.get("name") or ""),
        category=category,
        valuations=tuple(item for item in valuations if item is not None),
        ownerships=tuple(item for item in ownerships if item is not None),
    )


def parse_entity(raw: object) -> Entity | None:
    if not isinstance(raw, Mapping) or raw.get("id") is None:
        return None
    raw_kind = str(_first(raw, "type", "kind") or "").upper()
    kind = EntityKind.LEGAL_PERSON if raw_kind in {"LEGAL_PERSON", "LEGAL_ENTITY", "COMPANY"} else EntityKind.INDIVIDUAL
    user_id = _first(raw, "userId", "user_id")
    return Entity(
        id=str(raw["id"]),
        name=str(raw.get("name") or ""),
        kind=kind,
        user_id=str(user_id) if user_id is not None else None,
    )


def parse_filters(raw: object) -> ReportFilter:
    if not isinstance(raw, Mapping):
        return ReportFilter()
    defaults = ReportFilter()
    return ReportFilter(
        period=str(raw.get("period") or defaults.period),
        entities=_as_str_tuple(raw.get("entities")),
        assets=_as_str_tuple(raw.get("assets")),
        currency=str(raw.get("currency") or defaults.currency),
        report_type=str(_first(raw, "reportType", "report_type") or defaults.report_type),
        liquidity_filter=str(_first(raw, "liquidityFilter", "liquidity_filter") or defaults.liquidity_filter),
        include_projections=_as_bool(_first(raw, "includeProjections", "include_projections")),
        fiscal_optimization=_as_bool(_first(raw, "fiscalOptimization", "fiscal_optimization")),
    )


def parse_report_input(payload: object) -> ReportInput:
    """Build a ReportInput from a loosely-typed mapping.

    Malformed asset and entity records are dropped or degraded to empty
    fields; only a payload that is not a mapping at all is rejected.
    """
    if isinstance(payload, ReportInput):
        return payload
    if not isinstance(payload, Mapping):
        raise ValueError("Report payload must be a mapping with assets, entities and filters.")
    assets = [parse_asset(item) for item in _as_list(payload.get("assets"))]
    entities = [parse_entity(item) for item in _as_list(payload.get("entities"))]
    return ReportInput(
        assets=tuple(item for item in assets if item is not None),
        entities=tuple(item for item in entities if item is not None),
        filters=parse_filters(payload.get("filters")),
    )
