"""Order-independent cache keys for report inputs."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable

from report_engine.reports.models import Asset, Entity, ReportFilter, ReportInput

# Serialization order for filters; every field of ReportFilter must be listed.
FINGERPRINT_FILTER_FIELDS = (
    "period",
    "entities",
    "assets",
    "currency",
    "report_type",
    "liquidity_filter",
    "include_projections",
    "fiscal_optimization",
)


def _asset_record(asset: Asset) -> list[object]:
    latest = asset.latest_valuation
    valuation = None
    if latest is not None:
        valuation = [
            latest.value,
            latest.currency,
            latest.valuation_date.isoformat() if latest.valuation_date else None,
        ]
    owners = sorted((ownership.owner_entity_id, ownership.percentage) for ownership in asset.ownerships)
    return [asset.id, asset.category, valuation, [list(pair) for pair in owners]]


def _filter_record(filters: ReportFilter) -> list[object]:
    record: list[object] = []
    for name in FINGERPRINT_FILTER_FIELDS:
        value = getattr(filters, name)
        if isinstance(value, tuple):
            value = sorted(value)
        record.append(value)
    return record


def fingerprint(assets: Iterable[Asset], entities: Iterable[Entity], filters: ReportFilter) -> str:
    """Hash the output-relevant content of a snapshot into a 32-char hex key.

    Assets are sorted by identifier and entity identifiers are sorted, so
    the same portfolio fetched in another row order yields the same key.
    """
    canonical = [
        sorted((_asset_record(asset) for asset in assets), key=lambda record: (str(record[0]), json.dumps(record, default=str))),
        sorted(entity.id for entity in entities),
        _filter_record(filters),
    ]
    encoded = json.dumps(canonical, separators=(",", ":"), ensure_ascii=True, default=str)
    return hashlib.md5(encoded.encode("utf-8")).hexdigest()


def analytic_key(analytic: str, report_input: ReportInput, *qualifiers: str) -> str:
    digest = fingerprint(report_input.assets, report_input.entities, report_input.filters)
    return ":".join((analytic, *qualifiers, digest))
