import copy
import json
import time

import pytest

from report_engine.cache.lru_cache import BoundedResultCache
from report_engine.reports import ReportInput
from report_engine.reports.report_service import ANALYTIC_FAMILIES, ReportCacheService

ASSETS = [
    {
        "id": "asset1",
        "name": "Apple shares",
        "assetType": {"name": "Equities", "color": "#3B82F6"},
        "valuations": [{"value": 50000, "currency": "EUR", "valuationDate": "2024-01-01"}],
        "ownerships": [{"percentage": 100, "ownerEntity": {"id": "entity1", "name": "John Doe"}}],
    },
    {
        "id": "asset2",
        "name": "Paris flat",
        "assetType": {"name": "Real Estate", "color": "#EF4444"},
        "valuations": [{"value": 300000, "currency": "EUR", "valuationDate": "2024-01-01"}],
        "ownerships": [{"percentage": 50, "ownerEntity": {"id": "entity1", "name": "John Doe"}}],
    },
]
ENTITIES = [{"id": "entity1", "name": "John Doe", "type": "PHYSICAL_PERSON"}]
FILTERS = {
    "period": "1Y",
    "entities": [],
    "assets": [],
    "currency": "EUR",
    "reportType": "bilan_complet",
    "includeProjections": False,
    "liquidityFilter": "all",
    "fiscalOptimization": False,
}


def _payload(**overrides) -> dict:
    payload = {"assets": copy.deepcopy(ASSETS), "entities": copy.deepcopy(ENTITIES), "filters": dict(FILTERS)}
    payload.update(overrides)
    return payload


def test_service_starts_empty() -> None:
    service = ReportCacheService()
    assert service.get_cache_size() == 0
    assert service.get_stats()["hits"] == 0
    assert service.get_stats()["misses"] == 0


def test_asset_type_distribution_example() -> None:
    result = ReportCacheService().get_asset_type_distribution(_payload())
    assert result["totalValue"] == 200000
    assert result["assetsByType"]["Equities"]["value"] == 50000
    assert result["assetsByType"]["Real Estate"]["value"] == 150000


def test_identical_requests_hit_the_cache() -> None:
    service = ReportCacheService()
    first = service.get_asset_type_distribution(_payload())
    second = service.get_asset_type_distribution(_payload())
    assert json.dumps(first) == json.dumps(second)
    assert service.get_stats()["hits"] == 1
    assert service.get_stats()["misses"] == 1


def test_permuted_assets_resolve_to_same_key() -> None:
    service = ReportCacheService()
    forward = service.get_asset_type_distribution(_payload())
    reversed_payload = _payload(assets=list(reversed(copy.deepcopy(ASSETS))))
    backward = service.get_asset_type_distribution(reversed_payload)
    assert json.dumps(forward) == json.dumps(backward)
    assert service.get_cache_size() == 1
    assert service.get_stats()["hits"] == 1


@pytest.mark.parametrize(
    "mutate",
    [
        lambda payload: payload["assets"][0]["valuations"][0].update(value=51000),
        lambda payload: payload["assets"][1]["ownerships"][0].update(percentage=60),
        lambda payload: payload["filters"].update(reportType="performance"),
        lambda payload: payload["filters"].update(period="5Y"),
        lambda payload: payload["filters"].update(fiscalOptimization=True),
    ],
)
def test_content_changes_produce_fresh_computation(mutate) -> None:
    service = ReportCacheService()
    service.get_asset_type_distribution(_payload())
    changed = _payload()
    mutate(changed)
    service.get_asset_type_distribution(changed)
    assert service.get_cache_size() == 2
    assert service.get_stats()["misses"] == 2


def test_cache_size_is_bounded() -> None:
    service = ReportCacheService()
    for index in range(120):
        payload = _payload()
        payload["assets"][0]["valuations"][0]["value"] = 1000 + index
        service.get_asset_type_distribution(payload)
    assert service.get_cache_size() <= 100
    assert service.get_stats()["misses"] == 120


def test_invalidate_by_pattern_targets_one_family() -> None:
    service = ReportCacheService()
    payload = _payload()
    service.get_asset_type_distribution(payload)
    service.get_liquidity_analysis(payload)
    service.get_stress_test_results(payload)
    service.get_projection_results(payload, "realistic")
    assert service.get_cache_size() == len(ANALYTIC_FAMILIES)

    assert service.invalidate_by_pattern("asset_type_distribution") == 1
    assert service.get_cache_size() == 3
    assert not any(key.startswith("asset_type_distribution") for key in service.cache.keys())


def test_clear_cache_resets_size_and_counters() -> None:
    service = ReportCacheService()
    service.get_liquidity_analysis(_payload())
    service.get_liquidity_analysis(_payload())
    service.clear_cache()
    assert service.get_cache_size() == 0
    assert service.get_stats()["hits"] == 0
    assert service.get_stats()["misses"] == 0


def test_projection_scenarios_are_cached_separately_and_validated() -> None:
    service = ReportCacheService()
    realistic = service.get_projection_results(_payload(), "realistic")
    optimistic = service.get_projection_results(_payload(), "optimistic")
    assert service.get_cache_size() == 2
    assert optimistic[0]["totalValue"] >= realistic[0]["totalValue"]
    assert realistic[2]["totalValue"] > realistic[0]["totalValue"]
    with pytest.raises(ValueError):
        service.get_projection_results(_payload(), "unknown")
    assert service.get_stats()["misses"] == 2


def test_explicit_cache_instance_is_used() -> None:
    cache = BoundedResultCache(capacity=1)
    service = ReportCacheService(cache=cache)
    service.get_stress_test_results(_payload())
    service.get_liquidity_analysis(_payload())
    assert cache.size() == 1
    assert cache.keys()[0].startswith("liquidity_analysis:")


def _portfolio(size: int) -> list[dict]:
    return [
        {
            "id": f"asset{index:04d}",
            "assetType": {"name": ["Equities", "Real Estate", "Savings", "Bonds", "Crypto"][index % 5]},
            "valuations": [{"value": 1000 + index, "currency": "EUR"}],
            "ownerships": [{"percentage": 100, "ownerEntity": {"id": "entity1"}}],
        }
        for index in range(size)
    ]


def test_large_portfolio_is_computed_once_then_served_from_cache() -> None:
    service = ReportCacheService()
    payload = _payload(assets=_portfolio(1000))
    first = service.get_asset_type_distribution(payload)
    second = service.get_asset_type_distribution(payload)
    assert first == second
    assert first is not second
    assert sum(bucket["count"] for bucket in first["assetsByType"].values()) == 1000
    assert service.cache.stats().average_computation_time > 0


def test_editing_a_result_does_not_leak_into_later_hits() -> None:
    service = ReportCacheService()
    first = service.get_asset_type_distribution(_payload())
    first["totalValue"] = -1.0
    first["assetsByType"].pop("Equities")

    second = service.get_asset_type_distribution(_payload())
    assert second["totalValue"] == 50000 + 150000
    assert second["assetsByType"]["Equities"]["value"] == 50000
    assert service.get_stats()["hits"] == 1

    stress = service.get_stress_test_results(_payload())
    stress.clear()
    assert len(service.get_stress_test_results(_payload())) == 4


def test_cache_hit_is_faster_than_the_original_computation() -> None:
    service = ReportCacheService()
    service.get_asset_type_distribution(_payload(assets=_portfolio(1000)))
    key = service.cache.keys()[0]
    computation_ms = service.cache.entry(key).computation_ms

    started = time.perf_counter()
    value, found = service.cache.get(key)
    hit_ms = (time.perf_counter() - started) * 1000.0

    assert found
    assert value["totalValue"] > 0
    assert hit_ms < computation_ms


def test_analytics_sequence_on_2000_assets_stays_within_budget() -> None:
    report_input = ReportInput.from_payload(_payload(assets=_portfolio(2000)))
    service = ReportCacheService()

    started = time.perf_counter()
    distribution = service.get_asset_type_distribution(report_input)
    service.get_liquidity_analysis(report_input)
    service.get_stress_test_results(report_input)
    for scenario in ("optimistic", "realistic", "pessimistic"):
        service.get_projection_results(report_input, scenario)
    elapsed = time.perf_counter() - started

    assert sum(bucket["count"] for bucket in distribution["assetsByType"].values()) == 2000
    assert service.get_stats()["misses"] == 6
    assert elapsed < 2.0
