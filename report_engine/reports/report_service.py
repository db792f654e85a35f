"""Cached report façade over the portfolio analytics."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, TypeVar, Union

from report_engine.cache.fingerprint import analytic_key
from report_engine.cache.lru_cache import DEFAULT_CAPACITY, BoundedResultCache
from report_engine.reports.analytics_core import calculate_asset_type_distribution, calculate_liquidity_analysis
from report_engine.reports.analytics_projection import calculate_projection_results, validate_scenario
from report_engine.reports.analytics_stress import calculate_stress_test_results
from report_engine.reports.models import ReportInput
from report_engine.reports.payloads import parse_report_input

T = TypeVar("T")
LOGGER = logging.getLogger(__name__)

ASSET_TYPE_DISTRIBUTION = "asset_type_distribution"
LIQUIDITY_ANALYSIS = "liquidity_analysis"
STRESS_TEST_RESULTS = "stress_test_results"
PROJECTION_RESULTS = "projection_results"
ANALYTIC_FAMILIES = (ASSET_TYPE_DISTRIBUTION, LIQUIDITY_ANALYSIS, STRESS_TEST_RESULTS, PROJECTION_RESULTS)

ReportPayload = Union[ReportInput, Mapping[str, Any]]


class ReportCacheService:
    """Entry point for the dashboard's cached analytics.

    Each analytic is keyed by its family name plus the snapshot fingerprint,
    so ``invalidate_by_pattern(ASSET_TYPE_DISTRIBUTION)`` drops one family
    and leaves the others in place.
    """

    def __init__(self, cache: BoundedResultCache | None = None, capacity: int = DEFAULT_CAPACITY) -> None:
        self.cache = cache or BoundedResultCache(capacity=capacity)

    def _get_or_compute(self, key: str, compute: Callable[[], T]) -> T:
        computed = False

        def _compute() -> T:
            nonlocal computed
            computed = True
            return compute()

        value = self.cache.get_or_compute(key, _compute)
        if computed:
            LOGGER.debug("report cache miss: key=%s size=%s", key, self.cache.size())
        else:
            LOGGER.debug("report cache hit: key=%s", key)
        return value

    def get_asset_type_distribution(self, report_input: ReportPayload) -> dict[str, object]:
        parsed = parse_report_input(report_input)
        key = analytic_key(ASSET_TYPE_DISTRIBUTION, parsed)
        return self._get_or_compute(key, lambda: calculate_asset_type_distribution(parsed))

    def get_liquidity_analysis(self, report_input: ReportPayload) -> dict[str, dict[str, object]]:
        parsed = parse_report_input(report_input)
        key = analytic_key(LIQUIDITY_ANALYSIS, parsed)
        return self._get_or_compute(key, lambda: calculate_liquidity_analysis(parsed))

    def get_stress_test_results(self, report_input: ReportPayload) -> list[dict[str, object]]:
        parsed = parse_report_input(report_input)
        key = analytic_key(STRESS_TEST_RESULTS, parsed)
        return self._get_or_compute(key, lambda: calculate_stress_test_results(parsed))

    def get_projection_results(self, report_input: ReportPayload, scenario: str) -> list[dict[str, object]]:
        clean_scenario = validate_scenario(scenario)
        parsed = parse_report_input(report_input)
        key = analytic_key(PROJECTION_RESULTS, parsed, clean_scenario)
        return self._get_or_compute(key, lambda: calculate_projection_results(parsed, clean_scenario))

    def get_cache_size(self) -> int:
        return self.cache.size()

    def get_stats(self) -> dict[str, float | int]:
        return self.cache.stats().to_dict()

    def clear_cache(self) -> None:
        self.cache.clear()
        LOGGER.debug("report cache cleared")

    def invalidate_by_pattern(self, pattern: str) -> int:
        removed = self.cache.invalidate(pattern)
        LOGGER.debug("report cache invalidated: pattern=%s removed=%s", pattern, removed)
        return removed
