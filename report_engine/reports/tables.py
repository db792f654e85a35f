"""Category rate tables for liquidity, stress, and projection analytics.

Category names follow the dashboard's asset-type taxonomy. Any category
missing from a table falls back to the documented default for that table.
"""

from __future__ import annotations

from dataclasses import dataclass

TABLES_VERSION = "2024.1"

REAL_ESTATE = "Real Estate"
SCPI = "SCPI"
EQUITIES = "Equities"
ETF = "ETF"
BONDS = "Bonds"
SAVINGS = "Savings"
CURRENT_ACCOUNT = "Current Account"
LIFE_INSURANCE = "Life Insurance"
PEA = "PEA"
CRYPTO = "Crypto"
OTHER = "Other"

ASSET_CATEGORIES = (
    REAL_ESTATE,
    SCPI,
    EQUITIES,
    ETF,
    BONDS,
    SAVINGS,
    CURRENT_ACCOUNT,
    LIFE_INSURANCE,
    PEA,
    CRYPTO,
    OTHER,
)


@dataclass(frozen=True)
class LiquidityTier:
    name: str
    days: str


IMMEDIATE = LiquidityTier("Immediate", "0-1 days")
SHORT_TERM = LiquidityTier("Short term", "1-7 days")
MEDIUM_TERM = LiquidityTier("Medium term", "1-3 months")
LONG_TERM = LiquidityTier("Long term", "3+ months")

LIQUIDITY_TIERS = (IMMEDIATE, SHORT_TERM, MEDIUM_TERM, LONG_TERM)
DEFAULT_LIQUIDITY_TIER = MEDIUM_TERM

LIQUIDITY_BY_CATEGORY: dict[str, LiquidityTier] = {
    SAVINGS: IMMEDIATE,
    CURRENT_ACCOUNT: IMMEDIATE,
    EQUITIES: SHORT_TERM,
    ETF: SHORT_TERM,
    BONDS: SHORT_TERM,
    CRYPTO: SHORT_TERM,
    LIFE_INSURANCE: MEDIUM_TERM,
    PEA: MEDIUM_TERM,
    REAL_ESTATE: LONG_TERM,
    SCPI: LONG_TERM,
}


@dataclass(frozen=True)
class StressScenario:
    name: str
    description: str
    impacts: dict[str, float]

    def impact_for(self, category: str) -> float:
        return self.impacts.get(category, 0.0)


STRESS_SCENARIOS = (
    StressScenario(
        name="Market Crash",
        description="Equity markets fall by 30%",
        impacts={EQUITIES: -30.0, ETF: -25.0, BONDS: -5.0, REAL_ESTATE: -10.0, CRYPTO: -50.0, PEA: -25.0},
    ),
    StressScenario(
        name="Real-estate Crisis",
        description="Property prices fall by 20%",
        impacts={REAL_ESTATE: -20.0, SCPI: -15.0, EQUITIES: -10.0, BONDS: 5.0},
    ),
    StressScenario(
        name="Rate Shock",
        description="Sharp rise in interest rates and inflation",
        impacts={SAVINGS: -6.0, BONDS: -8.0, EQUITIES: 2.0, REAL_ESTATE: 4.0, LIFE_INSURANCE: -4.0, CRYPTO: 15.0},
    ),
    StressScenario(
        name="Liquidity Crisis",
        description="Restricted access to funds and forced sales",
        impacts={EQUITIES: -15.0, ETF: -12.0, BONDS: -5.0, REAL_ESTATE: -25.0, SCPI: -20.0, CRYPTO: -35.0},
    ),
)

PROJECTION_SCENARIOS = ("optimistic", "realistic", "pessimistic")
DEFAULT_HORIZONS = (1, 3, 5, 10, 15, 20)
DEFAULT_GROWTH_KEY = "default"

# Annual growth rates in percent per scenario.
GROWTH_ASSUMPTIONS: dict[str, dict[str, float]] = {
    EQUITIES: {"optimistic": 10.0, "realistic": 7.0, "pessimistic": 3.0},
    ETF: {"optimistic": 9.0, "realistic": 6.5, "pessimistic": 2.5},
    PEA: {"optimistic": 9.0, "realistic": 6.5, "pessimistic": 2.5},
    BONDS: {"optimistic": 4.0, "realistic": 2.5, "pessimistic": 0.5},
    REAL_ESTATE: {"optimistic": 6.0, "realistic": 4.0, "pessimistic": 1.0},
    SAVINGS: {"optimistic": 2.0, "realistic": 1.5, "pessimistic": 0.5},
    CURRENT_ACCOUNT: {"optimistic": 0.0, "realistic": 0.0, "pessimistic": 0.0},
    CRYPTO: {"optimistic": 25.0, "realistic": 12.0, "pessimistic": 0.0},
    SCPI: {"optimistic": 5.0, "realistic": 3.5, "pessimistic": 1.0},
    LIFE_INSURANCE: {"optimistic": 4.0, "realistic": 3.0, "pessimistic": 1.5},
    DEFAULT_GROWTH_KEY: {"optimistic": 6.0, "realistic": 4.0, "pessimistic": 1.0},
}


def liquidity_tier_for(category: str | None) -> LiquidityTier:
    if not category:
        return DEFAULT_LIQUIDITY_TIER
    return LIQUIDITY_BY_CATEGORY.get(category, DEFAULT_LIQUIDITY_TIER)


def growth_rate_for(category: str | None, scenario: str) -> float:
    row = GROWTH_ASSUMPTIONS.get(category or DEFAULT_GROWTH_KEY, GROWTH_ASSUMPTIONS[DEFAULT_GROWTH_KEY])
    return row[scenario]


def validate_growth_table(table: dict[str, dict[str, float]]) -> None:
    """Reject tables that would break projection ordering guarantees.

    Rates must be non-negative so projected totals never shrink as the
    horizon grows, and ordered optimistic >= realistic >= pessimistic so
    scenarios never cross.
    """
    if DEFAULT_GROWTH_KEY not in table:
        raise ValueError(f"Growth table must define a '{DEFAULT_GROWTH_KEY}' row.")
    for category, row in table.items():
        missing = [name for name in PROJECTION_SCENARIOS if name not in row]
        if missing:
            raise ValueError(f"Growth row '{category}' is missing scenarios: {missing}")
        rates = [row[name] for name in PROJECTION_SCENARIOS]
        if any(rate < 0 for rate in rates):
            raise ValueError(f"Growth row '{category}' has a negative rate.")
        if not rates[0] >= rates[1] >= rates[2]:
            raise ValueError(f"Growth row '{category}' must satisfy optimistic >= realistic >= pessimistic.")


validate_growth_table(GROWTH_ASSUMPTIONS)
