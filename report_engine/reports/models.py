"""Typed report and debt models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

UNDEFINED_CATEGORY = "Non défini"


class EntityKind(str, Enum):
    INDIVIDUAL = "INDIVIDUAL"
    LEGAL_PERSON = "LEGAL_PERSON"


class AmortizationType(str, Enum):
    PROGRESSIVE = "PROGRESSIVE"
    LINEAR = "LINEAR"
    IN_FINE = "IN_FINE"
    BULLET = "BULLET"


@dataclass(frozen=True)
class Valuation:
    value: float
    currency: str = "EUR"
    valuation_date: date | None = None


@dataclass(frozen=True)
class Ownership:
    owner_entity_id: str
    percentage: float


@dataclass
class Payment:
    payment_number: int
    payment_date: date
    principal_amount: float
    interest_amount: float
    total_amount: float
    remaining_balance: float
    is_paid: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "paymentNumber": self.payment_number,
            "paymentDate": self.payment_date.isoformat(),
            "principalAmount": self.principal_amount,
            "interestAmount": self.interest_amount,
            "totalAmount": self.total_amount,
            "remainingBalance": self.remaining_balance,
            "isPaid": self.is_paid,
        }


@dataclass
class Debt:
    name: str
    initial_amount: float
    interest_rate: float
    duration_months: int
    amortization_type: AmortizationType
    start_date: date
    end_date: date
    monthly_payment: float
    payments: list[Payment] = field(default_factory=list)
    debt_type: str = "LOAN"
    lender: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "debtType": self.debt_type,
            "initialAmount": self.initial_amount,
            "interestRate": self.interest_rate,
            "duration": self.duration_months,
            "amortizationType": self.amortization_type.value,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "monthlyPayment": self.monthly_payment,
            "lender": self.lender,
            "payments": [payment.to_dict() for payment in self.payments],
        }


@dataclass(frozen=True)
class Asset:
    """A portfolio line as read from the application's snapshot.

    Valuations are ordered most-recent-first; ownership percentages are
    not required to add up to 100.
    """

    id: str
    name: str = ""
    category: str | None = None
    valuations: tuple[Valuation, ...] = ()
    ownerships: tuple[Ownership, ...] = ()
    debts: tuple[Debt, ...] = ()

    @property
    def latest_valuation(self) -> Valuation | None:
        return self.valuations[0] if self.valuations else None


@dataclass(frozen=True)
class Entity:
    id: str
    name: str = ""
    kind: EntityKind = EntityKind.INDIVIDUAL
    user_id: str | None = None


@dataclass(frozen=True)
class ReportFilter:
    period: str = "1Y"
    entities: tuple[str, ...] = ()
    assets: tuple[str, ...] = ()
    currency: str = "EUR"
    report_type: str = "bilan_complet"
    liquidity_filter: str = "all"
    include_projections: bool = False
    fiscal_optimization: bool = False


@dataclass(frozen=True)
class ReportInput:
    assets: tuple[Asset, ...] = ()
    entities: tuple[Entity, ...] = ()
    filters: ReportFilter = field(default_factory=ReportFilter)

    @classmethod
    def from_payload(cls, payload: Any) -> "ReportInput":
        from report_engine.reports.payloads import parse_report_input

        return parse_report_input(payload)


@dataclass
class CacheEntry:
    key: str
    value: object
    created_at: float
    last_accessed_at: float
    hit_count: int = 0
    computation_ms: float = 0.0


@dataclass(frozen=True)
class CacheStatistics:
    hits: int
    misses: int
    total_computation_time: float
    average_computation_time: float

    def to_dict(self) -> dict[str, float | int]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "totalComputationTime": self.total_computation_time,
            "averageComputationTime": self.average_computation_time,
        }
