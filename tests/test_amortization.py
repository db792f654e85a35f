from datetime import date

import pytest

from report_engine.debts import build_debt, mark_payment_paid, outstanding_balance, schedule
from report_engine.debts.amortization import add_months, monthly_payment, parse_amortization_type
from report_engine.reports.models import AmortizationType


def test_linear_schedule_example() -> None:
    payments = schedule(1000, 12, 12, "LINEAR", date(2024, 1, 15))
    assert len(payments) == 12
    assert payments[0].principal_amount == pytest.approx(83.33, abs=0.01)
    assert payments[0].interest_amount == pytest.approx(10.0)
    assert payments[-1].remaining_balance == 0
    totals = [payment.total_amount for payment in payments]
    assert totals == sorted(totals, reverse=True)
    assert all(payment.is_paid is False for payment in payments)
    assert payments[0].payment_date == date(2024, 2, 15)


def test_progressive_schedule_has_fixed_total_payment() -> None:
    payments = schedule(100000, 3.6, 240, AmortizationType.PROGRESSIVE, date(2024, 1, 1))
    expected = monthly_payment(100000, 3.6, 240, "PROGRESSIVE")
    assert len(payments) == 240
    for payment in payments:
        assert payment.total_amount == pytest.approx(expected, abs=0.01)
        assert payment.remaining_balance >= 0
    assert payments[0].interest_amount == pytest.approx(300.0)
    assert payments[-1].remaining_balance == 0
    assert sum(payment.principal_amount for payment in payments) == pytest.approx(100000)


def test_progressive_zero_rate_splits_principal_evenly() -> None:
    payments = schedule(1200, 0, 12, "PROGRESSIVE", date(2024, 1, 1))
    assert all(payment.principal_amount == pytest.approx(100.0) for payment in payments)
    assert all(payment.interest_amount == 0 for payment in payments)


def test_in_fine_repays_principal_on_last_period() -> None:
    payments = schedule(10000, 6, 24, "IN_FINE", date(2024, 1, 1))
    assert len(payments) == 24
    assert all(payment.interest_amount == pytest.approx(50.0) for payment in payments)
    assert all(payment.principal_amount == 0 for payment in payments[:-1])
    assert payments[-1].principal_amount == 10000
    assert payments[-1].total_amount == pytest.approx(10050.0)
    assert payments[-2].remaining_balance == 10000
    assert payments[-1].remaining_balance == 0


def test_bullet_emits_single_terminal_payment() -> None:
    payments = schedule(10000, 5, 24, "BULLET", date(2024, 1, 31))
    assert len(payments) == 1
    only = payments[0]
    assert only.payment_number == 24
    assert only.interest_amount == pytest.approx(1000.0)
    assert only.total_amount == pytest.approx(11000.0)
    assert only.remaining_balance == 0
    assert only.payment_date == date(2026, 1, 31)


@pytest.mark.parametrize(
    "principal, rate, months, regime",
    [
        (1000, 5, -1, "LINEAR"),
        (1000, 5, 0, "LINEAR"),
        (-1, 5, 12, "LINEAR"),
        (1000, -2, 12, "LINEAR"),
        (1000, 5, 12, "BALLOON"),
    ],
)
def test_invalid_terms_fail_fast(principal, rate, months, regime) -> None:
    with pytest.raises(ValueError):
        schedule(principal, rate, months, regime, date(2024, 1, 1))


def test_regime_parsing_is_case_insensitive() -> None:
    assert parse_amortization_type("in-fine") is AmortizationType.IN_FINE
    assert parse_amortization_type("bullet") is AmortizationType.BULLET


def test_add_months_clamps_to_month_end() -> None:
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)


def test_build_debt_and_payment_tracking() -> None:
    debt = build_debt("Mortgage", 1000, 12, 12, "linear", date(2024, 1, 1), lender="Bank")
    assert debt.end_date == date(2025, 1, 1)
    assert debt.monthly_payment == pytest.approx(93.33)
    assert outstanding_balance(debt) == 1000
    mark_payment_paid(debt, 1)
    mark_payment_paid(debt, 2)
    assert debt.payments[1].is_paid is True
    assert outstanding_balance(debt) == pytest.approx(1000 - 2 * 1000 / 12)
    with pytest.raises(ValueError):
        mark_payment_paid(debt, 13)
    payload = debt.to_dict()
    assert payload["amortizationType"] == "LINEAR"
    assert len(payload["payments"]) == 12


def test_monthly_payment_per_regime() -> None:
    assert monthly_payment(10000, 6, 24, "IN_FINE") == 50.0
    assert monthly_payment(10000, 6, 24, "BULLET") == 0.0
    assert monthly_payment(1000, 12, 12, "PROGRESSIVE") == pytest.approx(88.85, abs=0.01)
