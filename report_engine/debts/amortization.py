"""Debt amortization schedules for the four supported regimes."""

from __future__ import annotations

from datetime import date

import pandas as pd

from report_engine.reports.models import AmortizationType, Debt, Payment


def parse_amortization_type(regime: AmortizationType | str) -> AmortizationType:
    if isinstance(regime, AmortizationType):
        return regime
    clean = str(regime).strip().upper().replace("-", "_").replace(" ", "_")
    try:
        return AmortizationType(clean)
    except ValueError:
        allowed = [item.value for item in AmortizationType]
        raise ValueError(f"Unknown amortization type {regime!r}; expected one of {allowed}.") from None


def _validate_terms(principal: float, annual_rate_pct: float, duration_months: int) -> None:
    if isinstance(duration_months, bool) or not isinstance(duration_months, int):
        raise ValueError(f"Duration must be a whole number of months, got {duration_months!r}.")
    if duration_months <= 0:
        raise ValueError(f"Duration must be at least one month, got {duration_months}.")
    if principal < 0:
        raise ValueError(f"Principal must not be negative, got {principal}.")
    if annual_rate_pct < 0:
        raise ValueError(f"Interest rate must not be negative, got {annual_rate_pct}.")


def add_months(start: date, months: int) -> date:
    return (pd.Timestamp(start) + pd.DateOffset(months=months)).date()


def annuity_payment(principal: float, monthly_rate: float, periods: int) -> float:
    if monthly_rate == 0:
        return principal / periods
    growth = (1.0 + monthly_rate) ** periods
    return principal * monthly_rate * growth / (growth - 1.0)


def monthly_payment(
    principal: float,
    annual_rate_pct: float,
    duration_months: int,
    regime: AmortizationType | str,
) -> float:
    """Headline monthly instalment stored on the debt, rounded to cents.

    LINEAR reports its first (largest) instalment; BULLET has none.
    """
    kind = parse_amortization_type(regime)
    _validate_terms(principal, annual_rate_pct, duration_months)
    rate = annual_rate_pct / 100.0 / 12.0
    if kind is AmortizationType.PROGRESSIVE:
        payment = annuity_payment(principal, rate, duration_months)
    elif kind is AmortizationType.LINEAR:
        payment = principal / duration_months + principal * rate
    elif kind is AmortizationType.IN_FINE:
        payment = principal * rate
    else:
        payment = 0.0
    return round(payment, 2)


def schedule(
    principal: float,
    annual_rate_pct: float,
    duration_months: int,
    regime: AmortizationType | str,
    start_date: date,
) -> list[Payment]:
    """Build the payment-by-payment schedule of a debt.

    PROGRESSIVE, LINEAR and IN_FINE yield one payment per month; BULLET
    yields a single terminal payment carrying simple interest over the
    whole term. Payment ``k`` is dated ``k`` months after ``start_date``.
    """
    kind = parse_amortization_type(regime)
    _validate_terms(principal, annual_rate_pct, duration_months)
    rate = annual_rate_pct / 100.0 / 12.0

    if kind is AmortizationType.BULLET:
        interest = principal * (annual_rate_pct / 100.0) * (duration_months / 12.0)
        return [
            Payment(
                payment_number=duration_months,
                payment_date=add_months(start_date, duration_months),
                principal_amount=principal,
                interest_amount=interest,
                total_amount=principal + interest,
                remaining_balance=0.0,
            )
        ]

    fixed_total = annuity_payment(principal, rate, duration_months) if kind is AmortizationType.PROGRESSIVE else 0.0
    payments: list[Payment] = []
    balance = principal
    for month in range(1, duration_months + 1):
        last = month == duration_months
        if kind is AmortizationType.PROGRESSIVE:
            interest = balance * rate
            principal_part = balance if last else fixed_total - interest
        elif kind is AmortizationType.LINEAR:
            interest = balance * rate
            principal_part = balance if last else principal / duration_months
        else:
            interest = principal * rate
            principal_part = principal if last else 0.0
        balance = max(0.0, balance - principal_part)
        payments.append(
            Payment(
                payment_number=month,
                payment_date=add_months(start_date, month),
                principal_amount=principal_part,
                interest_amount=interest,
                total_amount=principal_part + interest,
                remaining_balance=0.0 if last else balance,
            )
        )
    return payments


def build_debt(
    name: str,
    initial_amount: float,
    interest_rate: float,
    duration_months: int,
    amortization_type: AmortizationType | str,
    start_date: date,
    debt_type: str = "LOAN",
    lender: str | None = None,
) -> Debt:
    kind = parse_amortization_type(amortization_type)
    return Debt(
        name=name,
        debt_type=debt_type,
        initial_amount=initial_amount,
        interest_rate=interest_rate,
        duration_months=duration_months,
        amortization_type=kind,
        start_date=start_date,
        end_date=add_months(start_date, duration_months),
        monthly_payment=monthly_payment(initial_amount, interest_rate, duration_months, kind),
        payments=schedule(initial_amount, interest_rate, duration_months, kind, start_date),
        lender=lender,
    )


def mark_payment_paid(debt: Debt, payment_number: int) -> Payment:
    for payment in debt.payments:
        if payment.payment_number == payment_number:
            payment.is_paid = True
            return payment
    raise ValueError(f"Debt {debt.name!r} has no payment number {payment_number}.")


def outstanding_balance(debt: Debt) -> float:
    """Remaining principal after the last paid instalment."""
    paid = [payment for payment in debt.payments if payment.is_paid]
    if not paid:
        return debt.initial_amount
    return max(paid, key=lambda payment: payment.payment_number).remaining_balance
