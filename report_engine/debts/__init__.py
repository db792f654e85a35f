"""Debt amortization package."""

from report_engine.debts.amortization import build_debt, mark_payment_paid, outstanding_balance, schedule

__all__ = ["build_debt", "mark_payment_paid", "outstanding_balance", "schedule"]
