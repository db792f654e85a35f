"""Shared tool-layer helpers."""

from __future__ import annotations

import json
from datetime import date

from report_engine.reports.models import ReportInput
from report_engine.reports.payloads import parse_report_input


def load_report_input(portfolio_json: str) -> ReportInput:
    try:
        payload = json.loads(portfolio_json)
    except json.JSONDecodeError as error:
        raise ValueError(f"Invalid portfolio JSON: {error.msg}") from error
    return parse_report_input(payload)


def parse_start_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError as error:
        raise ValueError(f"Start date must be an ISO date (YYYY-MM-DD), got {value!r}.") from error


def to_json(payload: object) -> str:
    return json.dumps(payload, ensure_ascii=True)
