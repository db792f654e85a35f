"""Report analytics domain package."""

from report_engine.reports.models import Asset, Entity, ReportFilter, ReportInput

__all__ = ["Asset", "Entity", "ReportFilter", "ReportInput"]
