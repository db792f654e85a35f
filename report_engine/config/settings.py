"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the report engine and its MCP surface."""

    app_name: str = "wealth-report-engine"
    app_version: str = "1.0.0"
    transport_mode: str = "auto"
    http_transport: str = "sse"
    host: str = "0.0.0.0"
    port: int = 8000
    mcp_path: str = "/mcp"
    health_path: str = "/health"
    report_cache_capacity: int = 100
    report_cache_ttl_seconds: int = 0
    log_level: str = "INFO"


def _as_int(value: str | None, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_settings() -> Settings:
    """Load runtime settings from environment variables."""
    load_dotenv()

    capacity = _as_int(os.getenv("REPORT_CACHE_CAPACITY"), 100)
    return Settings(
        app_name=os.getenv("APP_NAME", "wealth-report-engine"),
        transport_mode=os.getenv("TRANSPORT_MODE", "auto").strip().lower(),
        http_transport=os.getenv("HTTP_TRANSPORT", "sse").strip().lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_as_int(os.getenv("PORT"), 8000),
        mcp_path=os.getenv("MCP_PATH", "/mcp"),
        health_path=os.getenv("HEALTH_PATH", "/health"),
        report_cache_capacity=capacity if capacity > 0 else 100,
        report_cache_ttl_seconds=max(0, _as_int(os.getenv("REPORT_CACHE_TTL_SECONDS"), 0)),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
