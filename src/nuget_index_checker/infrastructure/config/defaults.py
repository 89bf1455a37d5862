"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "environment": "dev",
    "registry": {
        "url": "https://www.nuget.org",
    },
    "polling": {
        "delay_ms": 30_000,
        "default_attempts": 1,
    },
    "http": {
        "timeout_seconds": 30.0,
        "user_agent": "nuget-index-checker/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
