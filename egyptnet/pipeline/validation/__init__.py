"""Offline data validation (developer diagnostic)."""

from __future__ import annotations

from .offline import (
    OfflineValidator,
    ValidationResult,
    env_flag,
    render_report,
    show_failures,
    wants_validation,
)

__all__ = [
    "OfflineValidator",
    "ValidationResult",
    "env_flag",
    "render_report",
    "show_failures",
    "wants_validation",
]
