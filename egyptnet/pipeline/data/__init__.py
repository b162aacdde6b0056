"""Data layer: resource loading, field normalization and shape validation.

Modules exported
----------------
ResourceLoader
    Single-attempt JSON/text loader for a local directory or HTTP root.
normalize, normalize_isps, resolve_field
    Table-driven synonym resolution.
penetration_series, latest_point, milestones_in_range, out_of_range_years
    Pure reshaping helpers for the chart, ticker and timeline sections.
ensure_shape, ensure_filled, validate_records
    Structural validation raising ``ShapeFailure``.
"""

from __future__ import annotations

from .loader import ResourceLoader
from .normalizer import (
    coerce_year,
    latest_point,
    milestones_in_range,
    normalize,
    normalize_isps,
    out_of_range_years,
    penetration_series,
    resolve_field,
)
from .schema import (
    CONNECTION_TYPE,
    FACT,
    GROWTH_STAT,
    ISP_OFFER,
    MILESTONE,
    PENETRATION_POINT,
    SNAPSHOT,
    SPEED,
    RecordSchema,
    ensure_filled,
    ensure_sequence,
    ensure_shape,
    validate_records,
)

__all__ = [
    "CONNECTION_TYPE",
    "FACT",
    "GROWTH_STAT",
    "ISP_OFFER",
    "MILESTONE",
    "PENETRATION_POINT",
    "SNAPSHOT",
    "SPEED",
    "RecordSchema",
    "ResourceLoader",
    "coerce_year",
    "ensure_filled",
    "ensure_sequence",
    "ensure_shape",
    "latest_point",
    "milestones_in_range",
    "normalize",
    "normalize_isps",
    "out_of_range_years",
    "penetration_series",
    "resolve_field",
    "validate_records",
]
