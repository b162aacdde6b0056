"""Field normalization for inconsistently named source records.

The ISP document in the wild uses several names for the same field (``avg``,
``speed``, ``mbps``, ``bandwidth``...). This module maps such records onto
one canonical shape using an explicit, ordered synonym table
(``ISP_FIELD_SYNONYMS`` in `egyptnet.config`) and a small table-driven
resolver. It also holds the other pure reshaping helpers the sections need:
accepting both penetration document shapes, picking the latest point, and
filtering/sorting timeline milestones by numeric year.

All functions are pure: no I/O, deterministic for a given table.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Sequence

from egyptnet.config import ISP_FIELD_SYNONYMS, TIMELINE_PLAUSIBLE_YEARS
from egyptnet.exceptions import ShapeFailure

from .schema import ensure_sequence


def resolve_field(raw: Any, candidates: Sequence[str], default: Any = "") -> Any:
    """Return the value of the first candidate key present in ``raw``.

    A key counts as present when it exists and its value is not ``None``.
    Empty strings are returned as-is; non-emptiness is the validator's job.

    Examples
    --------
    >>> resolve_field({"speed": 20, "mbps": 30}, ("avg", "speed", "mbps"))
    20
    >>> resolve_field({"avg": None, "mbps": 30}, ("avg", "speed", "mbps"))
    30
    >>> resolve_field({}, ("avg",))
    ''
    """
    if not isinstance(raw, Mapping):
        return default
    for key in candidates:
        if raw.get(key) is not None:
            return raw[key]
    return default


def normalize(
    raw: Any, synonyms: Mapping[str, Sequence[str]], default: Any = ""
) -> dict[str, Any]:
    """Map ``raw`` onto the canonical keys of ``synonyms``.

    Parameters
    ----------
    raw : Any
        Decoded source record. Anything that is not a mapping is treated as
        an empty record.
    synonyms : Mapping[str, Sequence[str]]
        Canonical key -> candidate source keys in priority order.
    default : Any, optional
        Value used for canonical keys with no present candidate.

    Returns
    -------
    dict[str, Any]
        A record with exactly the canonical keys.

    Examples
    --------
    >>> from egyptnet.config import ISP_FIELD_SYNONYMS
    >>> normalize({"title": "X", "icon": "a.png", "bandwidth": 20, "cost": 300}, ISP_FIELD_SYNONYMS)
    {'name': 'X', 'logo': 'a.png', 'avg': 20, 'price': 300}
    """
    return {
        canonical: resolve_field(raw, candidates, default)
        for canonical, candidates in synonyms.items()
    }


def normalize_isps(raw_offers: Any, source_label: str = "isps") -> list[dict[str, Any]]:
    """Normalize every ISP offer of a decoded ``isps.json`` document."""
    ensure_sequence(raw_offers, source_label)
    return [normalize(offer, ISP_FIELD_SYNONYMS) for offer in raw_offers]


def penetration_series(document: Any, source_label: str = "penetration") -> list[Any]:
    """Return the point list of a penetration document in either accepted shape.

    Both a bare array of ``{year, value}`` points and an object wrapping the
    array under ``series`` are valid.

    Raises
    ------
    ShapeFailure
        If the document is neither shape.
    """
    if isinstance(document, list):
        return document
    if isinstance(document, Mapping) and isinstance(document.get("series"), list):
        return document["series"]
    raise ShapeFailure(
        f"Invalid JSON in {source_label}: must be an array OR an object with a series[] array",
        source_label=source_label,
    )


def latest_point(series: Sequence[Any], source_label: str = "penetration.series") -> Any:
    """Return the last point in source order.

    The series is expected pre-sorted; it is not re-sorted here, so an
    out-of-order file yields its last element, not its newest year.
    """
    if not series:
        raise ShapeFailure(
            f"Invalid JSON in {source_label}: series is empty",
            source_label=source_label,
        )
    return series[-1]


def coerce_year(value: Any) -> float | None:
    """Return ``value`` as a number, or None when it is not numeric."""
    if isinstance(value, bool):
        return None
    try:
        year = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(year):
        return None
    return year


def _milestone_year(milestone: Any) -> float | None:
    if not isinstance(milestone, Mapping):
        return None
    return coerce_year(milestone.get("year"))


def milestones_in_range(
    milestones: Sequence[Any], first_year: int, last_year: int
) -> list[Any]:
    """Keep milestones with a numeric year in ``[first_year, last_year]``, ascending.

    The sort is stable, so milestones sharing a year keep their source order.

    Examples
    --------
    >>> items = [{"year": 2030}, {"year": 2025}, {"year": 1999}, {"year": "2000"}]
    >>> [m["year"] for m in milestones_in_range(items, 2000, 2025)]
    ['2000', 2025]
    """
    kept = []
    for milestone in milestones:
        year = _milestone_year(milestone)
        if year is not None and first_year <= year <= last_year:
            kept.append((year, milestone))
    kept.sort(key=lambda pair: pair[0])
    return [milestone for _, milestone in kept]


def out_of_range_years(
    milestones: Sequence[Any],
    bounds: tuple[int, int] = TIMELINE_PLAUSIBLE_YEARS,
) -> list[Any]:
    """Return the raw year values that are not numeric or fall outside ``bounds``."""
    low, high = bounds
    flagged = []
    for milestone in milestones:
        year = _milestone_year(milestone)
        if year is None or not low <= year <= high:
            flagged.append(milestone.get("year") if isinstance(milestone, Mapping) else milestone)
    return flagged
