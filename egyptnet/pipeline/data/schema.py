"""Structural schema validation for decoded JSON records.

Validation here is duck-typed on purpose: the source documents are loosely
typed and hand-edited, so the checks only assert that each record carries
the keys a renderer reads. Value types are never inspected; a key mapped to
``None`` or ``""`` still counts as present for ``ensure_shape``. Where the
data model demands actual content (snapshot values, ISP names), the
separate ``ensure_filled`` check is applied.

Every failure raises ``ShapeFailure`` tagged with the caller's source label
so the error card or validator log says exactly which file and record broke.

Examples
--------
>>> from egyptnet.pipeline.data.schema import ensure_shape
>>> ensure_shape([{"title": "t", "text": ""}], ["title", "text"], "home.facts")
>>> ensure_shape([{"title": "t"}], ["title", "text"], "home.facts")
Traceback (most recent call last):
...
egyptnet.exceptions.ShapeFailure: SHAPE_FAILURE: Invalid JSON in home.facts: item 0 is missing text
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from egyptnet.exceptions import ShapeFailure


@dataclass(frozen=True)
class RecordSchema:
    """Declared shape of one record kind.

    Attributes
    ----------
    kind : str
        Human-readable record kind.
    required : tuple[str, ...]
        Keys that must be present on every record.
    optional : tuple[str, ...]
        Keys a renderer reads when present.
    non_empty : tuple[str, ...]
        Required keys whose values must also be non-empty.
    """

    kind: str
    required: tuple[str, ...]
    optional: tuple[str, ...] = ()
    non_empty: tuple[str, ...] = ()


SNAPSHOT = RecordSchema("snapshot", ("value", "label"), ("caption",), ("value", "label"))
FACT = RecordSchema("fact", ("title", "text"))
ISP_OFFER = RecordSchema("isp offer", ("name", "avg", "price"), ("logo",), ("name", "avg", "price"))
MILESTONE = RecordSchema("timeline milestone", ("year", "title", "text"))
GROWTH_STAT = RecordSchema("growth stat", ("label", "value"), ("caption",))
CONNECTION_TYPE = RecordSchema("connection type", ("name", "share"))
SPEED = RecordSchema("speed", ("name", "mbps"))
PENETRATION_POINT = RecordSchema("penetration point", ("year", "value"))


def is_sequence(value: Any) -> bool:
    """Return True for JSON arrays (lists or tuples), never for strings or objects."""
    return isinstance(value, (list, tuple))


def ensure_sequence(collection: Any, source_label: str) -> None:
    """Raise ``ShapeFailure`` unless ``collection`` is a JSON array."""
    if not is_sequence(collection):
        raise ShapeFailure(
            f"Invalid JSON in {source_label}: expected array",
            source_label=source_label,
        )


def _missing_keys(record: Any, required_keys: Iterable[str]) -> list[str]:
    if not isinstance(record, Mapping):
        return list(required_keys)
    return [key for key in required_keys if key not in record]


def ensure_shape(
    collection: Any, required_keys: Sequence[str], source_label: str
) -> None:
    """Check that every record in ``collection`` has all ``required_keys``.

    Parameters
    ----------
    collection : Any
        Decoded JSON value expected to be an array of objects.
    required_keys : Sequence[str]
        Keys each record must contain (presence only).
    source_label : str
        Label used in the error message, e.g. ``'timeline'``.

    Raises
    ------
    ShapeFailure
        If ``collection`` is not an array, or on the first record missing
        one or more keys. The message names every missing key of that record.
    """
    ensure_sequence(collection, source_label)
    for index, record in enumerate(collection):
        missing = _missing_keys(record, required_keys)
        if missing:
            raise ShapeFailure(
                f"Invalid JSON in {source_label}: item {index} is missing {', '.join(missing)}",
                source_label=source_label,
                index=index,
                missing=missing,
            )


def is_blank(value: Any) -> bool:
    """Return True for ``None`` and whitespace-only strings; ``0`` is not blank."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def ensure_filled(collection: Any, keys: Sequence[str], source_label: str) -> None:
    """Check that ``keys`` carry non-blank values on every record.

    Raises
    ------
    ShapeFailure
        On the first record with a blank or absent value, naming each one.
    """
    ensure_sequence(collection, source_label)
    for index, record in enumerate(collection):
        values = record if isinstance(record, Mapping) else {}
        empty = [key for key in keys if is_blank(values.get(key))]
        if empty:
            raise ShapeFailure(
                f"Invalid JSON in {source_label}: item {index} has empty {', '.join(empty)}",
                source_label=source_label,
                index=index,
                missing=empty,
            )


def validate_records(collection: Any, schema: RecordSchema, source_label: str) -> None:
    """Apply a declared ``RecordSchema`` to ``collection``."""
    ensure_shape(collection, schema.required, source_label)
    if schema.non_empty:
        ensure_filled(collection, schema.non_empty, source_label)
