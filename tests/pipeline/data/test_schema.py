"""Tests for structural record validation."""

import pytest

from egyptnet.exceptions import ShapeFailure
from egyptnet.pipeline.data.schema import (
    FACT,
    ISP_OFFER,
    SNAPSHOT,
    ensure_filled,
    ensure_sequence,
    ensure_shape,
    is_blank,
    validate_records,
)


def test_missing_keys_are_all_named() -> None:
    with pytest.raises(ShapeFailure) as exc:
        ensure_shape([{"year": 2000, "title": "t", "text": "x"}, {"year": 2001}],
                     ["year", "title", "text"], "timeline")
    err = exc.value
    assert err.message == "Invalid JSON in timeline: item 1 is missing title, text"
    assert err.source_label == "timeline"
    assert err.index == 1
    assert err.missing == ["title", "text"]


def test_presence_only_none_counts_as_present() -> None:
    ensure_shape([{"title": None, "text": ""}], ["title", "text"], "home.facts")


def test_non_object_item_misses_every_key() -> None:
    with pytest.raises(ShapeFailure, match="item 0 is missing title, text"):
        ensure_shape(["oops"], ["title", "text"], "home.facts")


@pytest.mark.parametrize("collection", [None, {"title": "t"}, "text", 3])
def test_non_array_collection(collection) -> None:
    with pytest.raises(ShapeFailure, match="Invalid JSON in growth.stats: expected array"):
        ensure_sequence(collection, "growth.stats")


def test_empty_array_passes() -> None:
    validate_records([], FACT, "home.facts")


def test_is_blank() -> None:
    assert is_blank(None)
    assert is_blank("   ")
    assert not is_blank(0)
    assert not is_blank("x")


def test_ensure_filled_names_empty_fields() -> None:
    with pytest.raises(ShapeFailure) as exc:
        ensure_filled([{"name": "A", "avg": " ", "price": None}], ["name", "avg", "price"], "isps")
    assert exc.value.missing == ["avg", "price"]
    assert "item 0 has empty avg, price" in exc.value.message


def test_snapshot_requires_content() -> None:
    with pytest.raises(ShapeFailure, match="has empty value"):
        validate_records([{"value": "", "label": "People"}], SNAPSHOT, "home.snapshots")


def test_isp_logo_may_be_empty() -> None:
    validate_records(
        [{"name": "WE", "logo": "", "avg": "10 Mbps", "price": 250}], ISP_OFFER, "isps"
    )
