"""Tests for synonym normalization and the pure reshaping helpers."""

import pytest

from egyptnet.config import ISP_FIELD_SYNONYMS
from egyptnet.exceptions import ShapeFailure
from egyptnet.pipeline.data.normalizer import (
    coerce_year,
    latest_point,
    milestones_in_range,
    normalize,
    normalize_isps,
    out_of_range_years,
    penetration_series,
    resolve_field,
)


def test_normalize_isp_synonyms() -> None:
    raw = {"title": "X", "icon": "a.png", "bandwidth": 20, "cost": 300}
    assert normalize(raw, ISP_FIELD_SYNONYMS) == {
        "name": "X",
        "logo": "a.png",
        "avg": 20,
        "price": 300,
    }


def test_first_present_synonym_wins() -> None:
    raw = {"provider": "B", "name": "A", "speed": 10, "avg": 5, "price": 1}
    offer = normalize(raw, ISP_FIELD_SYNONYMS)
    assert offer["name"] == "A"
    assert offer["avg"] == 5


def test_absent_fields_default_to_empty_string() -> None:
    assert normalize({"name": "Only"}, ISP_FIELD_SYNONYMS) == {
        "name": "Only",
        "logo": "",
        "avg": "",
        "price": "",
    }


def test_none_value_is_skipped_but_empty_string_kept() -> None:
    assert resolve_field({"avg": None, "speed": 7}, ("avg", "speed")) == 7
    assert resolve_field({"avg": "", "speed": 7}, ("avg", "speed")) == ""


def test_non_mapping_record_normalizes_to_defaults() -> None:
    assert normalize("junk", ISP_FIELD_SYNONYMS)["name"] == ""


def test_normalize_isps_requires_array() -> None:
    with pytest.raises(ShapeFailure, match="expected array"):
        normalize_isps({"name": "X"})


def test_penetration_series_accepts_both_shapes() -> None:
    points = [{"year": 2020, "value": 45}]
    assert penetration_series(points) == points
    assert penetration_series({"series": points}) == points


@pytest.mark.parametrize("document", [{"points": []}, {"series": {}}, "text", None])
def test_penetration_series_rejects_other_shapes(document) -> None:
    with pytest.raises(ShapeFailure, match="series"):
        penetration_series(document)


def test_latest_point_is_last_in_source_order() -> None:
    series = [{"year": 2025, "value": 58}, {"year": 2020, "value": 45}]
    assert latest_point(series) == {"year": 2020, "value": 45}


def test_latest_point_of_empty_series() -> None:
    with pytest.raises(ShapeFailure, match="empty"):
        latest_point([])


def test_coerce_year() -> None:
    assert coerce_year(2000) == 2000.0
    assert coerce_year("2001") == 2001.0
    assert coerce_year("soon") is None
    assert coerce_year(None) is None
    assert coerce_year(True) is None
    assert coerce_year(float("nan")) is None


def test_milestones_filtered_and_sorted_ascending() -> None:
    milestones = [
        {"year": 1999, "title": "a"},
        {"year": 2000, "title": "b"},
        {"year": 2025, "title": "c"},
        {"year": 2030, "title": "d"},
    ]
    kept = milestones_in_range(list(reversed(milestones)), 2000, 2025)
    assert [m["year"] for m in kept] == [2000, 2025]


def test_milestone_sort_is_stable_and_skips_non_numeric() -> None:
    milestones = [
        {"year": 2010, "title": "first"},
        {"year": "n/a", "title": "skip"},
        {"year": "2010", "title": "second"},
        {"year": 2005, "title": "earlier"},
    ]
    titles = [m["title"] for m in milestones_in_range(milestones, 2000, 2025)]
    assert titles == ["earlier", "first", "second"]


def test_out_of_range_years() -> None:
    milestones = [{"year": 1975}, {"year": 2000}, {"year": "x"}, {"year": 2101}]
    assert out_of_range_years(milestones) == [1975, "x", 2101]
