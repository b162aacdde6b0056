"""Tests for the header ticker."""

import pytest

from egyptnet.config import TICKER_FALLBACK_TEXT
from egyptnet.pipeline.pages.ticker import format_number, ticker_text, update_ticker


def test_ticker_text_uses_last_point() -> None:
    document = {"series": [{"year": 2020, "value": 45}, {"year": 2025, "value": 58}]}
    assert ticker_text(document) == "≈58% of Egyptians are online (2025, demo)"


def test_ticker_text_accepts_bare_array() -> None:
    assert ticker_text([{"year": 2024, "value": 57.5}]) == "≈57.5% of Egyptians are online (2024, demo)"


def test_format_number() -> None:
    assert format_number(58.0) == "58"
    assert format_number(57.5) == "57.5"
    assert format_number("58") == "58"


@pytest.mark.asyncio
async def test_update_ticker_writes_text(make_page) -> None:
    page = make_page()
    assert await update_ticker(page) == "≈58% of Egyptians are online (2025, demo)"
    assert page.document.find(".nav-ticker").get_text() == "≈58% of Egyptians are online (2025, demo)"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    ["{broken", {"points": []}, {"series": []}, {"series": [{"year": 2025}]}],
)
async def test_update_ticker_falls_back(make_page, site_root, data_writer, body) -> None:
    data_writer(site_root, "penetration.json", body)
    page = make_page()
    assert await update_ticker(page) == TICKER_FALLBACK_TEXT
    assert page.document.find(".nav-ticker").get_text() == TICKER_FALLBACK_TEXT
    assert page.document.find(".error-card") is None


@pytest.mark.asyncio
async def test_update_ticker_missing_file(make_page, site_root) -> None:
    (site_root / "data" / "penetration.json").unlink()
    assert await update_ticker(make_page()) == TICKER_FALLBACK_TEXT


@pytest.mark.asyncio
async def test_update_ticker_without_element(make_page) -> None:
    assert await update_ticker(make_page("<html><body></body></html>")) is None
