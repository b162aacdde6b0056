"""Header "quick fact" ticker.

A degenerate one-field section: load the penetration series, validate it,
and write the latest point as text into ``.nav-ticker``. Unlike other
sections it never shows an error card; any failure writes a literal
fallback string instead.
"""

from __future__ import annotations

import logging
from typing import Any

from egyptnet.config import (
    PENETRATION_RESOURCE,
    TICKER_FALLBACK_TEXT,
    TICKER_SELECTOR,
    TICKER_TEMPLATE,
)
from egyptnet.pipeline.data.normalizer import latest_point, penetration_series
from egyptnet.pipeline.data.schema import PENETRATION_POINT, ensure_shape

from .sections import PageContext

logger = logging.getLogger(__name__)


def format_number(value: Any) -> str:
    """Render ``10.0`` as ``10``; leave every other value as its string form."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def ticker_text(document: Any) -> str:
    """Build the ticker sentence from a decoded penetration document.

    Examples
    --------
    >>> ticker_text({"series": [{"year": 2020, "value": 45}, {"year": 2025, "value": 58}]})
    '≈58% of Egyptians are online (2025, demo)'
    """
    series = penetration_series(document)
    ensure_shape(series, PENETRATION_POINT.required, "penetration.series")
    latest = latest_point(series)
    return TICKER_TEMPLATE.format(
        value=format_number(latest["value"]), year=format_number(latest["year"])
    )


async def update_ticker(page: PageContext) -> str | None:
    """Write the ticker text into the page; return it, or None without a ticker."""
    if not page.document.has(TICKER_SELECTOR):
        return None
    try:
        text = ticker_text(await page.cache.get(PENETRATION_RESOURCE))
    except Exception as err:
        logger.debug("Ticker using fallback text: %s", err)
        text = TICKER_FALLBACK_TEXT
    page.document.set_text(TICKER_SELECTOR, text)
    return text
