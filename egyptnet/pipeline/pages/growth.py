"""Growth page sections: KPI tiles, highlights and three charts.

``data/growth.json`` feeds four sections (stats, facts, connection types,
speeds) and is fetched once through the page cache; ``data/penetration.json``
is shared between the penetration chart and the header ticker the same way.
Chart sections hand label/value arrays to the chart sink instead of
mounting a fragment.
"""

from __future__ import annotations

import asyncio
from typing import Any

from egyptnet.config import GROWTH_RESOURCE, PENETRATION_RESOURCE
from egyptnet.pipeline.data.normalizer import penetration_series
from egyptnet.pipeline.data.schema import (
    CONNECTION_TYPE,
    FACT,
    GROWTH_STAT,
    PENETRATION_POINT,
    SPEED,
    validate_records,
)

from .sections import PageContext, Section, member
from .ticker import update_ticker


async def _growth_list(page: PageContext, key: str) -> list[Any]:
    growth = await page.cache.get(GROWTH_RESOURCE)
    return member(growth, key, "growth", optional=True)


async def render_stats(page: PageContext) -> str:
    stats = await _growth_list(page, "stats")
    validate_records(stats, GROWTH_STAT, "growth.stats")
    return await page.renderer.render_each("stat.html", stats)


async def render_highlights(page: PageContext) -> str:
    facts = await _growth_list(page, "facts")
    validate_records(facts, FACT, "growth.facts")
    return await page.renderer.render_each("fact.html", facts)


async def draw_penetration(page: PageContext) -> None:
    series = penetration_series(await page.cache.get(PENETRATION_RESOURCE))
    validate_records(series, PENETRATION_POINT, "penetration.series")
    page.charts.line(
        "#penetration-chart",
        [point["year"] for point in series],
        [point["value"] for point in series],
    )


async def draw_types(page: PageContext) -> None:
    types = await _growth_list(page, "types")
    validate_records(types, CONNECTION_TYPE, "growth.types")
    page.charts.donut(
        "#types-chart",
        [entry["name"] for entry in types],
        [entry["share"] for entry in types],
    )


async def draw_speeds(page: PageContext) -> None:
    speeds = await _growth_list(page, "speeds")
    validate_records(speeds, SPEED, "growth.speeds")
    page.charts.bar(
        "#speeds-chart",
        [entry["name"] for entry in speeds],
        [entry["mbps"] for entry in speeds],
    )


def render_growth(page: PageContext) -> list[asyncio.Task[Any]]:
    """Launch every growth-page section; return the launched tasks."""
    return [
        page.spawn(update_ticker(page)),
        page.launch(Section("growth.stats", "#growth-stats", "Growth stats"), render_stats),
        page.launch(Section("growth.facts", "#growth-facts", "Highlights"), render_highlights),
        page.launch(
            Section("growth.penetration", "#penetration-chart", "Internet penetration"),
            draw_penetration,
        ),
        page.launch(Section("growth.types", "#types-chart", "Connection types"), draw_types),
        page.launch(Section("growth.speeds", "#speeds-chart", "Average speeds"), draw_speeds),
    ]
