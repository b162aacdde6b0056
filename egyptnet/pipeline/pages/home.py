"""Home page sections: snapshots, timeline preview, ISP offers and facts.

Snapshots and facts come from the same ``data/home.json`` document, which is
fetched once per page through the page's resource cache. Each section still
validates and fails on its own: a broken ISP file leaves an error card in
the ISP grid while the facts grid renders normally.
"""

from __future__ import annotations

import asyncio
from typing import Any

from egyptnet.config import (
    HOME_RESOURCE,
    ISPS_RESOURCE,
    MINI_TIMELINE_LIMIT,
    TIMELINE_RESOURCE,
    TIMELINE_YEAR_RANGE,
)
from egyptnet.exceptions import ShapeFailure
from egyptnet.pipeline.data.normalizer import milestones_in_range, normalize_isps
from egyptnet.pipeline.data.schema import (
    FACT,
    ISP_OFFER,
    MILESTONE,
    SNAPSHOT,
    ensure_sequence,
    validate_records,
)

from .sections import PageContext, Section, member
from .ticker import update_ticker


async def render_snapshots(page: PageContext) -> str:
    home = await page.cache.get(HOME_RESOURCE)
    snapshots = member(home, "snapshots", "home")
    validate_records(snapshots, SNAPSHOT, "home.snapshots")
    return await page.renderer.render_each("snapshot.html", snapshots)


async def render_timeline_preview(page: PageContext) -> str:
    milestones = await page.loader.load(TIMELINE_RESOURCE)
    validate_records(milestones, MILESTONE, "timeline")
    first, last = TIMELINE_YEAR_RANGE
    preview = milestones_in_range(milestones, first, last)[:MINI_TIMELINE_LIMIT]
    return await page.renderer.render_each("mini_milestone.html", preview)


async def render_isps(page: PageContext) -> str:
    raw_offers = await page.loader.load(ISPS_RESOURCE)
    ensure_sequence(raw_offers, "isps")
    if not raw_offers:
        raise ShapeFailure("Empty isps.json", source_label="isps")
    offers = normalize_isps(raw_offers)
    validate_records(offers, ISP_OFFER, "isps (normalized)")
    return await page.renderer.render_each("isp.html", offers)


async def render_facts(page: PageContext) -> str:
    home = await page.cache.get(HOME_RESOURCE)
    facts = member(home, "facts", "home", optional=True)
    validate_records(facts, FACT, "home.facts")
    return await page.renderer.render_each("fact.html", facts)


def render_home(page: PageContext) -> list[asyncio.Task[Any]]:
    """Launch every home-page section; return the launched tasks."""
    return [
        page.spawn(update_ticker(page)),
        page.launch(Section("home.snapshots", "#home-snapshots", "Snapshot data"), render_snapshots),
        page.launch(Section("home.timeline", "#mini-tl", "Timeline preview"), render_timeline_preview),
        page.launch(Section("home.isps", "#isp-grid", "ISP data"), render_isps),
        page.launch(Section("home.facts", "#facts-grid", "Facts"), render_facts),
    ]
