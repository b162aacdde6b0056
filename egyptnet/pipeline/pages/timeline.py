"""Timeline page: every milestone in the displayed year range, oldest first."""

from __future__ import annotations

import asyncio
from typing import Any

from egyptnet.config import TIMELINE_RESOURCE, TIMELINE_YEAR_RANGE
from egyptnet.pipeline.data.normalizer import milestones_in_range
from egyptnet.pipeline.data.schema import MILESTONE, validate_records

from .sections import PageContext, Section
from .ticker import update_ticker


async def render_milestones(page: PageContext) -> str:
    milestones = await page.loader.load(TIMELINE_RESOURCE)
    validate_records(milestones, MILESTONE, "timeline")
    first, last = TIMELINE_YEAR_RANGE
    return await page.renderer.render_each(
        "milestone.html", milestones_in_range(milestones, first, last)
    )


def render_timeline(page: PageContext) -> list[asyncio.Task[Any]]:
    return [
        page.spawn(update_ticker(page)),
        page.launch(Section("timeline.milestones", "#tl-masonry", "Timeline"), render_milestones),
    ]
