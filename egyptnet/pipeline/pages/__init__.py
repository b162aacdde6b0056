"""Page layer: section boundaries, per-page section renderers and the runner.

Modules exported
----------------
Section, SectionState, PageContext, ResourceCache
    The failure boundary every page region runs inside, and what a page
    render owns.
render_home, render_growth, render_timeline, render_today
    Launch the sections of one page kind.
render_page, render_site, run_from_config
    Route shells to their renderers and write the finished pages.
"""

from __future__ import annotations

from .growth import render_growth
from .home import render_home
from .runner import (
    PAGE_RENDERERS,
    RenderedPage,
    render_page,
    render_site,
    run_from_config,
    write_html_output,
)
from .sections import PageContext, ResourceCache, Section, SectionState, member
from .ticker import format_number, ticker_text, update_ticker
from .timeline import render_timeline
from .today import render_today

__all__ = [
    "PAGE_RENDERERS",
    "PageContext",
    "RenderedPage",
    "ResourceCache",
    "Section",
    "SectionState",
    "format_number",
    "member",
    "render_growth",
    "render_home",
    "render_page",
    "render_site",
    "render_timeline",
    "render_today",
    "run_from_config",
    "ticker_text",
    "update_ticker",
    "write_html_output",
]
