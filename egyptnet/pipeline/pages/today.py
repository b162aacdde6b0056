"""Today page: static content apart from the header ticker."""

from __future__ import annotations

import asyncio
from typing import Any

from .sections import PageContext
from .ticker import update_ticker


def render_today(page: PageContext) -> list[asyncio.Task[Any]]:
    return [page.spawn(update_ticker(page))]
