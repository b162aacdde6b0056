"""Section boundaries and the page context they run in.

A *section* is one independently rendered region of a page (ISP grid,
facts grid, a chart...) with its own data dependency and its own failure
boundary. Every section follows the same chain:

    load -> normalize -> validate -> render -> mount

and is launched by its page as a fire-and-forget ``asyncio`` task. Any
failure inside the chain is converted into an error card mounted into the
section's own container; siblings never see it. There is no retry: a
section that reached ``RENDERED`` or ``FAILED`` stays there for the
lifetime of its page.

`PageContext` bundles what a page render owns: the document, the loader,
the template renderer, the chart sink, a `ResourceCache` for documents
shared between sections, and the launched tasks.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Coroutine

from egyptnet.exceptions import AppError, ShapeFailure
from egyptnet.pipeline.data.loader import ResourceLoader
from egyptnet.pipeline.rendering.cards import describe_error, render_error_card
from egyptnet.pipeline.rendering.charts import ChartSink
from egyptnet.pipeline.rendering.document import PageDocument
from egyptnet.pipeline.rendering.templating import TemplateRenderer

logger = logging.getLogger(__name__)


class SectionState(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    RENDERED = "rendered"
    FAILED = "failed"


class ResourceCache:
    """Page-scoped, write-once memo of decoded documents.

    The in-flight task is stored on first request, so sections that ask for
    the same document concurrently share one fetch. A failed fetch is
    memoized too: every section depending on it fails the same way.
    """

    def __init__(self, loader: ResourceLoader) -> None:
        self.loader = loader
        self._entries: dict[str, asyncio.Future[Any]] = {}

    async def get(self, path: str) -> Any:
        entry = self._entries.get(path)
        if entry is None:
            entry = asyncio.ensure_future(self.loader.load(path))
            self._entries[path] = entry
        return await entry

    def __contains__(self, path: str) -> bool:
        return path in self._entries


class PageContext:
    """Everything one page render owns.

    Parameters
    ----------
    document : PageDocument
        Parsed page shell that sections mount into.
    loader : ResourceLoader
        Loader for the page's JSON resources.
    renderer : TemplateRenderer
        Renderer for record and error-card templates.
    charts : ChartSink | None, optional
        Sink for chart-backed sections; defaults to one on ``document``.
    """

    def __init__(
        self,
        document: PageDocument,
        loader: ResourceLoader,
        renderer: TemplateRenderer,
        charts: ChartSink | None = None,
    ) -> None:
        self.document = document
        self.loader = loader
        self.renderer = renderer
        self.charts = charts or ChartSink(document)
        self.cache = ResourceCache(loader)
        self.sections: list[Section] = []
        self.tasks: list[asyncio.Task[Any]] = []

    def spawn(self, coroutine: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        """Start ``coroutine`` without awaiting it."""
        task = asyncio.ensure_future(coroutine)
        self.tasks.append(task)
        return task

    def launch(self, section: Section, body: SectionBody) -> asyncio.Task[Any]:
        """Start ``section`` as an independent task running ``body``."""
        self.sections.append(section)
        return self.spawn(section.run(self, body))

    async def settle(self) -> None:
        """Wait until every launched task is done.

        Only the page runner calls this, to know when the document can be
        serialized; sections never wait on each other.
        """
        await asyncio.gather(*self.tasks)


SectionBody = Callable[[PageContext], Awaitable["str | None"]]


class Section:
    r"""One independently rendered page region with its own failure boundary.

    Parameters
    ----------
    name : str
        Identifier used in logs (e.g. ``'home.isps'``).
    selector : str
        CSS selector of the container the section mounts into.
    title : str
        Human-readable title shown on the error card.
    """

    def __init__(self, name: str, selector: str, title: str) -> None:
        self.name = name
        self.selector = selector
        self.title = title
        self.state = SectionState.IDLE
        self.error: BaseException | None = None

    def __repr__(self) -> str:
        return f"Section({self.name!r}, {self.selector!r}, state={self.state.value})"

    async def run(self, page: PageContext, body: SectionBody) -> SectionState:
        """Run ``body`` and mount its fragment, or an error card on failure.

        A missing container is a silent no-op: the body never runs and the
        section stays ``IDLE``. ``body`` returns the fragment to mount, or
        None when it drew into the container itself (charts).

        Returns
        -------
        SectionState
            The terminal state reached.

        Raises
        ------
        RuntimeError
            If the section already ran; sections do not retry.
        """
        if self.state is not SectionState.IDLE:
            raise RuntimeError(f"Section {self.name} already ran ({self.state.value})")
        if not page.document.has(self.selector):
            logger.debug("Section %s skipped: no %s on page", self.name, self.selector)
            return self.state
        self.state = SectionState.LOADING
        try:
            fragment = await body(page)
            if fragment is not None:
                page.document.mount(self.selector, fragment)
        except Exception as err:
            self.error = err
            self.state = SectionState.FAILED
            if isinstance(err, AppError):
                logger.warning(
                    "Section %s failed: %s", self.name, err, extra={"error": err.to_dict()}
                )
            else:
                logger.exception("Section %s failed unexpectedly", self.name)
            card = await render_error_card(page.renderer, self.title, describe_error(err))
            page.document.mount(self.selector, card)
            return self.state
        self.state = SectionState.RENDERED
        return self.state


def member(document: Any, key: str, source_label: str, *, optional: bool = False) -> Any:
    """Return ``document[key]`` from a decoded JSON object.

    Optional members that are absent or not arrays read as an empty list.

    Raises
    ------
    ShapeFailure
        If ``document`` is not a JSON object.
    """
    if not isinstance(document, Mapping):
        raise ShapeFailure(
            f"Invalid JSON in {source_label}: expected object",
            source_label=source_label,
        )
    value = document.get(key)
    if optional and not isinstance(value, list):
        return []
    return value
