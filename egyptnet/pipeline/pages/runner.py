"""Render page shells into finished HTML pages.

This module is the headless entry into the page layer. It routes each page
shell to its section renderer by ``<body data-page="...">``, lets every
section run to its terminal state, optionally puts offline validation cards
on the page, and writes the result to the output directory. A site run
validates the data once and shows the same result on every page.

Usage Examples
--------------
Typical programmatic usage with settings defaults::

    from egyptnet.pipeline.pages.runner import run_from_config
    assert run_from_config() is True

Rendering a single shell in memory::

    page = await render_page(shell_html, loader, renderer)
    print(page.html)

"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from rich.console import Console

from egyptnet.config import PAGE_SHELLS
from egyptnet.pipeline.data.loader import ResourceLoader
from egyptnet.pipeline.rendering.document import PageDocument
from egyptnet.pipeline.rendering.templating import TemplateRenderer, configure
from egyptnet.pipeline.settings import SiteSettings
from egyptnet.pipeline.validation.offline import (
    OfflineValidator,
    ValidationResult,
    render_report,
    show_failures,
)

from .growth import render_growth
from .home import render_home
from .sections import PageContext, Section
from .timeline import render_timeline
from .today import render_today

logger = logging.getLogger(__name__)

PageLauncher = Callable[[PageContext], "list[asyncio.Task[Any]]"]

PAGE_RENDERERS: dict[str, PageLauncher] = {
    "home": render_home,
    "growth": render_growth,
    "timeline": render_timeline,
    "today": render_today,
}


@dataclass
class RenderedPage:
    """A rendered page and how its sections ended."""

    kind: str | None
    html: str
    sections: list[Section] = field(default_factory=list)
    validation: Mapping[str, ValidationResult] | None = None


async def render_page(
    shell_html: str,
    loader: ResourceLoader,
    renderer: TemplateRenderer,
    *,
    page_kind: str | None = None,
    validate: bool = False,
    validation: Mapping[str, ValidationResult] | None = None,
) -> RenderedPage:
    """Render one page shell.

    Parameters
    ----------
    shell_html : str
        HTML of the page shell.
    loader : ResourceLoader
        Loader for the JSON resources.
    renderer : TemplateRenderer
        Template renderer shared by all pages of a run.
    page_kind : str | None, optional
        Page kind used when the shell does not declare ``data-page``.
    validate : bool, optional
        Also run the offline validator, with diagnostic cards on this page.
    validation : Mapping[str, ValidationResult] | None, optional
        Results of an earlier validation run; their failures are shown as
        diagnostic cards instead of validating again.

    Returns
    -------
    RenderedPage
        Final HTML plus section states (and validation results if run).
    """
    document = PageDocument(shell_html)
    kind = document.page or page_kind
    page = PageContext(document, loader, renderer)
    launcher = PAGE_RENDERERS.get(kind or "")
    if launcher is None:
        logger.warning("No renderer for page %r; shell left as is", kind)
    else:
        launcher(page)
    if validation is not None:
        await show_failures(validation, document, renderer)
    elif validate:
        validation = await OfflineValidator(
            loader, document=document, renderer=renderer
        ).run_all()
    await page.settle()
    return RenderedPage(kind, document.render(), page.sections, validation)


def write_html_output(html_content: str, output_file: Path) -> None:
    """Write the rendered HTML to disk, logging on failure."""
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(html_content, encoding="utf-8")
    except OSError:
        logger.exception("Failed to write HTML output %s", output_file)


async def render_site(
    settings: SiteSettings, pages: Iterable[str] | None = None
) -> dict[str, RenderedPage]:
    """Render the selected page shells (all known pages by default).

    Shells that do not exist are skipped with a warning. Rendered pages are
    written to ``settings.output_dir`` under the shell's file name. With
    ``settings.validate`` the data is validated once, before the first page.
    """
    kinds = list(pages) if pages else list(PAGE_SHELLS)
    rendered: dict[str, RenderedPage] = {}
    async with ResourceLoader(settings.data_root) as loader, ResourceLoader(
        settings.template_root
    ) as template_loader:
        renderer = configure(settings.template_root, source_loader=template_loader)
        validation = await OfflineValidator(loader).run_all() if settings.validate else None
        for kind in kinds:
            shell_name = PAGE_SHELLS[kind]
            shell_path = settings.shell_dir / shell_name
            if not shell_path.is_file():
                logger.warning("Page shell %s not found; skipping %s", shell_path, kind)
                continue
            result = await render_page(
                shell_path.read_text(encoding="utf-8"),
                loader,
                renderer,
                page_kind=kind,
                validation=validation,
            )
            write_html_output(result.html, settings.output_dir / shell_name)
            failed = [s.name for s in result.sections if s.error is not None]
            logger.info(
                "Rendered %s: %d sections, %d failed%s",
                kind,
                len(result.sections),
                len(failed),
                f" ({', '.join(failed)})" if failed else "",
            )
            rendered[kind] = result
    return rendered


def run_from_config(
    settings: SiteSettings | None = None,
    pages: Iterable[str] | None = None,
    console: Console | None = None,
) -> bool:
    """Render the site; return ``True`` on success and ``False`` on error.

    Section failures are not errors here (they become error cards); only
    configuration and unexpected failures return ``False``, after being
    logged. When validation ran, its report is printed once with ``rich``.
    """
    try:
        settings = settings or SiteSettings()
        rendered = asyncio.run(render_site(settings, pages))
    except Exception:
        logger.exception("Failed to render site")
        return False
    reports = [page.validation for page in rendered.values() if page.validation is not None]
    if reports:
        render_report(reports[0], console)
    return True


__all__ = [
    "PAGE_RENDERERS",
    "RenderedPage",
    "render_page",
    "render_site",
    "run_from_config",
    "write_html_output",
]
