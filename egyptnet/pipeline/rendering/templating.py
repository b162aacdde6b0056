"""Template rendering with a registered-template path and a raw-source fallback.

This module turns validated records into inert HTML fragments. It wraps a
Jinja2 environment behind one abstraction, `TemplateRenderer`, which tries
two strategies in order:

1. `RegisteredTemplateStrategy` looks the template up by name through the
   environment's loader (a ``FileSystemLoader`` on a local template root).
2. `RawSourceStrategy` fetches the template's source text from its storage
   location and renders that string against the same context.

Strategies are selected by capability probing (``available()``): a URL
template root has no registered loader, so only the raw-source path runs.
The fallback is used only when the registered path reports the template as
unknown or produces no output; any other error, or a failure of the last
strategy, raises ``TemplateFailure`` carrying the template name and cause.

Autoescaping is on, so interpolated record fields cannot inject markup.

Examples
--------
>>> from egyptnet.pipeline.rendering.templating import configure
>>> renderer = configure("templates")
>>> # html = await renderer.render("fact.html", {"title": "T", "text": "x"})
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Mapping

from jinja2 import Environment, FileSystemLoader, TemplateError, TemplateNotFound

from egyptnet.exceptions import AppError, TemplateFailure
from egyptnet.pipeline.data.loader import ResourceLoader, is_url

logger = logging.getLogger(__name__)

SourceFetcher = Callable[[str], Awaitable[str]]


class TemplateStrategy(ABC):
    """One way of producing a template's output."""

    name = "strategy"

    @abstractmethod
    def available(self) -> bool:
        """Return True when this strategy can run in the current setup."""

    @abstractmethod
    async def render(self, template_name: str, context: Mapping[str, Any]) -> str | None:
        """Render ``template_name``; return None when the template is unknown or empty."""


class RegisteredTemplateStrategy(TemplateStrategy):
    """Render templates registered with the environment's loader."""

    name = "registered"

    def __init__(self, environment: Environment) -> None:
        self.environment = environment

    def available(self) -> bool:
        return self.environment.loader is not None

    async def render(self, template_name: str, context: Mapping[str, Any]) -> str | None:
        try:
            template = self.environment.get_template(template_name)
        except TemplateNotFound:
            return None
        output = template.render(context)
        return output or None


class RawSourceStrategy(TemplateStrategy):
    """Fetch a template's source text and render it as a string template."""

    name = "raw-source"

    def __init__(self, environment: Environment, fetch_source: SourceFetcher | None) -> None:
        self.environment = environment
        self.fetch_source = fetch_source

    def available(self) -> bool:
        return self.fetch_source is not None

    async def render(self, template_name: str, context: Mapping[str, Any]) -> str | None:
        assert self.fetch_source is not None
        source = await self.fetch_source(template_name)
        output = self.environment.from_string(source).render(context)
        return output or None


class TemplateRenderer:
    r"""Render named templates through an ordered list of strategies.

    Parameters
    ----------
    strategies : Iterable[TemplateStrategy]
        Strategies in priority order. Unavailable ones are skipped.

    Notes
    -----
    Rendering is a coroutine because the fallback path performs I/O; the
    registered path itself is synchronous.
    """

    def __init__(self, strategies: Iterable[TemplateStrategy]) -> None:
        self.strategies = list(strategies)

    def active_strategies(self) -> list[TemplateStrategy]:
        """Return the strategies whose capability probe succeeds, in order."""
        return [strategy for strategy in self.strategies if strategy.available()]

    async def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        """Render ``template_name`` with ``context`` into an HTML fragment.

        Parameters
        ----------
        template_name : str
            Template file name relative to the template root.
        context : Mapping[str, Any]
            Variables available to the template.

        Returns
        -------
        str
            The rendered fragment (inert markup).

        Raises
        ------
        TemplateFailure
            If a strategy errors, or every available strategy reported the
            template as unknown or produced no output.
        """
        for strategy in self.active_strategies():
            try:
                output = await strategy.render(template_name, context)
            except (TemplateError, AppError) as err:
                raise TemplateFailure(template_name, err) from err
            if output:
                return output
            logger.debug(
                "Template %s gave no output via %s strategy", template_name, strategy.name
            )
        raise TemplateFailure(template_name, None)

    async def render_each(
        self, template_name: str, contexts: Iterable[Mapping[str, Any]]
    ) -> str:
        """Render ``template_name`` once per context, in order, and join the fragments."""
        fragments = [await self.render(template_name, context) for context in contexts]
        return "".join(fragments)


def configure(
    template_root: str | Path,
    *,
    autoescape: bool = True,
    use_cache: bool = False,
    source_loader: ResourceLoader | None = None,
) -> TemplateRenderer:
    """Build the site's `TemplateRenderer` once at startup.

    Parameters
    ----------
    template_root : str | Path
        Local template directory or ``http(s)://`` base URL of the templates.
    autoescape : bool, optional
        Enable HTML autoescaping. Defaults to True.
    use_cache : bool, optional
        Keep compiled templates between renders. Disabled by default so
        edited templates are picked up on the next run.
    source_loader : ResourceLoader | None, optional
        Loader used by the raw-source fallback. When omitted, one rooted at
        ``template_root`` is created; URL roots need an injected loader that
        owns an open session.

    Returns
    -------
    TemplateRenderer
        Renderer with the registered strategy first and raw source second.
    """
    loader = None if is_url(template_root) else FileSystemLoader(str(template_root))
    environment = Environment(
        loader=loader,
        autoescape=autoescape,
        cache_size=400 if use_cache else 0,
    )
    source_loader = source_loader or ResourceLoader(template_root)
    renderer = TemplateRenderer(
        [
            RegisteredTemplateStrategy(environment),
            RawSourceStrategy(environment, source_loader.load_text),
        ]
    )
    logger.debug(
        "Template strategies for %s: %s",
        template_root,
        ", ".join(s.name for s in renderer.active_strategies()),
    )
    return renderer
