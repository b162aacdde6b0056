"""Offline validation of every known data resource.

A developer diagnostic, not a user-facing flow. `OfflineValidator` runs the
loader, normalizer and schema checks against each resource (home, timeline,
growth, ISPs, penetration) independently: a failure is caught, logged with
the resource label and recorded, and the batch continues with the next
resource. Soft problems (no facts on the home page, implausible timeline
years, out-of-range connection shares, ISPs without a logo) are logged as
warnings and never fail a resource.

When a page document is supplied, each failure also prepends a diagnostic
card to the page's ``main.container`` (or ``body``). Results can be printed
as a ``rich`` table with `render_report`.

The pass is opt-in: `wants_validation` reads a ``validate`` query flag
(present and not ``0``).

Examples
--------
>>> from egyptnet.pipeline.data.loader import ResourceLoader
>>> from egyptnet.pipeline.validation.offline import OfflineValidator
>>> # results = await OfflineValidator(ResourceLoader("site")).run_all()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable
from urllib.parse import parse_qs

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from egyptnet.config import (
    CONNECTION_SHARE_RANGE,
    DIAGNOSTIC_HOSTS,
    GROWTH_RESOURCE,
    HOME_RESOURCE,
    ISPS_RESOURCE,
    PENETRATION_RESOURCE,
    TIMELINE_RESOURCE,
    VALIDATION_ERROR_TITLE_FORMAT,
)
from egyptnet.exceptions import AppError, ShapeFailure
from egyptnet.pipeline.data.loader import ResourceLoader
from egyptnet.pipeline.data.normalizer import (
    normalize_isps,
    out_of_range_years,
    penetration_series,
)
from egyptnet.pipeline.data.schema import (
    CONNECTION_TYPE,
    FACT,
    GROWTH_STAT,
    ISP_OFFER,
    MILESTONE,
    PENETRATION_POINT,
    SNAPSHOT,
    SPEED,
    is_blank,
    validate_records,
)
from egyptnet.pipeline.rendering.cards import describe_error, render_error_card
from egyptnet.pipeline.rendering.document import PageDocument
from egyptnet.pipeline.rendering.templating import TemplateRenderer

logger = logging.getLogger(__name__)

_FALSY_FLAGS = frozenset({"", "0", "false", "no", "off"})


def wants_validation(query: str | None) -> bool:
    """Return True when ``query`` carries a ``validate`` flag other than ``0``.

    Examples
    --------
    >>> wants_validation("?validate=1"), wants_validation("validate"), wants_validation("validate=0")
    (True, True, False)
    >>> wants_validation(None)
    False
    """
    if not query:
        return False
    values = parse_qs(query.lstrip("?"), keep_blank_values=True).get("validate")
    if not values:
        return False
    return values[0] != "0"


def env_flag(value: str | None) -> bool:
    """Interpret an environment variable as a boolean switch (unset is off)."""
    if value is None:
        return False
    return value.strip().lower() not in _FALSY_FLAGS


@dataclass
class ValidationResult:
    """Outcome of one resource check."""

    label: str
    resource: str
    ok: bool
    message: str = ""
    warnings: list[str] = field(default_factory=list)


Check = Callable[[], Awaitable[list[str]]]


class OfflineValidator:
    r"""Validate every known resource independently and report per resource.

    Parameters
    ----------
    loader : ResourceLoader
        Loader rooted at the site's data root.
    document : PageDocument | None, optional
        Page to receive diagnostic cards for failures.
    renderer : TemplateRenderer | None, optional
        Renderer for the diagnostic cards; inline markup when omitted.
    """

    def __init__(
        self,
        loader: ResourceLoader,
        *,
        document: PageDocument | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.loader = loader
        self.document = document
        self.renderer = renderer

    def checks(self) -> list[tuple[str, str, Check]]:
        """Return ``(label, resource, check)`` for every known resource."""
        return [
            ("home", HOME_RESOURCE, self.validate_home),
            ("timeline", TIMELINE_RESOURCE, self.validate_timeline),
            ("growth", GROWTH_RESOURCE, self.validate_growth),
            ("isps", ISPS_RESOURCE, self.validate_isps),
            ("penetration", PENETRATION_RESOURCE, self.validate_penetration),
        ]

    async def validate_home(self) -> list[str]:
        home = await self.loader.load(HOME_RESOURCE)
        if not isinstance(home, Mapping):
            raise ShapeFailure("Invalid JSON in home: expected object", source_label="home")
        validate_records(home.get("snapshots"), SNAPSHOT, "home.snapshots")
        if isinstance(home.get("facts"), list):
            validate_records(home["facts"], FACT, "home.facts")
            return []
        return ["facts[] not present, skipping facts validation."]

    async def validate_timeline(self) -> list[str]:
        milestones = await self.loader.load(TIMELINE_RESOURCE)
        validate_records(milestones, MILESTONE, "timeline")
        bad_years = out_of_range_years(milestones)
        if bad_years:
            return [f"Unexpected year values: {', '.join(str(year) for year in bad_years)}"]
        return []

    async def validate_growth(self) -> list[str]:
        growth = await self.loader.load(GROWTH_RESOURCE)
        if not isinstance(growth, Mapping):
            raise ShapeFailure("Invalid JSON in growth: expected object", source_label="growth")
        for key, schema in (
            ("stats", GROWTH_STAT),
            ("types", CONNECTION_TYPE),
            ("speeds", SPEED),
            ("facts", FACT),
        ):
            if isinstance(growth.get(key), list):
                validate_records(growth[key], schema, f"growth.{key}")
        low, high = CONNECTION_SHARE_RANGE
        types = growth["types"] if isinstance(growth.get("types"), list) else []
        odd_shares = [
            entry["share"]
            for entry in types
            if not isinstance(entry["share"], (int, float)) or not low <= entry["share"] <= high
        ]
        if odd_shares:
            return [f"Connection shares outside {low}-{high}: {', '.join(map(str, odd_shares))}"]
        return []

    async def validate_isps(self) -> list[str]:
        offers = normalize_isps(await self.loader.load(ISPS_RESOURCE))
        validate_records(offers, ISP_OFFER, "isps")
        without_logo = [str(index) for index, offer in enumerate(offers) if is_blank(offer["logo"])]
        if without_logo:
            return [f"No logo for isps[{', '.join(without_logo)}]"]
        return []

    async def validate_penetration(self) -> list[str]:
        series = penetration_series(await self.loader.load(PENETRATION_RESOURCE))
        validate_records(series, PENETRATION_POINT, "penetration.series")
        return []

    async def run_all(self) -> dict[str, ValidationResult]:
        """Run every check; failures are logged and recorded, never raised.

        Returns
        -------
        dict[str, ValidationResult]
            Results keyed by resource label, in check order.
        """
        results: dict[str, ValidationResult] = {}
        for label, resource, check in self.checks():
            try:
                warnings = await check()
            except Exception as err:
                message = describe_error(err)
                if isinstance(err, AppError):
                    logger.error("%s: %s", label, message, extra={"error": err.to_dict()})
                else:
                    logger.exception("%s: unexpected validation error", label)
                results[label] = ValidationResult(label, resource, False, message)
                await self._show_card(label, message)
                continue
            for warning in warnings:
                logger.warning("%s: %s", label, warning)
            logger.info("%s: %s OK", label, resource)
            results[label] = ValidationResult(label, resource, True, warnings=warnings)
        failed = sum(1 for result in results.values() if not result.ok)
        logger.info("Validation summary: total=%d failed=%d", len(results), failed)
        return results

    async def _show_card(self, label: str, message: str) -> None:
        if self.document is not None:
            await prepend_diagnostic_card(self.document, self.renderer, label, message)


async def prepend_diagnostic_card(
    document: PageDocument, renderer: TemplateRenderer | None, label: str, message: str
) -> None:
    """Prepend a validation error card for ``label`` to the page's diagnostic host."""
    title = VALIDATION_ERROR_TITLE_FORMAT.format(label=label)
    card = await render_error_card(renderer, title, message)
    document.prepend(DIAGNOSTIC_HOSTS, card)


async def show_failures(
    results: Mapping[str, ValidationResult],
    document: PageDocument,
    renderer: TemplateRenderer | None = None,
) -> None:
    """Put the cards of an earlier validation run on ``document``."""
    for result in results.values():
        if not result.ok:
            await prepend_diagnostic_card(document, renderer, result.label, result.message)


def render_report(
    results: Mapping[str, ValidationResult], console: Console | None = None
) -> Table:
    """Print the validation results as a table and return it."""
    table = Table(title="Data validation")
    table.add_column("Resource")
    table.add_column("File")
    table.add_column("Status")
    table.add_column("Details")
    for result in results.values():
        status = "[green]OK[/green]" if result.ok else "[red]FAILED[/red]"
        details = result.message if not result.ok else "; ".join(result.warnings)
        table.add_row(escape(result.label), escape(result.resource), status, escape(details))
    (console or Console()).print(table)
    return table
