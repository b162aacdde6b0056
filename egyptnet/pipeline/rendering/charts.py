"""Chart sink for chart-backed sections.

The chart library itself lives in the browser; the pipeline only hands it
data. `ChartSink` accepts ``{labels, values}`` for line and bar charts and
``{labels, shares}`` for donut charts, and records each chart on its
container as ``data-chart-kind`` plus a JSON ``data-chart`` attribute. The
sink is re-invocable: the previous chart instance of a container is disposed
before a new one is drawn into it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from .document import PageDocument

logger = logging.getLogger(__name__)

CHART_ATTRIBUTES = ("data-chart-kind", "data-chart")


@dataclass
class ChartInstance:
    """One chart drawn into one container."""

    selector: str
    kind: str
    payload: dict[str, list[Any]] = field(default_factory=dict)


class ChartSink:
    """Draw charts into a `PageDocument`, one live instance per container."""

    def __init__(self, document: PageDocument) -> None:
        self.document = document
        self.instances: dict[str, ChartInstance] = {}

    def line(self, selector: str, labels: Sequence[Any], values: Sequence[Any]) -> ChartInstance:
        return self._draw(selector, "line", {"labels": list(labels), "values": list(values)})

    def bar(self, selector: str, labels: Sequence[Any], values: Sequence[Any]) -> ChartInstance:
        return self._draw(selector, "bar", {"labels": list(labels), "values": list(values)})

    def donut(self, selector: str, labels: Sequence[Any], shares: Sequence[Any]) -> ChartInstance:
        return self._draw(selector, "donut", {"labels": list(labels), "shares": list(shares)})

    def dispose(self, selector: str) -> None:
        """Remove the chart drawn into ``selector``, if any."""
        if self.instances.pop(selector, None) is not None:
            self.document.remove_attributes(selector, CHART_ATTRIBUTES)
            logger.debug("Disposed chart in %s", selector)

    def _draw(self, selector: str, kind: str, payload: dict[str, list[Any]]) -> ChartInstance:
        self.dispose(selector)
        instance = ChartInstance(selector, kind, payload)
        self.document.set_attributes(
            selector,
            {
                "data-chart-kind": kind,
                "data-chart": json.dumps(payload, ensure_ascii=False),
            },
        )
        self.instances[selector] = instance
        return instance
