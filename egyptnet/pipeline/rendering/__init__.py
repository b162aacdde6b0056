"""Rendering layer: templates, the page document, error cards and the chart sink."""

from __future__ import annotations

from .cards import describe_error, inline_error_card, render_error_card
from .charts import ChartInstance, ChartSink
from .document import PageDocument
from .templating import (
    RawSourceStrategy,
    RegisteredTemplateStrategy,
    TemplateRenderer,
    TemplateStrategy,
    configure,
)

__all__ = [
    "ChartInstance",
    "ChartSink",
    "PageDocument",
    "RawSourceStrategy",
    "RegisteredTemplateStrategy",
    "TemplateRenderer",
    "TemplateStrategy",
    "configure",
    "describe_error",
    "inline_error_card",
    "render_error_card",
]
