"""Error cards shown in place of a section (or as validator diagnostics).

The card is rendered through the ``error.html`` template when possible. If
the template itself cannot be rendered, a small inline card with escaped
title and message is used instead, so a broken template root never hides
the failure being reported.
"""

from __future__ import annotations

import html
import logging

from egyptnet.config import ERROR_TEMPLATE
from egyptnet.exceptions import AppError, TemplateFailure

from .templating import TemplateRenderer

logger = logging.getLogger(__name__)


def describe_error(error: BaseException) -> str:
    """Return the human-readable message for ``error``."""
    if isinstance(error, AppError):
        return error.message
    return str(error) or error.__class__.__name__


def inline_error_card(title: str, message: str) -> str:
    """Build the template-free error card."""
    return (
        '<article class="card error-card" role="alert">'
        f"<h3>{html.escape(title)}</h3>"
        f"<p>{html.escape(message)}</p>"
        "</article>"
    )


async def render_error_card(
    renderer: TemplateRenderer | None, title: str, message: str
) -> str:
    """Render an error card, falling back to inline markup.

    Parameters
    ----------
    renderer : TemplateRenderer | None
        Renderer providing ``error.html``; None forces the inline card.
    title : str
        Card heading, e.g. ``'ISP data'``.
    message : str
        Failure message shown in the card body.
    """
    if renderer is None:
        return inline_error_card(title, message)
    try:
        return await renderer.render(ERROR_TEMPLATE, {"title": title, "message": message})
    except TemplateFailure as err:
        logger.debug("Error template unavailable (%s); using inline card", err)
        return inline_error_card(title, message)
