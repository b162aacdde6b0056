"""Page document: the DOM that section renderers mount fragments into.

A page shell is parsed once with BeautifulSoup; every section then targets
one container by CSS selector. Missing containers are a silent no-op, since
pages may omit sections. Fragments are inert markup: any ``<script>``
element inside a mounted fragment is dropped before insertion.
"""

from __future__ import annotations

from typing import Iterable

from bs4 import BeautifulSoup, Tag


def _parse_fragment(fragment: str) -> BeautifulSoup:
    parsed = BeautifulSoup(fragment, "html.parser")
    for script in parsed.find_all("script"):
        script.decompose()
    return parsed


class PageDocument:
    """A parsed page shell with mount, text and attribute helpers.

    Parameters
    ----------
    html : str
        Full HTML of the page shell.
    """

    def __init__(self, html: str) -> None:
        self.soup = BeautifulSoup(html, "html.parser")

    @property
    def page(self) -> str | None:
        """Page kind declared on ``<body data-page="...">``, if any."""
        body = self.soup.body
        if body is None:
            return None
        value = body.get("data-page")
        return str(value) if value else None

    def find(self, selector: str) -> Tag | None:
        """Return the first element matching ``selector``."""
        return self.soup.select_one(selector)

    def has(self, selector: str) -> bool:
        return self.find(selector) is not None

    def mount(self, selector: str, fragment: str) -> bool:
        """Replace the content of ``selector`` with ``fragment``.

        Returns
        -------
        bool
            False when the container does not exist (nothing is changed).
        """
        container = self.find(selector)
        if container is None:
            return False
        container.clear()
        for node in list(_parse_fragment(fragment).contents):
            container.append(node)
        return True

    def set_text(self, selector: str, text: str) -> bool:
        """Replace the content of ``selector`` with plain text."""
        container = self.find(selector)
        if container is None:
            return False
        container.clear()
        container.append(text)
        return True

    def prepend(self, selectors: Iterable[str], fragment: str) -> bool:
        """Insert ``fragment`` at the top of the first existing host in ``selectors``."""
        for selector in selectors:
            host = self.find(selector)
            if host is None:
                continue
            for position, node in enumerate(list(_parse_fragment(fragment).contents)):
                host.insert(position, node)
            return True
        return False

    def set_attributes(self, selector: str, attributes: dict[str, str]) -> bool:
        container = self.find(selector)
        if container is None:
            return False
        for name, value in attributes.items():
            container[name] = value
        return True

    def remove_attributes(self, selector: str, names: Iterable[str]) -> None:
        container = self.find(selector)
        if container is None:
            return
        for name in names:
            if name in container.attrs:
                del container[name]

    def render(self) -> str:
        """Serialize the document back to HTML."""
        return str(self.soup)
