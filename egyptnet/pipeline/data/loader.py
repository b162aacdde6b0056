"""Resource loader for the JSON documents behind every page section.

This module defines `ResourceLoader`, the networking and file boundary of
the rendering pipeline. It fetches a resource by its logical path relative
to a data root, decodes it, and surfaces every transport or decoding problem
as one of two exception types from `egyptnet.exceptions`:

- ``FetchFailure`` for non-success statuses, missing files and transport errors.
- ``DecodeFailure`` for bodies that are not UTF-8 JSON.

The data root is either an ``http(s)://`` base URL, fetched with an
``aiohttp`` session that bypasses caches, or a local directory read off the
event loop. There is exactly one attempt per call: no retry, no backoff and
no timeout beyond the session's own. Callers (section renderers) own the
failure policy.

Examples
--------
>>> import asyncio
>>> from egyptnet.pipeline.data.loader import ResourceLoader
>>> async def main():
...     async with ResourceLoader("site") as loader:
...         return await loader.load("data/home.json")
>>> # asyncio.run(main())
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import aiohttp

from egyptnet.config import NO_CACHE_HEADERS
from egyptnet.exceptions import DecodeFailure, FetchFailure

logger = logging.getLogger(__name__)


def is_url(root: str | Path) -> bool:
    """Return True when ``root`` is an HTTP(S) base URL rather than a directory."""
    return isinstance(root, str) and root.startswith(("http://", "https://"))


class ResourceLoader:
    r"""Asynchronous loader for JSON resources and raw template sources.

    Parameters
    ----------
    root : str | Path
        Data root: an ``http(s)://`` base URL or a local directory.
    session : aiohttp.ClientSession | None, optional
        Session used for URL roots. When omitted, entering the loader as an
        async context manager opens (and later closes) an owned session.

    Notes
    -----
    The loader never caches; memoization of shared documents is the job of
    the page-scoped ``ResourceCache``.
    """

    def __init__(
        self, root: str | Path, session: aiohttp.ClientSession | None = None
    ) -> None:
        self.root = root if is_url(root) else Path(root)
        self.session = session
        self._owns_session = False

    async def __aenter__(self) -> ResourceLoader:
        if is_url(self.root) and self.session is None:
            self.session = aiohttp.ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the session if this loader opened it."""
        if self._owns_session and self.session is not None:
            await self.session.close()
            self.session = None
            self._owns_session = False

    def locate(self, path: str) -> str:
        """Return the URL or filesystem location for a logical resource path."""
        if isinstance(self.root, Path):
            return str(self.root / path)
        return f"{self.root.rstrip('/')}/{path.lstrip('/')}"

    async def fetch_bytes(self, path: str) -> bytes:
        """Fetch the raw body of ``path`` in a single attempt.

        Raises
        ------
        FetchFailure
            If the status is not 2xx, the file does not exist, or the
            transport fails before a response is received.
        """
        if isinstance(self.root, Path):
            return await self._read_file(path)
        return await self._read_url(path)

    async def _read_file(self, path: str) -> bytes:
        target = Path(self.locate(path))
        try:
            return await asyncio.to_thread(target.read_bytes)
        except FileNotFoundError:
            raise FetchFailure(path, 404) from None
        except OSError as err:
            raise FetchFailure(path, None, detail=str(err)) from err

    async def _read_url(self, path: str) -> bytes:
        if self.session is None:
            raise FetchFailure(path, None, detail="no HTTP session open")
        url = self.locate(path)
        try:
            async with self.session.get(url, headers=NO_CACHE_HEADERS) as response:
                status = response.status
                if not 200 <= status < 300:
                    raise FetchFailure(path, status)
                return await response.read()
        except aiohttp.ClientError as err:
            raise FetchFailure(path, None, detail=str(err)) from err

    async def load(self, path: str) -> Any:
        """Fetch ``path`` and decode its body as JSON.

        Parameters
        ----------
        path : str
            Logical resource path relative to the data root, e.g.
            ``'data/timeline.json'``.

        Returns
        -------
        Any
            The decoded JSON value.

        Raises
        ------
        FetchFailure
            On transport or status failure.
        DecodeFailure
            If the body is not valid UTF-8 JSON.
        """
        body = await self.fetch_bytes(path)
        try:
            value = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as err:
            raise DecodeFailure(path, detail=str(err)) from err
        logger.debug("Loaded %s", path)
        return value

    async def load_text(self, path: str) -> str:
        """Fetch ``path`` and return its body as UTF-8 text."""
        body = await self.fetch_bytes(path)
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as err:
            raise DecodeFailure(path, detail=str(err)) from err
