"""Fetch-or-cache image loading.

:class:`ImageLoader` looks an image URL up in a
:class:`~datamanager.cache.DataManager` and only goes to the network on a
miss. Whatever it returns is written back to the cache in the background,
encoded as an :class:`~datamanager.models.ImageRecord` JSON blob under the
request URL, so the next load for the same URL is served locally.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, Optional, Union

import httpx

from datamanager.cache import DataManager
from datamanager.exceptions import InvalidURLError, NoDataError
from datamanager.models import CacheWrite, ImageRecord, StorageLocation
from datamanager.outcome import Failure, Outcome, Success

logger = logging.getLogger(__name__)


class ImageLoader:
    """Loads image bytes through the cache, falling back to HTTP.

    Args:
        data_manager: Cache to read from and write to. Defaults to
            :meth:`DataManager.default`.
        client: Optional externally-owned :class:`httpx.AsyncClient` used
            for fetches. When ``None`` a short-lived client is opened per
            fetch.

    Example::

        loader = ImageLoader()
        outcome = await loader.load_image("https://cdn.example.com/a.png")
        outcome.fold(success=show, failure=show_placeholder)
    """

    def __init__(
        self,
        data_manager: Optional[DataManager] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._data_manager = data_manager or DataManager.default()
        self._client = client
        self._pending: set[asyncio.Task[None]] = set()

    async def load_image(self, url: Union[str, httpx.URL]) -> Outcome[ImageRecord]:
        """Return the image at *url*, from cache when possible.

        A cached blob that is missing or does not decode as an
        :class:`ImageRecord` falls through to a network fetch. On success
        the record is re-saved to the cache without waiting for the write.

        Returns:
            ``Success`` with the record, or ``Failure`` carrying the fetch
            error (an :mod:`httpx` exception, :class:`InvalidURLError`, or
            :class:`NoDataError`).
        """
        key = str(url)
        cached = await self._data_manager.load_object(StorageLocation.CACHE, key)
        outcome = await cached.decode(ImageRecord).async_flat_map_error(
            lambda _: self._fetch(key)
        )
        return outcome.map(lambda record: self._save_in_background(key, record))

    async def wait_for_pending_saves(self) -> None:
        """Wait for background re-saves and the disk writes they scheduled."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
        await self._data_manager.wait_for_pending_writes()

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _save_in_background(self, key: str, record: ImageRecord) -> ImageRecord:
        self._schedule(self._save(key, record))
        return record

    def _schedule(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _save(self, key: str, record: ImageRecord) -> None:
        blob = Success(record).encode()
        if isinstance(blob, Failure):
            logger.debug("Not caching %s: %s", key, blob.error)
            return
        await self._data_manager.save_object(CacheWrite(data=blob.get()), key)

    async def _fetch(self, url: str) -> Outcome[ImageRecord]:
        logger.debug("Fetching image %s", url)
        try:
            if self._client is not None:
                response = await self._client.get(url, follow_redirects=True)
            else:
                async with httpx.AsyncClient(follow_redirects=True) as client:
                    response = await client.get(url)
            response.raise_for_status()
        except httpx.InvalidURL as exc:
            return Failure(InvalidURLError(f"Cannot fetch {url!r}: {exc}"))
        except httpx.HTTPError as exc:
            logger.debug("Image fetch for %s failed: %s", url, exc)
            return Failure(exc)

        if not response.content:
            return Failure(NoDataError(f"Empty body for {url}"))

        # Redirects change response.url; keep the address the bytes came from.
        resolved = str(response.url) if response.url else url
        return Success(ImageRecord(data=response.content, url=resolved))
