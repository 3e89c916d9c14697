"""Two-tier (memory + disk) object cache keyed by string.

:class:`DataManager` answers loads from a :class:`MemoryCache` first and
falls back to flat files under the directory of a
:class:`~datamanager.models.StorageLocation`. Each key maps to a single
percent-encoded filename (see :func:`_path_for`), so keys such as URLs
never create subdirectories or point outside the storage directory. Saves
land in memory immediately and are persisted to disk by a detached task.

All state changes and disk I/O for one manager run under a single
:class:`asyncio.Lock`, so exactly one cache operation is in progress at a
time. The lock is created for the running event loop and replaced when
the manager is first used from a different loop. Blocking file access is
pushed to a worker thread with :func:`asyncio.to_thread` to keep the event
loop responsive.

Disk writes are best effort: the memory write has already succeeded, so a
failed write is logged and otherwise dropped. A process exiting before a
detached write finishes loses that on-disk copy; the memory tier and the
caller's own fallbacks cover it. Use :meth:`DataManager.wait_for_pending_writes`
to flush before shutdown or in tests.

There is no TTL and no versioning: once on disk, an entry is served until
something outside this package removes it.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Coroutine, Optional
from urllib.parse import quote

from datamanager.cache.memory import MemoryCache
from datamanager.config import resolve_directory
from datamanager.exceptions import FileNotFoundError_, NoFilePathError
from datamanager.models import StorageConfig, StorageLocation, StorageRequest
from datamanager.outcome import Failure, Outcome, Success

logger = logging.getLogger(__name__)


class DataManager:
    """Memory-first, disk-backed byte cache.

    Most applications use the shared instance from :meth:`default`;
    components also accept an explicitly constructed manager so tests and
    embedders can point the disk tier somewhere else.

    Args:
        storage: Memory cost ceiling and optional directory overrides.

    Example::

        manager = DataManager.default()
        await manager.save_object(CacheWrite(data=b"..."), "avatar-42")
        outcome = await manager.load_object(StorageLocation.CACHE, "avatar-42")
    """

    _default: Optional[DataManager] = None

    def __init__(self, storage: Optional[StorageConfig] = None) -> None:
        self._storage = storage or StorageConfig()
        self._memory = MemoryCache(self._storage.memory_cost_limit)
        self._lock: Optional[asyncio.Lock] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._pending: set[asyncio.Task[None]] = set()

    # ------------------------------------------------------------------ #
    # Shared instance
    # ------------------------------------------------------------------ #

    @classmethod
    def default(cls) -> DataManager:
        """Return the process-wide manager, creating it on first use.

        The instance belongs to one event loop at a time. Using it from a new
        loop starts a fresh lock and forgets writes scheduled on the old one.
        """
        if cls._default is None:
            cls._default = cls()
        return cls._default

    @classmethod
    def set_default(cls, manager: DataManager) -> None:
        """Install *manager* as the process-wide instance."""
        cls._default = manager

    @classmethod
    def reset_default(cls) -> None:
        """Forget the process-wide instance. Primarily useful in test suites."""
        cls._default = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def directory_for(self, location: StorageLocation) -> Optional[Path]:
        """Resolve the on-disk directory for *location*, honouring overrides."""
        return resolve_directory(location, self._storage)

    async def load_object(self, location: StorageLocation, key: str) -> Outcome[bytes]:
        """Load the bytes stored under *key*.

        Memory is consulted first. On a miss the file for *key* under the
        directory of *location* is read. Disk hits are not copied back into memory.

        Returns:
            ``Success`` with the bytes, ``Failure(NoFilePathError)`` when the
            location has no directory, or ``Failure(FileNotFoundError_)``
            when the file is missing or unreadable.
        """
        async with self._guard():
            cached = self._memory.get(key)
            if cached is not None:
                logger.debug("Memory hit for %r", key)
                return Success(cached)

            directory = self.directory_for(location)
            if directory is None:
                return Failure(NoFilePathError(f"No directory for {location.value} storage"))

            logger.debug("Memory miss for %r, reading %s", key, directory)
            return await asyncio.to_thread(_read_file, directory, key)

    async def save_object(self, storage: StorageRequest, key: str) -> None:
        """Store the payload of *storage* under *key*.

        The memory write happens before this coroutine returns and cannot
        fail. If the storage location has a directory, writing the file is
        scheduled as a detached task; its failure is logged, never raised.
        """
        async with self._guard():
            self._memory.set(key, storage.data)

            directory = self.directory_for(storage.location)
            if directory is None:
                logger.debug("No directory for %s storage, keeping %r in memory only", storage.location.value, key)
                return

            self._schedule(self._save_file(storage.data, directory, key))

    async def wait_for_pending_writes(self) -> None:
        """Wait until every scheduled disk write has finished."""
        self._guard()
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``entries`` and ``memory_cost`` (current memory
            tier usage), ``memory_cost_limit``, ``pending_writes``, and the
            resolved ``cache_dir`` / ``document_dir`` (``None`` when
            unresolvable).
        """
        cache_dir = self.directory_for(StorageLocation.CACHE)
        document_dir = self.directory_for(StorageLocation.DOCUMENT)
        return {
            "entries": len(self._memory),
            "memory_cost": self._memory.total_cost,
            "memory_cost_limit": self._memory.cost_limit,
            "pending_writes": len(self._pending),
            "cache_dir": str(cache_dir) if cache_dir is not None else None,
            "document_dir": str(document_dir) if document_dir is not None else None,
        }

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _guard(self) -> asyncio.Lock:
        """Return the lock for the running loop, replacing one tied to an earlier loop."""
        loop = asyncio.get_running_loop()
        if self._lock is None or self._loop is not loop:
            self._lock = asyncio.Lock()
            self._loop = loop
            self._pending = set()
        return self._lock

    def _schedule(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _save_file(self, data: bytes, directory: Path, key: str) -> None:
        async with self._guard():
            try:
                await asyncio.to_thread(_write_file, data, directory, key)
            except (OSError, ValueError) as exc:
                logger.warning("Could not persist %r to %s: %s", key, directory, exc)
            else:
                logger.debug("Persisted %r (%d bytes) to %s", key, len(data), directory)


def _is_directory(path: Path) -> bool:
    """True only for an existing directory; a regular file at *path* counts as missing."""
    return path.exists() and path.is_dir()


def _path_for(directory: Path, key: str) -> Path:
    """Map *key* to one filename directly inside *directory*.

    Every character outside the unreserved set is percent-encoded, so ``/``
    and ``:`` in URLs cannot introduce path components. The names ``.``,
    ``..`` and the empty string would still resolve to a directory, so their
    dots are encoded as well and the empty key becomes ``%``, a name no
    other key encodes to.
    """
    name = quote(key, safe="")
    if name in ("", ".", ".."):
        name = name.replace(".", "%2E") or "%"
    return directory / name


def _read_file(directory: Path, key: str) -> Outcome[bytes]:
    path = _path_for(directory, key)
    try:
        return Success(path.read_bytes())
    except (OSError, ValueError) as exc:
        return Failure(FileNotFoundError_(f"No cached file for {key!r} at {path}: {exc}"))


def _write_file(data: bytes, directory: Path, key: str) -> None:
    if not _is_directory(directory):
        directory.mkdir(parents=True, exist_ok=True)
    _path_for(directory, key).write_bytes(data)
