"""Shared test fixtures for datamanager.

Provides isolated storage directories, fresh cache managers, and
``httpx.MockTransport``-backed clients. These fixtures are automatically
discovered by pytest and available to all test modules without explicit
imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from datamanager.cache import DataManager
from datamanager.log import reset_logging
from datamanager.models import StorageConfig


Handler = Callable[[httpx.Request], httpx.Response]


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_globals() -> None:
    """Forget the shared DataManager and any installed log handler.

    The shared manager owns an asyncio lock and background tasks that must
    not leak into the next test's event loop.
    """
    yield
    DataManager.reset_default()
    reset_logging()


# ---------------------------------------------------------------------------
# Storage isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG cache/data directories at subdirectories of tmp_path.

    Forces the XDG code path so results are the same on every platform.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("datamanager.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def storage(tmp_path: Path) -> StorageConfig:
    """Storage settings with both directories under tmp_path (not yet created)."""
    return StorageConfig(
        cache_dir=tmp_path / "caches",
        document_dir=tmp_path / "documents",
    )


@pytest.fixture
def manager(storage: StorageConfig) -> DataManager:
    """A fresh DataManager writing under tmp_path."""
    return DataManager(storage)


@pytest.fixture
def no_dir_manager(monkeypatch: pytest.MonkeyPatch) -> DataManager:
    """A DataManager whose locations never resolve to a directory."""
    monkeypatch.setattr("datamanager.cache.manager.resolve_directory", lambda location, storage: None)
    return DataManager(StorageConfig())


# ---------------------------------------------------------------------------
# HTTP doubles
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_client() -> Callable[[Handler], httpx.AsyncClient]:
    """Factory for an ``httpx.AsyncClient`` routed through a handler function."""

    def _make(handler: Handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
