"""Tests for datamanager.config -- platform directory resolution and overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from datamanager.config import get_cache_dir, get_document_dir, resolve_directory
from datamanager.models import StorageConfig, StorageLocation


def _no_home(cls: type) -> Path:
    raise RuntimeError("Could not determine home directory.")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPathsLinux:
    """XDG paths on Linux (the default XDG platform)."""

    def test_cache_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("datamanager.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_cache_dir() == tmp_path / ".cache" / "datamanager"

    def test_cache_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_cache"
        monkeypatch.setattr("datamanager.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CACHE_HOME", str(custom))

        assert get_cache_dir() == custom / "datamanager"

    def test_document_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("datamanager.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_document_dir() == tmp_path / ".local" / "share" / "datamanager" / "documents"

    def test_document_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("datamanager.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

        assert get_document_dir() == tmp_path / "data" / "datamanager" / "documents"

    def test_resolution_does_not_create_directories(self, isolated_dirs: Path) -> None:
        result = get_cache_dir()
        assert result is not None
        assert not result.exists()


class TestFallbackPaths:
    """macOS / Windows layout under ~/.datamanager."""

    def test_cache_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("datamanager.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_cache_dir() == tmp_path / ".datamanager" / "cache"

    def test_document_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("datamanager.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_document_dir() == tmp_path / ".datamanager" / "documents"


class TestUnresolvableHome:
    def test_xdg_without_home_or_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("datamanager.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(_no_home))

        assert get_cache_dir() is None
        assert get_document_dir() is None

    def test_env_var_still_resolves_without_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("datamanager.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
        monkeypatch.setattr(Path, "home", classmethod(_no_home))

        assert get_cache_dir() == tmp_path / "datamanager"

    def test_fallback_without_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("datamanager.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(_no_home))

        assert get_cache_dir() is None
        assert get_document_dir() is None


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveDirectory:
    def test_platform_resolution_without_overrides(self, isolated_dirs: Path) -> None:
        assert resolve_directory(StorageLocation.CACHE) == isolated_dirs / "cache" / "datamanager"
        assert resolve_directory(StorageLocation.DOCUMENT) == (
            isolated_dirs / "data" / "datamanager" / "documents"
        )

    def test_overrides_win(self, isolated_dirs: Path) -> None:
        storage = StorageConfig(cache_dir=isolated_dirs / "c", document_dir=isolated_dirs / "d")
        assert resolve_directory(StorageLocation.CACHE, storage) == isolated_dirs / "c"
        assert resolve_directory(StorageLocation.DOCUMENT, storage) == isolated_dirs / "d"

    def test_override_only_applies_to_its_location(self, isolated_dirs: Path) -> None:
        storage = StorageConfig(cache_dir=isolated_dirs / "c")
        assert resolve_directory(StorageLocation.DOCUMENT, storage) == (
            isolated_dirs / "data" / "datamanager" / "documents"
        )

    def test_location_directory_path_property(self, isolated_dirs: Path) -> None:
        assert StorageLocation.CACHE.directory_path == isolated_dirs / "cache" / "datamanager"
