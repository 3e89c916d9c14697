"""Platform directory resolution for the disk tier.

* **Cache** -- XDG Base Directory compliant on Linux/BSD
  (``$XDG_CACHE_HOME/datamanager/``, default ``~/.cache/datamanager/``),
  ``~/.datamanager/cache/`` on macOS and Windows. Contents can be deleted
  at any time.
* **Documents** -- ``$XDG_DATA_HOME/datamanager/documents/`` (default
  ``~/.local/share/datamanager/documents/``) on Linux/BSD,
  ``~/.datamanager/documents/`` elsewhere.

Resolution never creates directories; the disk write in
:class:`~datamanager.cache.DataManager` does that when it first needs one.
A location resolves to ``None`` when the home directory cannot be
determined.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Optional

from datamanager.models import StorageConfig, StorageLocation

_APP_NAME = "datamanager"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _home() -> Optional[Path]:
    try:
        return Path.home()
    except RuntimeError:
        return None


def _fallback_base_dir() -> Optional[Path]:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    home = _home()
    if home is None:
        return None
    return home / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Optional[Path]:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = _home()
    if base is None:
        return None
    for seg in default_segments:
        base = base / seg
    return base


def get_cache_dir() -> Optional[Path]:
    """Return the platform cache directory, or ``None`` if it cannot be resolved."""
    if _is_xdg_platform():
        base = _xdg_base("XDG_CACHE_HOME", (".cache",))
        return None if base is None else base / _APP_NAME
    base = _fallback_base_dir()
    return None if base is None else base / "cache"


def get_document_dir() -> Optional[Path]:
    """Return the platform document directory, or ``None`` if it cannot be resolved.

    Unlike the cache directory, files here are meant to survive cache
    clean-ups.
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        return None if base is None else base / _APP_NAME / "documents"
    base = _fallback_base_dir()
    return None if base is None else base / "documents"


def resolve_directory(
    location: StorageLocation,
    storage: Optional[StorageConfig] = None,
) -> Optional[Path]:
    """Resolve the directory backing *location*.

    Precedence (high to low):
        1. The matching override on *storage* (``cache_dir`` / ``document_dir``)
        2. Platform resolution (:func:`get_cache_dir` / :func:`get_document_dir`)

    Args:
        location: Which storage location to resolve.
        storage: Optional settings carrying directory overrides.

    Returns:
        The directory path, or ``None`` when no directory can be resolved.
    """
    if location is StorageLocation.CACHE:
        if storage is not None and storage.cache_dir is not None:
            return storage.cache_dir
        return get_cache_dir()
    if storage is not None and storage.document_dir is not None:
        return storage.document_dir
    return get_document_dir()
