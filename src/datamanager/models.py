"""Canonical Pydantic models shared across all datamanager modules.

Every other module imports its data shapes from here. The models fall into
three groups:

**Configuration models** -- supplied programmatically at construction time:
    :class:`CachePolicy`, :class:`DomainConfig`, and :class:`StorageConfig`.

**Request and response models** -- consumed and produced by
:class:`~datamanager.client.APIClient`:
    :class:`APIPath`, :class:`Endpoint`, :class:`Get`, :class:`Post`,
    :class:`JSONObject`, and :class:`JSONArray`.

**Storage models** -- consumed by :class:`~datamanager.cache.DataManager`
and :class:`~datamanager.images.ImageLoader`:
    :class:`StorageLocation`, :class:`CacheWrite`, :class:`DocumentWrite`,
    and :class:`ImageRecord`.

Two-variant sum types (``HTTPMethod``, ``ResponseEnvelope``,
``StorageRequest``) are plain ``Union`` aliases over frozen models, so
callers can ``match`` on the variant class.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Optional, Protocol, Union, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class CachePolicy(str, enum.Enum):
    """How a request interacts with HTTP caches along the way.

    Each policy translates to a ``Cache-Control`` request header via
    :attr:`cache_control`.
    """

    USE_PROTOCOL_CACHE_POLICY = "use_protocol_cache_policy"
    RELOAD_IGNORING_CACHE_DATA = "reload_ignoring_cache_data"
    RETURN_CACHE_DATA_ELSE_LOAD = "return_cache_data_else_load"
    RETURN_CACHE_DATA_DONT_LOAD = "return_cache_data_dont_load"

    @property
    def cache_control(self) -> Optional[str]:
        """The ``Cache-Control`` header value, or ``None`` to send none."""
        return _CACHE_CONTROL[self]


_CACHE_CONTROL: dict[CachePolicy, Optional[str]] = {
    CachePolicy.USE_PROTOCOL_CACHE_POLICY: None,
    CachePolicy.RELOAD_IGNORING_CACHE_DATA: "no-cache",
    CachePolicy.RETURN_CACHE_DATA_ELSE_LOAD: "max-stale",
    CachePolicy.RETURN_CACHE_DATA_DONT_LOAD: "only-if-cached",
}


class DomainConfig(BaseModel):
    """Where and how an :class:`~datamanager.client.APIClient` talks to a server.

    Example::

        DomainConfig(scheme="https", host="api.example.com", timeout=5)
    """

    model_config = ConfigDict(frozen=True)

    scheme: str = Field(description="URL scheme, usually http or https")
    host: str
    port: Optional[int] = None
    timeout: float = Field(default=10.0, description="Request timeout in seconds")
    cache_policy: CachePolicy = CachePolicy.RETURN_CACHE_DATA_ELSE_LOAD


class StorageConfig(BaseModel):
    """Settings for a :class:`~datamanager.cache.DataManager`.

    The directory overrides take precedence over platform resolution in
    :mod:`datamanager.config`. They are mostly useful for tests and for
    applications that keep their data in a custom location.
    """

    memory_cost_limit: int = Field(
        default=100_000_000, description="Total byte cost kept in memory"
    )
    cache_dir: Optional[Path] = None
    document_dir: Optional[Path] = None


# --- Requests ---


@runtime_checkable
class APIPath(Protocol):
    """Anything that can name an endpoint: a path plus optional query parameters."""

    @property
    def path_string(self) -> str: ...

    @property
    def parameters(self) -> Optional[dict[str, str]]: ...


class Endpoint(BaseModel):
    """Stock :class:`APIPath` implementation."""

    model_config = ConfigDict(frozen=True)

    path_string: str
    parameters: Optional[dict[str, str]] = None


class Get(BaseModel):
    """GET request. Query parameters come from the path."""

    model_config = ConfigDict(frozen=True)


class Post(BaseModel):
    """POST request with an optional raw body. Query parameters are not sent."""

    model_config = ConfigDict(frozen=True)

    body: Optional[bytes] = None


HTTPMethod = Union[Get, Post]


# --- Responses ---


class JSONObject(BaseModel):
    """A response body whose top-level JSON value is an object."""

    model_config = ConfigDict(frozen=True)

    value: dict[str, Any]


class JSONArray(BaseModel):
    """A response body whose top-level JSON value is an array."""

    model_config = ConfigDict(frozen=True)

    value: list[Any]


ResponseEnvelope = Union[JSONObject, JSONArray]


# --- Storage ---


class StorageLocation(str, enum.Enum):
    """Where persisted bytes live on disk."""

    CACHE = "cache"
    DOCUMENT = "document"

    @property
    def directory_path(self) -> Optional[Path]:
        """The platform directory for this location, or ``None`` if unresolvable."""
        from datamanager.config import resolve_directory

        return resolve_directory(self)


class CacheWrite(BaseModel):
    """Bytes destined for the cache location."""

    model_config = ConfigDict(frozen=True)

    data: bytes

    @property
    def location(self) -> StorageLocation:
        return StorageLocation.CACHE


class DocumentWrite(BaseModel):
    """Bytes destined for the document location."""

    model_config = ConfigDict(frozen=True)

    data: bytes

    @property
    def location(self) -> StorageLocation:
        return StorageLocation.DOCUMENT


StorageRequest = Union[CacheWrite, DocumentWrite]


class ImageRecord(BaseModel):
    """Raw image bytes and the URL they were ultimately served from.

    Serialised to JSON with the bytes base64-encoded, which is the blob
    format stored in the cache.
    """

    model_config = ConfigDict(
        frozen=True,
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    data: bytes
    url: str
