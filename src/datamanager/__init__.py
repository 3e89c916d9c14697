"""datamanager -- a thin client-side data-access layer.

Three pieces cooperate:

* an asynchronous JSON API client that returns tagged object/array
  envelopes,
* a two-tier (memory + disk) byte cache keyed by strings, and
* an image loader that fetches through that cache.

Every I/O-facing call returns an :class:`~datamanager.outcome.Outcome`
instead of raising.

Typical usage::

    from datamanager import APIClient, DomainConfig, Endpoint, Get, ImageLoader

    async with APIClient(DomainConfig(scheme="https", host="api.example.com")) as api:
        users = await api.request(Endpoint(path_string="/users"), Get())

    image = await ImageLoader().load_image("https://cdn.example.com/logo.png")

Modules:
    outcome: Success/failure type and its helpers.
    client: Asynchronous JSON API client built on httpx.
    cache: Memory + disk byte cache.
    images: Fetch-or-cache image loader.
    models: Pydantic models shared across the package.
    config: Platform directory resolution.
    exceptions: Error hierarchy carried inside failures.
    log: Optional Rich logging setup.
"""

from datamanager.cache import DataManager
from datamanager.client import APIClient
from datamanager.images import ImageLoader
from datamanager.models import (
    CachePolicy,
    CacheWrite,
    DocumentWrite,
    DomainConfig,
    Endpoint,
    Get,
    ImageRecord,
    JSONArray,
    JSONObject,
    Post,
    StorageConfig,
    StorageLocation,
)
from datamanager.outcome import Failure, Outcome, Success

__version__ = "0.1.0"

__all__ = [
    "APIClient",
    "CachePolicy",
    "CacheWrite",
    "DataManager",
    "DocumentWrite",
    "DomainConfig",
    "Endpoint",
    "Failure",
    "Get",
    "ImageLoader",
    "ImageRecord",
    "JSONArray",
    "JSONObject",
    "Outcome",
    "Post",
    "StorageConfig",
    "StorageLocation",
    "Success",
]
