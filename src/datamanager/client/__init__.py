"""HTTP client module for datamanager.

Provides :class:`APIClient`, an asynchronous client backed by
:class:`httpx.AsyncClient` that returns parsed JSON envelopes wrapped in an
:class:`~datamanager.outcome.Outcome`.

Example::

    from datamanager.client import APIClient
    from datamanager.models import DomainConfig, Endpoint, Get

    async with APIClient(DomainConfig(scheme="https", host="api.example.com")) as api:
        outcome = await api.request(Endpoint(path_string="/users"), Get())
"""

from datamanager.client.api import APIClient
from datamanager.client.response import parse_envelope

__all__ = ["APIClient", "parse_envelope"]
