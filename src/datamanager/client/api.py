"""Asynchronous JSON API client.

This module provides :class:`APIClient`, which turns a
:class:`~datamanager.models.DomainConfig` plus an
:class:`~datamanager.models.APIPath` into one HTTP request and parses the
body into a :data:`~datamanager.models.ResponseEnvelope`.

The client is deliberately thin: one request per call, no retry, no
deduplication. Every failure, including transport errors raised by
:mod:`httpx`, comes back as a :class:`~datamanager.outcome.Failure`.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from datamanager.client.response import parse_envelope
from datamanager.exceptions import InvalidURLError
from datamanager.models import APIPath, DomainConfig, Get, HTTPMethod, Post, ResponseEnvelope
from datamanager.outcome import Failure, Outcome, Success

logger = logging.getLogger(__name__)


class APIClient:
    """Asynchronous client for a single API domain.

    Can be used as an async context manager, in which case it owns an
    :class:`httpx.AsyncClient` for its lifetime. It can also be handed an
    existing ``httpx.AsyncClient`` to share a connection pool; the caller
    then stays responsible for closing it. Outside either arrangement each
    :meth:`request` opens and closes a short-lived client.

    Args:
        config: Scheme, host, port, timeout and cache policy of the domain.
        client: Optional externally-owned HTTP client.

    Example::

        config = DomainConfig(scheme="https", host="api.example.com")
        async with APIClient(config) as api:
            outcome = await api.request(Endpoint(path_string="/users"), Get())
    """

    def __init__(
        self,
        config: DomainConfig,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config
        self._client = client
        self._owns_client = False

    @property
    def config(self) -> DomainConfig:
        return self._config

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> APIClient:
        if self._client is None:
            self._client = self._new_client()
            self._owns_client = True
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def request(self, path: APIPath, method: HTTPMethod) -> Outcome[ResponseEnvelope]:
        """Issue one request and parse the JSON body.

        Args:
            path: Endpoint path and, for GET, its query parameters.
            method: :class:`~datamanager.models.Get` or
                :class:`~datamanager.models.Post` (with optional raw body).

        Returns:
            ``Success`` with a :class:`~datamanager.models.JSONObject` or
            :class:`~datamanager.models.JSONArray`; otherwise ``Failure``
            with :class:`~datamanager.exceptions.InvalidURLError`, an
            :mod:`httpx` transport error, or one of the body errors from
            :func:`~datamanager.client.response.parse_envelope`.
        """
        url_outcome = self.build_url(path, method)
        if isinstance(url_outcome, Failure):
            return url_outcome  # type: ignore[return-value]
        url = url_outcome.get()

        kwargs: dict[str, Any] = {
            "method": "POST" if isinstance(method, Post) else "GET",
            "url": url,
            "headers": self._headers(),
            "timeout": self._config.timeout,
        }
        if isinstance(method, Post) and method.body is not None:
            kwargs["content"] = method.body

        logger.debug("%s %s", kwargs["method"], url)
        try:
            if self._client is not None:
                response = await self._client.request(**kwargs)
            else:
                async with self._new_client() as client:
                    response = await client.request(**kwargs)
        except httpx.HTTPError as exc:
            logger.debug("Request to %s failed: %s", url, exc)
            return Failure(exc)

        logger.debug("HTTP %s from %s (%d bytes)", response.status_code, url, len(response.content))
        return parse_envelope(response.content)

    def build_url(self, path: APIPath, method: HTTPMethod) -> Outcome[httpx.URL]:
        """Compose the request URL from the domain config and *path*.

        Query parameters are only attached for GET.

        Returns:
            ``Success`` with the URL, or ``Failure(InvalidURLError)`` when the
            parts do not form an absolute URL (bad host or path characters,
            a path not starting with ``/``, an out-of-range port, no host).
        """
        parts: dict[str, Any] = {
            "scheme": self._config.scheme,
            "host": self._config.host,
            "path": path.path_string,
        }
        if self._config.port is not None:
            parts["port"] = self._config.port
        if isinstance(method, Get) and path.parameters:
            parts["params"] = path.parameters

        try:
            url = httpx.URL(**parts)
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            return Failure(InvalidURLError(f"Cannot build URL for {path.path_string!r}: {exc}"))

        if not url.scheme or not url.host:
            return Failure(InvalidURLError(f"Cannot build URL for {path.path_string!r}: missing scheme or host"))
        return Success(url)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _headers(self) -> dict[str, str]:
        cache_control = self._config.cache_policy.cache_control
        if cache_control is None:
            return {}
        return {"Cache-Control": cache_control}

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._config.timeout, follow_redirects=True)
