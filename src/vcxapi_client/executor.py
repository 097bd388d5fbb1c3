# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Request executor: the single HTTP primitive behind every client call.

Each call to :meth:`RequestExecutor.execute` sends exactly one request:

1. Attaches the configured Basic auth pair, if any.
2. Writes a debug record describing the request (verb, URL and, for POST and
   PUT, the JSON payload).
3. Returns the decoded response body untouched on a 2xx status, after a
   debug record of the response.
4. Otherwise raises :class:`~types.VcxApiError`. The failure is logged at
   WARNING when the status is 404 and at ERROR for everything else, then
   propagated. Nothing is retried.

:func:`none_if_not_found` is the companion adapter for single-entity
lookups, where a 404 means "no such resource" rather than a failure.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

import httpx

from .logging_config import DiagnosticSink, resolve_sink
from .types import HttpVerb, VcxApiError

T = TypeVar("T")

# Verbs that carry a request body.
_BODY_VERBS = frozenset([HttpVerb.POST, HttpVerb.PUT])


class RequestExecutor:
    """Sends single, logged HTTP requests through an :class:`httpx.AsyncClient`.

    Parameters
    ----------
    http_client:
        Transport used for every request.
    auth:
        Optional ``(username, password)`` pair sent as HTTP Basic auth on
        every request.
    logger:
        Optional :class:`~logging_config.DiagnosticSink`. Omitted means no
        records are written.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        auth: tuple[str, str] | None = None,
        logger: DiagnosticSink | None = None,
    ) -> None:
        self._http = http_client
        self._auth = httpx.BasicAuth(*auth) if auth is not None else None
        self._log = resolve_sink(logger)

    async def fetch(self, url: str) -> Any:
        return await self.execute(HttpVerb.GET, url)

    async def create(self, url: str, payload: Mapping[str, Any] | None = None) -> Any:
        return await self.execute(HttpVerb.POST, url, payload)

    async def replace(self, url: str, payload: Mapping[str, Any] | None = None) -> Any:
        return await self.execute(HttpVerb.PUT, url, payload)

    async def remove(self, url: str) -> Any:
        return await self.execute(HttpVerb.DELETE, url)

    async def execute(
        self,
        verb: HttpVerb,
        url: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded response body.

        Raises
        ------
        VcxApiError
            When no usable response arrives (``status_code == 0``: connection
            failures, timeouts, undecodable content encodings) or on a
            non-2xx response.
        """
        method = verb.value
        content: bytes | None = None
        headers = {"Accept": "application/json"}
        if verb in _BODY_VERBS:
            self._log.debug("[request] %s %s\nrequest body: %s", method, url, _LazyJson(payload))
            if payload is not None:
                content = json.dumps(payload).encode()
                headers["Content-Type"] = "application/json"
        else:
            self._log.debug("[request] %s %s", method, url)

        try:
            response = await self._http.request(
                method,
                url,
                content=content,
                headers=headers,
                auth=self._auth if self._auth is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.RequestError as exc:
            self._log.error("[response] %s %s\nfailed without a usable response: %s", method, url, exc)
            raise VcxApiError(
                status_code=0,
                method=method,
                endpoint=url,
                message=f"request error: {exc}",
            ) from exc

        body = _decode_body(response)
        if not response.is_success:
            error = VcxApiError(
                status_code=response.status_code,
                method=method,
                endpoint=url,
                body=body,
            )
            report = self._log.warning if error.is_not_found else self._log.error
            report(
                "[response] %s %s\nfailed with status code: %s\nresponse body: %s",
                method,
                url,
                response.status_code,
                _LazyJson(body),
            )
            raise error

        self._log.debug(
            "[response] %s %s\nstatus code: %s\nresponse body: %s",
            method,
            url,
            response.status_code,
            _LazyJson(body),
        )
        return body


async def none_if_not_found(operation: Callable[[], Awaitable[T]]) -> T | None:
    """Await *operation*, mapping a 404 :class:`~types.VcxApiError` to ``None``.

    Every other error propagates unchanged. Meant for single-entity lookups
    only; list lookups and mutations must keep 404 visible.
    """
    try:
        return await operation()
    except VcxApiError as exc:
        if exc.is_not_found:
            return None
        raise


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class _LazyJson:
    """Indented JSON rendering of a value, built only when a record is emitted."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __str__(self) -> str:
        return json.dumps(self.value, indent=2, default=str)
