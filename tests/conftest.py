"""
Pytest configuration and shared fixtures for vcxapi-client tests.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from vcxapi_client import VcxApiClient

BASE_URL = "http://vcx.test"


class FakeBackend:
    """
    In-memory stand-in for the VCX API server.

    Responses are registered per (method, path); every request that reaches
    the transport is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = (status, body)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get((request.method, request.url.path), (404, {"error": "no route"}))
        if body is None:
            return httpx.Response(status)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


class RecordingSink:
    """Diagnostic sink that keeps every record as (level, formatted message)."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str]] = []

    def _record(self, level: str, msg: str, *args: Any) -> None:
        self.records.append((level, msg % args if args else msg))

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("debug", msg, *args)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("warning", msg, *args)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("error", msg, *args)

    def levels(self) -> List[str]:
        return [level for level, _ in self.records]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def http_client(backend) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(backend.handle))


@pytest.fixture
def make_client(http_client):
    """Factory building a client wired to the fake backend."""

    def _make(
        auth: Optional[Tuple[str, str]] = None,
        logger: Any = None,
    ) -> VcxApiClient:
        return VcxApiClient(BASE_URL, auth=auth, logger=logger, http_client=http_client)

    return _make


@pytest.fixture
def client(make_client) -> VcxApiClient:
    return make_client()
