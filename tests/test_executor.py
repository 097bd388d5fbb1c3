"""
Tests for the request executor and the not-found adapter.
"""

import base64

import httpx
import pytest

from vcxapi_client.executor import RequestExecutor, none_if_not_found
from vcxapi_client.types import HttpVerb, VcxApiError

URL = "http://vcx.test/api/things"


@pytest.fixture
def executor(http_client, sink):
    return RequestExecutor(http_client, logger=sink)


class TestRequestExecutor:
    @pytest.mark.asyncio
    async def test_fetch_returns_body_unchanged(self, executor, backend):
        body = {"id": "t1", "nested": {"a": [1, 2]}, "extra": None}
        backend.add("GET", "/api/things", body=body)

        result = await executor.fetch(URL)

        assert result == body
        assert backend.last_request.method == "GET"
        assert backend.last_request.content == b""

    @pytest.mark.asyncio
    async def test_create_sends_json_payload(self, executor, backend):
        backend.add("POST", "/api/things", status=201, body={"ok": True})

        result = await executor.create(URL, {"name": "thing"})

        assert result == {"ok": True}
        assert backend.last_request.headers["content-type"] == "application/json"
        assert backend.last_json() == {"name": "thing"}

    @pytest.mark.asyncio
    async def test_create_without_payload_sends_empty_body(self, executor, backend):
        backend.add("POST", "/api/things", body={"ok": True})
        await executor.create(URL)
        assert backend.last_request.content == b""

    @pytest.mark.asyncio
    async def test_replace_uses_put(self, executor, backend):
        backend.add("PUT", "/api/things", body={"updated": 2})
        assert await executor.replace(URL, {"uids": ["a", "b"]}) == {"updated": 2}
        assert backend.last_request.method == "PUT"

    @pytest.mark.asyncio
    async def test_remove_with_empty_response(self, executor, backend):
        backend.add("DELETE", "/api/things", status=204)
        assert await executor.remove(URL) is None
        assert backend.last_request.method == "DELETE"

    @pytest.mark.asyncio
    async def test_non_json_body_returned_as_text(self, executor, backend):
        backend.add("GET", "/api/things", body="plain text")
        assert await executor.fetch(URL) == "plain text"

    @pytest.mark.asyncio
    async def test_failure_carries_status_and_body(self, executor, backend):
        backend.add("POST", "/api/things", status=409, body={"error": "exists"})

        with pytest.raises(VcxApiError) as exc_info:
            await executor.create(URL, {"name": "thing"})

        assert exc_info.value.status_code == 409
        assert exc_info.value.body == {"error": "exists"}
        assert exc_info.value.method == "POST"
        assert exc_info.value.endpoint == URL
        assert len(backend.requests) == 1

    @pytest.mark.asyncio
    async def test_basic_auth_attached(self, http_client, backend):
        backend.add("GET", "/api/things", body=[])
        executor = RequestExecutor(http_client, auth=("admin", "secret"))

        await executor.fetch(URL)

        expected = base64.b64encode(b"admin:secret").decode()
        assert backend.last_request.headers["authorization"] == f"Basic {expected}"

    @pytest.mark.asyncio
    async def test_no_auth_header_without_credentials(self, executor, backend):
        backend.add("GET", "/api/things", body=[])
        await executor.fetch(URL)
        assert "authorization" not in backend.last_request.headers

    @pytest.mark.asyncio
    async def test_execute_dispatches_verb(self, executor, backend):
        backend.add("PUT", "/api/things", body={"v": 1})
        assert await executor.execute(HttpVerb.PUT, URL, {"v": 1}) == {"v": 1}


class TestTransportFailure:
    @pytest.mark.asyncio
    async def test_transport_error_wrapped_once(self, sink):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        executor = RequestExecutor(http, logger=sink)

        with pytest.raises(VcxApiError) as exc_info:
            await executor.fetch(URL)

        assert exc_info.value.status_code == 0
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert len(calls) == 1
        assert sink.levels() == ["debug", "error"]

    @pytest.mark.asyncio
    async def test_undecodable_content_encoding_wrapped(self, sink):
        def handler(request):
            return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all")

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        executor = RequestExecutor(http, logger=sink)

        with pytest.raises(VcxApiError) as exc_info:
            await executor.fetch(URL)

        assert exc_info.value.status_code == 0
        assert exc_info.value.method == "GET"
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)
        assert sink.levels() == ["debug", "error"]


class TestLogging:
    @pytest.mark.asyncio
    async def test_success_logs_request_and_response(self, executor, backend, sink):
        backend.add("POST", "/api/things", body={"id": "t1"})

        await executor.create(URL, {"name": "thing"})

        assert sink.levels() == ["debug", "debug"]
        request_record, response_record = (msg for _, msg in sink.records)
        assert "POST" in request_record and URL in request_record
        assert '"name": "thing"' in request_record
        assert "200" in response_record
        assert '"id": "t1"' in response_record

    @pytest.mark.asyncio
    async def test_get_request_record_has_no_body(self, executor, backend, sink):
        backend.add("GET", "/api/things", body=[])
        await executor.fetch(URL)
        assert "request body" not in sink.records[0][1]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("verb", [HttpVerb.GET, HttpVerb.POST, HttpVerb.PUT, HttpVerb.DELETE])
    async def test_not_found_logs_warning(self, executor, backend, sink, verb):
        backend.add(verb.value, "/api/things", status=404, body={"error": "missing"})

        with pytest.raises(VcxApiError):
            await executor.execute(verb, URL)

        assert sink.levels() == ["debug", "warning"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 409, 500, 503])
    async def test_other_failures_log_error(self, executor, backend, sink, status):
        backend.add("GET", "/api/things", status=status, body={"error": "nope"})

        with pytest.raises(VcxApiError) as exc_info:
            await executor.fetch(URL)

        assert exc_info.value.status_code == status
        assert sink.levels() == ["debug", "error"]
        assert str(status) in sink.records[-1][1]

    @pytest.mark.asyncio
    async def test_works_without_sink(self, http_client, backend):
        backend.add("GET", "/api/things", status=404)
        executor = RequestExecutor(http_client)
        with pytest.raises(VcxApiError):
            await executor.fetch(URL)

    @pytest.mark.asyncio
    async def test_stdlib_logger_as_sink(self, http_client, backend, caplog):
        import logging

        backend.add("GET", "/api/things", status=404)
        executor = RequestExecutor(http_client, logger=logging.getLogger("vcx.test"))

        with caplog.at_level(logging.DEBUG, logger="vcx.test"):
            with pytest.raises(VcxApiError):
                await executor.fetch(URL)

        assert [r.levelno for r in caplog.records] == [logging.DEBUG, logging.WARNING]

    @pytest.mark.asyncio
    async def test_bodies_rendered_only_when_record_is_formatted(self, http_client, backend):
        calls = []

        class RawArgsSink:
            def debug(self, msg, *args, **kwargs):
                calls.append(args)

            warning = error = debug

        backend.add("POST", "/api/things", body={"id": "t1"})
        executor = RequestExecutor(http_client, logger=RawArgsSink())

        await executor.create(URL, {"name": "thing"})

        request_body = calls[0][-1]
        response_body = calls[1][-1]
        assert not isinstance(request_body, str)
        assert not isinstance(response_body, str)
        assert '"name": "thing"' in str(request_body)
        assert '"id": "t1"' in str(response_body)


class TestNoneIfNotFound:
    @pytest.mark.asyncio
    async def test_returns_value(self):
        async def op():
            return {"id": 1}

        assert await none_if_not_found(op) == {"id": 1}

    @pytest.mark.asyncio
    async def test_not_found_becomes_none(self):
        async def op():
            raise VcxApiError(404, "GET", URL)

        assert await none_if_not_found(op) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [0, 400, 403, 500])
    async def test_other_faults_propagate(self, status):
        async def op():
            raise VcxApiError(status, "GET", URL)

        with pytest.raises(VcxApiError) as exc_info:
            await none_if_not_found(op)
        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_unrelated_exceptions_propagate(self):
        async def op():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await none_if_not_found(op)
