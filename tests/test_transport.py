"""Tests for the HTTP transport."""

import io
import logging

import httpx
import pytest
from pytest_httpx import HTTPXMock

from checkly_sdk import ConfigurationError, Credentials, Transport, TransportError


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(base_url="https://api.checkly.example.com/", api_key="cu_test_key")


class TestCall:
    def test_returns_status_and_body_for_errors(
        self,
        credentials: Credentials,
        httpx_mock: HTTPXMock,
    ) -> None:
        httpx_mock.add_response(status_code=500, text="boom")

        status, body = Transport(credentials).call("GET", "checks/1")

        assert status == 500
        assert body == "boom"

    def test_builds_versioned_url(self, credentials: Credentials, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(status_code=201, text="{}")

        Transport(credentials).call("POST", "checks?autoAssignAlerts=false", b'{"name": "x"}')

        request = httpx_mock.get_request()
        assert request is not None
        assert str(request.url) == (
            "https://api.checkly.example.com/v1/checks?autoAssignAlerts=false"
        )
        assert request.content == b'{"name": "x"}'

    def test_url_for_joins_versioned_prefix(self, credentials: Credentials) -> None:
        assert Transport(credentials).url_for("snippets/3") == (
            "https://api.checkly.example.com/v1/snippets/3"
        )

    def test_wraps_network_errors(self, credentials: Credentials, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        with pytest.raises(TransportError) as exc_info:
            Transport(credentials).call("DELETE", "checks/1")

        assert exc_info.value.url == "https://api.checkly.example.com/v1/checks/1"
        assert "connection refused" in str(exc_info.value)

    def test_wraps_unsupported_protocols(self) -> None:
        transport = Transport(Credentials(base_url="ftp://api.checkly.example.com", api_key="k"))

        with pytest.raises(TransportError):
            transport.call("GET", "checks/1")

    def test_logs_completed_requests(
        self,
        credentials: Credentials,
        httpx_mock: HTTPXMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        httpx_mock.add_response(status_code=204)

        with caplog.at_level(logging.DEBUG, logger="checkly_sdk.transport"):
            Transport(credentials).call("DELETE", "snippets/2")

        assert "DELETE https://api.checkly.example.com/v1/snippets/2 -> 204" in caplog.text


class TestDebugSink:
    def test_dumps_request_then_response(
        self,
        credentials: Credentials,
        httpx_mock: HTTPXMock,
    ) -> None:
        httpx_mock.add_response(status_code=201, json={"id": "chk_1"})
        sink = io.StringIO()

        Transport(credentials, debug=sink).call("POST", "checks", b'{"name": "Homepage"}')

        dump = sink.getvalue()
        request_at = dump.index("POST /v1/checks HTTP/1.1")
        response_at = dump.index("HTTP/1.1 201 Created")
        assert request_at < response_at
        assert "Authorization: Bearer cu_test_key" in dump
        assert '{"name": "Homepage"}' in dump[request_at:response_at]
        assert '"chk_1"' in dump[response_at:]

    def test_dumps_error_responses(self, credentials: Credentials, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(status_code=404, text="no such check")
        sink = io.StringIO()

        Transport(credentials, debug=sink).call("GET", "checks/missing")

        assert "404 Not Found" in sink.getvalue()
        assert "no such check" in sink.getvalue()

    def test_request_is_dumped_even_if_the_call_fails(
        self,
        credentials: Credentials,
        httpx_mock: HTTPXMock,
    ) -> None:
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))
        sink = io.StringIO()

        with pytest.raises(TransportError):
            Transport(credentials, debug=sink).call("GET", "checks/1")

        assert "GET /v1/checks/1 HTTP/1.1" in sink.getvalue()


class TestCredentials:
    def test_strips_trailing_slash(self, credentials: Credentials) -> None:
        assert credentials.base_url == "https://api.checkly.example.com"

    def test_requires_api_key(self) -> None:
        with pytest.raises(ConfigurationError):
            Credentials(base_url="https://api.checklyhq.com", api_key="")

    def test_repr_hides_api_key(self, credentials: Credentials) -> None:
        assert "cu_test_key" not in repr(credentials)

    def test_from_env_defaults_base_url(self) -> None:
        credentials = Credentials.from_env({"CHECKLY_API_KEY": "k"})

        assert credentials.base_url == "https://api.checklyhq.com"
        assert credentials.api_key == "k"

    def test_from_env_requires_key(self) -> None:
        with pytest.raises(ConfigurationError):
            Credentials.from_env({"CHECKLY_API_URL": "https://api.example.com"})
