"""Authenticated HTTP transport for the Checkly API."""

import logging
from typing import Optional, TextIO, Union

import httpx

from .config import DEFAULT_TIMEOUT, Credentials
from .errors import TransportError

logger = logging.getLogger(__name__)

API_VERSION = "v1"

TimeoutTypes = Union[float, httpx.Timeout, None]


def _dump_headers(headers: httpx.Headers) -> list[str]:
    return [
        f"{name.decode('latin-1')}: {value.decode('latin-1')}" for name, value in headers.raw
    ]


def _write_dump(sink: TextIO, dump: str) -> None:
    sink.write(dump + "\n\n")


def dump_request(request: httpx.Request) -> str:
    """Render an outgoing request as raw HTTP/1.1 text."""
    target = request.url.raw_path.decode("ascii")
    lines = [f"{request.method} {target} HTTP/1.1", *_dump_headers(request.headers), ""]
    lines.append(request.content.decode("utf-8", errors="replace"))
    return "\r\n".join(lines)


def dump_response(response: httpx.Response) -> str:
    """Render a received response as raw HTTP text."""
    status_line = f"{response.http_version} {response.status_code} {response.reason_phrase}"
    lines = [status_line, *_dump_headers(response.headers), ""]
    lines.append(response.text)
    return "\r\n".join(lines)


class Transport:
    """Executes one authenticated JSON request and returns the raw outcome."""

    def __init__(
        self,
        credentials: Credentials,
        http_client: Optional[httpx.Client] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[dict[str, str]] = None,
        debug: Optional[TextIO] = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            credentials: Base URL and API key
            http_client: Shared httpx client; one is created (and owned) if omitted
            timeout: Default request timeout in seconds, unused with an injected client
            headers: Additional headers to include in all requests
            debug: Text stream receiving full request and response dumps
        """
        self.credentials = credentials
        self.debug = debug
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.Client(timeout=timeout)
        self._headers = httpx.Headers(headers or {})
        self._headers["Authorization"] = f"Bearer {credentials.api_key}"
        self._headers["Content-Type"] = "application/json"

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def url_for(self, path: str) -> str:
        """Build the absolute URL for a path below the versioned API prefix."""
        return f"{self.credentials.base_url}/{API_VERSION}/{path}"

    def call(
        self,
        method: str,
        path: str,
        body: Optional[bytes] = None,
        *,
        timeout: TimeoutTypes = None,
    ) -> tuple[int, str]:
        """
        Send a request and return the status code and response text.

        Non-2xx statuses are returned, not raised; callers decide what success is.

        Args:
            method: HTTP method
            path: Path below the versioned API prefix, may carry a query string
            body: Already-encoded JSON body
            timeout: Deadline for this call, overriding the client default

        Raises:
            TransportError: If the request cannot be built, fails, or times out
        """
        url = self.url_for(path)
        try:
            request = self._client.build_request(
                method,
                url,
                content=body,
                headers=self._headers,
                timeout=httpx.USE_CLIENT_DEFAULT if timeout is None else timeout,
            )
        except (httpx.InvalidURL, httpx.HTTPError, ValueError) as err:
            raise TransportError(method, url, err) from err

        if self.debug is not None:
            _write_dump(self.debug, dump_request(request))

        try:
            response = self._client.send(request)
        except httpx.HTTPError as err:
            raise TransportError(method, url, err) from err

        if self.debug is not None:
            _write_dump(self.debug, dump_response(response))

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response.status_code, response.text

