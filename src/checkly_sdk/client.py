"""Checkly API client."""

import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, TextIO, TypeVar
from urllib.parse import quote

import httpx

from .alert_channels import AlertChannel, decode_alert_channel, encode_alert_channel
from .config import DEFAULT_TIMEOUT, Credentials
from .errors import DecodeError, UnexpectedStatusError
from .query import CheckResultsFilter, build_check_results_query, with_auto_assign_alerts_flag
from .transport import TimeoutTypes, Transport
from .types import Check, CheckResult, EnvironmentVariable, Group, Snippet

T = TypeVar("T")


@dataclass(frozen=True)
class Endpoint:
    """One API operation: method, path template and the statuses meaning success."""

    method: str
    path: str
    expected_status: tuple[int, ...]
    auto_assign_alerts: bool = False


ENDPOINTS: Mapping[str, Endpoint] = MappingProxyType(
    {
        "create_check": Endpoint("POST", "checks", (201,), auto_assign_alerts=True),
        "get_check": Endpoint("GET", "checks/{id}", (200,)),
        "update_check": Endpoint("PUT", "checks/{id}", (200,), auto_assign_alerts=True),
        "delete_check": Endpoint("DELETE", "checks/{id}", (204,)),
        "create_group": Endpoint("POST", "check-groups", (201,), auto_assign_alerts=True),
        "get_group": Endpoint("GET", "check-groups/{id}", (200,)),
        "update_group": Endpoint("PUT", "check-groups/{id}", (200,), auto_assign_alerts=True),
        "delete_group": Endpoint("DELETE", "check-groups/{id}", (204,)),
        "create_snippet": Endpoint("POST", "snippets", (201,)),
        "get_snippet": Endpoint("GET", "snippets/{id}", (200,)),
        "update_snippet": Endpoint("PUT", "snippets/{id}", (200,)),
        "delete_snippet": Endpoint("DELETE", "snippets/{id}", (204,)),
        "create_environment_variable": Endpoint("POST", "variables", (201,)),
        "get_environment_variable": Endpoint("GET", "variables/{id}", (200,)),
        "update_environment_variable": Endpoint("PUT", "variables/{id}", (200,)),
        "delete_environment_variable": Endpoint("DELETE", "variables/{id}", (204,)),
        # The API answers alert channel creation with 200 as well as 201.
        "create_alert_channel": Endpoint("POST", "alert-channels", (200, 201)),
        "get_alert_channel": Endpoint("GET", "alert-channels/{id}", (200,)),
        "update_alert_channel": Endpoint("PUT", "alert-channels/{id}", (200,)),
        "delete_alert_channel": Endpoint("DELETE", "alert-channels/{id}", (204,)),
        "get_check_result": Endpoint("GET", "check-results/{check_id}/{id}", (200,)),
        "get_check_results": Endpoint("GET", "check-results/{check_id}", (200,)),
    }
)


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as err:
        raise DecodeError(text, err) from err


def _object_decoder(from_dict: Callable[[dict[str, Any]], T]) -> Callable[[str], T]:
    def decode(text: str) -> T:
        data = _parse_json(text)
        try:
            return from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as err:
            raise DecodeError(text, err) from err

    return decode


def _list_decoder(from_dict: Callable[[dict[str, Any]], T]) -> Callable[[str], list[T]]:
    def decode(text: str) -> list[T]:
        data = _parse_json(text)
        if not isinstance(data, list):
            raise DecodeError(text, "expected a JSON array")
        try:
            return [from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError, AttributeError) as err:
            raise DecodeError(text, err) from err

    return decode


_decode_check = _object_decoder(Check.from_dict)
_decode_group = _object_decoder(Group.from_dict)
_decode_snippet = _object_decoder(Snippet.from_dict)
_decode_environment_variable = _object_decoder(EnvironmentVariable.from_dict)
_decode_check_result = _object_decoder(CheckResult.from_dict)
_decode_check_results = _list_decoder(CheckResult.from_dict)


class ChecklyClient:
    """
    Client for the Checkly monitoring API.

    A call in flight cannot be aborted from another thread; bound it with the
    per-call `timeout` instead.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        http_client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[dict[str, str]] = None,
        debug: Optional[TextIO] = None,
    ) -> None:
        """
        Initialize the Checkly client.

        Args:
            base_url: Base URL of the Checkly API (e.g., "https://api.checklyhq.com")
            api_key: API key sent as a bearer token
            http_client: httpx client to send requests with; the caller keeps
                ownership. A private client is created when omitted.
            timeout: Request timeout in seconds (default: 30), unused with http_client
            headers: Additional headers to include in all requests
            debug: Text stream receiving raw request and response dumps
        """
        self.credentials = Credentials(base_url=base_url, api_key=api_key)
        self._transport = Transport(
            self.credentials,
            http_client,
            timeout=timeout,
            headers=headers,
            debug=debug,
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> "ChecklyClient":
        """Create a client from CHECKLY_API_URL and CHECKLY_API_KEY."""
        credentials = Credentials.from_env()
        return cls(credentials.base_url, credentials.api_key, **kwargs)

    def close(self) -> None:
        """Close the HTTP client if the client created it."""
        self._transport.close()

    def __enter__(self) -> "ChecklyClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _execute(
        self,
        operation: str,
        decode: Optional[Callable[[str], T]] = None,
        *,
        body: Optional[dict[str, Any]] = None,
        query: str = "",
        timeout: TimeoutTypes = None,
        **path_params: Any,
    ) -> Optional[T]:
        """Run one operation from the endpoint table."""
        endpoint = ENDPOINTS[operation]
        path = endpoint.path.format(
            **{name: quote(str(value), safe="") for name, value in path_params.items()}
        )
        if query:
            path = f"{path}?{query}"
        if endpoint.auto_assign_alerts:
            path = with_auto_assign_alerts_flag(path)

        payload = None if body is None else json.dumps(body)
        status, text = self._transport.call(
            endpoint.method,
            path,
            None if payload is None else payload.encode("utf-8"),
            timeout=timeout,
        )
        if status not in endpoint.expected_status:
            raise UnexpectedStatusError(status, text, payload)
        if decode is None:
            return None
        return decode(text)

    # ==========================================
    # Check operations
    # ==========================================

    def create_check(self, check: Check, *, timeout: TimeoutTypes = None) -> Check:
        """
        Create a new check.

        Args:
            check: The check to create
            timeout: Deadline for this request, overriding the client default

        Returns:
            The created check
        """
        return self._execute("create_check", _decode_check, body=check.to_dict(), timeout=timeout)

    def get_check(self, check_id: str, *, timeout: TimeoutTypes = None) -> Check:
        """
        Get a check by ID.

        Args:
            check_id: The check UUID

        Returns:
            The check
        """
        return self._execute("get_check", _decode_check, id=check_id, timeout=timeout)

    def update_check(
        self, check_id: str, check: Check, *, timeout: TimeoutTypes = None
    ) -> Check:
        """
        Replace a check's settings.

        Args:
            check_id: The check UUID
            check: The new check settings

        Returns:
            The updated check
        """
        return self._execute(
            "update_check", _decode_check, body=check.to_dict(), id=check_id, timeout=timeout
        )

    def delete_check(self, check_id: str, *, timeout: TimeoutTypes = None) -> None:
        """
        Delete a check.

        Args:
            check_id: The check UUID
        """
        self._execute("delete_check", id=check_id, timeout=timeout)

    # ==========================================
    # Check group operations
    # ==========================================

    def create_group(self, group: Group, *, timeout: TimeoutTypes = None) -> Group:
        """
        Create a new check group.

        Args:
            group: The group to create

        Returns:
            The created group
        """
        return self._execute("create_group", _decode_group, body=group.to_dict(), timeout=timeout)

    def get_group(self, group_id: int, *, timeout: TimeoutTypes = None) -> Group:
        """Get a check group by ID."""
        return self._execute("get_group", _decode_group, id=group_id, timeout=timeout)

    def update_group(
        self, group_id: int, group: Group, *, timeout: TimeoutTypes = None
    ) -> Group:
        """
        Replace a check group's settings.

        Args:
            group_id: The group ID
            group: The new group settings

        Returns:
            The updated group
        """
        return self._execute(
            "update_group", _decode_group, body=group.to_dict(), id=group_id, timeout=timeout
        )

    def delete_group(self, group_id: int, *, timeout: TimeoutTypes = None) -> None:
        """Delete a check group."""
        self._execute("delete_group", id=group_id, timeout=timeout)

    # ==========================================
    # Snippet operations
    # ==========================================

    def create_snippet(self, snippet: Snippet, *, timeout: TimeoutTypes = None) -> Snippet:
        """Create a new snippet."""
        return self._execute(
            "create_snippet", _decode_snippet, body=snippet.to_dict(), timeout=timeout
        )

    def get_snippet(self, snippet_id: int, *, timeout: TimeoutTypes = None) -> Snippet:
        """Get a snippet by ID."""
        return self._execute("get_snippet", _decode_snippet, id=snippet_id, timeout=timeout)

    def update_snippet(
        self, snippet_id: int, snippet: Snippet, *, timeout: TimeoutTypes = None
    ) -> Snippet:
        """Replace a snippet."""
        return self._execute(
            "update_snippet",
            _decode_snippet,
            body=snippet.to_dict(),
            id=snippet_id,
            timeout=timeout,
        )

    def delete_snippet(self, snippet_id: int, *, timeout: TimeoutTypes = None) -> None:
        """Delete a snippet."""
        self._execute("delete_snippet", id=snippet_id, timeout=timeout)

    # ==========================================
    # Environment variable operations
    # ==========================================

    def create_environment_variable(
        self, variable: EnvironmentVariable, *, timeout: TimeoutTypes = None
    ) -> EnvironmentVariable:
        """Create a new environment variable."""
        return self._execute(
            "create_environment_variable",
            _decode_environment_variable,
            body=variable.to_dict(),
            timeout=timeout,
        )

    def get_environment_variable(
        self, key: str, *, timeout: TimeoutTypes = None
    ) -> EnvironmentVariable:
        """Get an environment variable by key."""
        return self._execute(
            "get_environment_variable", _decode_environment_variable, id=key, timeout=timeout
        )

    def update_environment_variable(
        self, key: str, variable: EnvironmentVariable, *, timeout: TimeoutTypes = None
    ) -> EnvironmentVariable:
        """
        Replace an environment variable.

        Args:
            key: Key of the existing variable
            variable: The new variable

        Returns:
            The updated variable
        """
        return self._execute(
            "update_environment_variable",
            _decode_environment_variable,
            body=variable.to_dict(),
            id=key,
            timeout=timeout,
        )

    def delete_environment_variable(self, key: str, *, timeout: TimeoutTypes = None) -> None:
        """Delete an environment variable."""
        self._execute("delete_environment_variable", id=key, timeout=timeout)

    # ==========================================
    # Alert channel operations
    # ==========================================

    def create_alert_channel(
        self, channel: AlertChannel, *, timeout: TimeoutTypes = None
    ) -> AlertChannel:
        """
        Create a new alert channel.

        Args:
            channel: The alert channel to create

        Returns:
            The created alert channel

        Raises:
            UnsupportedAlertChannelTypeError: If the response carries an unknown type
        """
        return self._execute(
            "create_alert_channel",
            decode_alert_channel,
            body=encode_alert_channel(channel),
            timeout=timeout,
        )

    def get_alert_channel(self, channel_id: int, *, timeout: TimeoutTypes = None) -> AlertChannel:
        """Get an alert channel by ID."""
        return self._execute(
            "get_alert_channel", decode_alert_channel, id=channel_id, timeout=timeout
        )

    def update_alert_channel(
        self, channel_id: int, channel: AlertChannel, *, timeout: TimeoutTypes = None
    ) -> AlertChannel:
        """
        Replace an alert channel.

        Args:
            channel_id: The alert channel ID
            channel: The new alert channel settings

        Returns:
            The updated alert channel
        """
        return self._execute(
            "update_alert_channel",
            decode_alert_channel,
            body=encode_alert_channel(channel),
            id=channel_id,
            timeout=timeout,
        )

    def delete_alert_channel(self, channel_id: int, *, timeout: TimeoutTypes = None) -> None:
        """Delete an alert channel."""
        self._execute("delete_alert_channel", id=channel_id, timeout=timeout)

    # ==========================================
    # Check result operations
    # ==========================================

    def get_check_result(
        self, check_id: str, result_id: str, *, timeout: TimeoutTypes = None
    ) -> CheckResult:
        """
        Get a single result of a check.

        Args:
            check_id: The check UUID
            result_id: The check result UUID

        Returns:
            The check result
        """
        return self._execute(
            "get_check_result",
            _decode_check_result,
            check_id=check_id,
            id=result_id,
            timeout=timeout,
        )

    def get_check_results(
        self,
        check_id: str,
        filters: Optional[CheckResultsFilter] = None,
        *,
        timeout: TimeoutTypes = None,
    ) -> list[CheckResult]:
        """
        List results of a check.

        Args:
            check_id: The check UUID
            filters: Page, time range and outcome filters

        Returns:
            The matching check results
        """
        return self._execute(
            "get_check_results",
            _decode_check_results,
            query=build_check_results_query(filters),
            check_id=check_id,
            timeout=timeout,
        )
