"""Type definitions for Checkly SDK."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class CheckType(str, Enum):
    """Type of a check."""

    API = "API"
    BROWSER = "BROWSER"


class EscalationType(str, Enum):
    """How alerts escalate for a failing check."""

    RUN_BASED = "RUN_BASED"
    TIME_BASED = "TIME_BASED"


def _parse_time(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _format_time(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


@dataclass
class KeyValue:
    """A header or query parameter."""

    key: str
    value: str
    locked: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "KeyValue":
        """Create from API response dict."""
        return cls(key=data["key"], value=data["value"], locked=data.get("locked", False))

    def to_dict(self) -> dict[str, Any]:
        """Convert to API request dict."""
        return {"key": self.key, "value": self.value, "locked": self.locked}


@dataclass
class EnvironmentVariable:
    """A key/value variable available to check scripts."""

    key: str
    value: str
    locked: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EnvironmentVariable":
        """Create from API response dict."""
        return cls(key=data["key"], value=data["value"], locked=data.get("locked", False))

    def to_dict(self) -> dict[str, Any]:
        """Convert to API request dict."""
        return {"key": self.key, "value": self.value, "locked": self.locked}


@dataclass
class Assertion:
    """An assertion evaluated against an API check response."""

    source: str
    comparison: str
    target: str
    property: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Assertion":
        """Create from API response dict."""
        return cls(
            source=data["source"],
            comparison=data["comparison"],
            target=str(data.get("target", "")),
            property=data.get("property", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to API request dict."""
        return {
            "source": self.source,
            "property": self.property,
            "comparison": self.comparison,
            "target": self.target,
        }


@dataclass
class BasicAuth:
    """Basic authentication credentials for API checks."""

    username: str
    password: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BasicAuth":
        """Create from API response dict."""
        return cls(username=data.get("username", ""), password=data.get("password", ""))

    def to_dict(self) -> dict[str, Any]:
        """Convert to API request dict."""
        return {"username": self.username, "password": self.password}


def _key_values(items: Optional[list[dict[str, Any]]]) -> list[KeyValue]:
    return [KeyValue.from_dict(kv) for kv in items or []]


def _assertions(items: Optional[list[dict[str, Any]]]) -> list[Assertion]:
    return [Assertion.from_dict(a) for a in items or []]


def _basic_auth(data: Optional[dict[str, Any]]) -> Optional[BasicAuth]:
    if not data:
        return None
    return BasicAuth.from_dict(data)


@dataclass
class Request:
    """The HTTP request an API check performs."""

    method: str
    url: str
    follow_redirects: bool = True
    skip_ssl: bool = False
    body: str = ""
    body_type: str = "NONE"
    headers: list[KeyValue] = field(default_factory=list)
    query_parameters: list[KeyValue] = field(default_factory=list)
    assertions: list[Assertion] = field(default_factory=list)
    basic_auth: Optional[BasicAuth] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Request":
        """Create from API response dict."""
        return cls(
            method=data.get("method", "GET"),
            url=data.get("url", ""),
            follow_redirects=data.get("followRedirects", True),
            skip_ssl=data.get("skipSSL", False),
            body=data.get("body") or "",
            body_type=data.get("bodyType") or "NONE",
            headers=_key_values(data.get("headers")),
            query_parameters=_key_values(data.get("queryParameters")),
            assertions=_assertions(data.get("assertions")),
            basic_auth=_basic_auth(data.get("basicAuth")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to API request dict."""
        result: dict[str, Any] = {
            "method": self.method,
            "url": self.url,
            "followRedirects": self.follow_redirects,
            "skipSSL": self.skip_ssl,
            "body": self.body,
            "bodyType": self.body_type,
            "headers": [h.to_dict() for h in self.headers],
            "queryParameters": [q.to_dict() for q in self.query_parameters],
            "assertions": [a.to_dict() for a in self.assertions],
        }
        if self.basic_auth is not None:
            result["basicAuth"] = self.basic_auth.to_dict()
        return result


@dataclass
class APICheckDefaults:
    """Request defaults a group applies to its API checks."""

    url: str = ""
    headers: list[KeyValue] = field(default_factory=list)
    query_parameters: list[KeyValue] = field(default_factory=list)
    assertions: list[Assertion] = field(default_factory=list)
    basic_auth: Optional[BasicAuth] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "APICheckDefaults":
        """Create from API response dict."""
        return cls(
            url=data.get("url", ""),
            headers=_key_values(data.get("headers")),
            query_parameters=_key_values(data.get("queryParameters")),
            assertions=_assertions(data.get("assertions")),
            basic_auth=_basic_auth(data.get("basicAuth")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to API request dict."""
        result: dict[str, Any] = {
            "url": self.url,
            "headers": [h.to_dict() for h in self.headers],
            "queryParameters": [q.to_dict() for q in self.query_parameters],
            "assertions": [a.to_dict() for a in self.assertions],
        }
        if self.basic_auth is not None:
            result["basicAuth"] = self.basic_auth.to_dict()
        return result


@dataclass
class AlertSettings:
    """When and how often alerts fire for a check or group."""

    escalation_type: EscalationType = EscalationType.RUN_BASED
    failed_run_threshold: int = 1
    minutes_failing_threshold: int = 5
    reminder_amount: int = 0
    reminder_interval: int = 5
    ssl_certificates_enabled: bool = False
    ssl_certificates_alert_threshold: int = 30

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AlertSettings":
        """Create from API response dict."""
        run_based = data.get("runBasedEscalation") or {}
        time_based = data.get("timeBasedEscalation") or {}
        reminders = data.get("reminders") or {}
        ssl = data.get("sslCertificates") or {}
        return cls(
            escalation_type=EscalationType(data.get("escalationType", "RUN_BASED")),
            failed_run_threshold=run_based.get("failedRunThreshold", 1),
            minutes_failing_threshold=time_based.get("minutesFailingThreshold", 5),
            reminder_amount=reminders.get("amount", 0),
            reminder_interval=reminders.get("interval", 5),
            ssl_certificates_enabled=ssl.get("enabled", False),
            ssl_certificates_alert_threshold=ssl.get("alertThreshold", 30),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to API request dict."""
        return {
            "escalationType": self.escalation_type.value,
            "runBasedEscalation": {"failedRunThreshold": self.failed_run_threshold},
            "timeBasedEscalation": {"minutesFailingThreshold": self.minutes_failing_threshold},
            "reminders": {"amount": self.reminder_amount, "interval": self.reminder_interval},
            "sslCertificates": {
                "enabled": self.ssl_certificates_enabled,
                "alertThreshold": self.ssl_certificates_alert_threshold,
            },
        }


@dataclass
class AlertChannelSubscription:
    """Links a check or group to an alert channel."""

    alert_channel_id: int
    activated: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AlertChannelSubscription":
        """Create from API response dict."""
        return cls(
            alert_channel_id=int(data["alertChannelId"]),
            activated=data.get("activated", True),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to API request dict."""
        return {"alertChannelId": self.alert_channel_id, "activated": self.activated}


def _subscriptions(items: Optional[list[dict[str, Any]]]) -> list[AlertChannelSubscription]:
    return [AlertChannelSubscription.from_dict(s) for s in items or []]


def _environment_variables(items: Optional[list[dict[str, Any]]]) -> list[EnvironmentVariable]:
    return [EnvironmentVariable.from_dict(v) for v in items or []]


def _alert_settings(data: Optional[dict[str, Any]]) -> Optional[AlertSettings]:
    if not data:
        return None
    return AlertSettings.from_dict(data)


@dataclass
class Check:
    """An API or browser check."""

    name: str
    type: CheckType
    frequency: int
    activated: bool = True
    muted: bool = False
    should_fail: bool = False
    locations: list[str] = field(default_factory=list)
    script: Optional[str] = None
    request: Optional[Request] = None
    degraded_response_time: int = 10000
    max_response_time: int = 20000
    double_check: bool = False
    ssl_check: bool = False
    tags: list[str] = field(default_factory=list)
    environment_variables: list[EnvironmentVariable] = field(default_factory=list)
    use_global_alert_settings: bool = True
    alert_settings: Optional[AlertSettings] = None
    alert_channel_subscriptions: list[AlertChannelSubscription] = field(default_factory=list)
    setup_snippet_id: Optional[int] = None
    teardown_snippet_id: Optional[int] = None
    local_setup_script: Optional[str] = None
    local_teardown_script: Optional[str] = None
    group_id: Optional[int] = None
    group_order: Optional[int] = None
    runtime_id: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Check":
        """Create from API response dict."""
        request = None
        if data.get("request"):
            request = Request.from_dict(data["request"])

        return cls(
            id=data.get("id"),
            name=data["name"],
            type=CheckType(data["checkType"]),
            frequency=data.get("frequency", 0),
            activated=data.get("activated", True),
            muted=data.get("muted", False),
            should_fail=data.get("shouldFail", False),
            locations=data.get("locations") or [],
            script=data.get("script"),
            request=request,
            degraded_response_time=data.get("degradedResponseTime", 10000),
            max_response_time=data.get("maxResponseTime", 20000),
            double_check=data.get("doubleCheck", False),
            ssl_check=data.get("sslCheck", False),
            tags=data.get("tags") or [],
            environment_variables=_environment_variables(data.get("environmentVariables")),
            use_global_alert_settings=data.get("useGlobalAlertSettings", True),
            alert_settings=_alert_settings(data.get("alertSettings")),
            alert_channel_subscriptions=_subscriptions(data.get("alertChannelSubscriptions")),
            setup_snippet_id=data.get("setupSnippetId"),
            teardown_snippet_id=data.get("tearDownSnippetId"),
            local_setup_script=data.get("localSetupScript"),
            local_teardown_script=data.get("localTearDownScript"),
            group_id=data.get("groupId"),
            group_order=data.get("groupOrder"),
            runtime_id=data.get("runtimeId"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to API request dict."""
        result: dict[str, Any] = {
            "name": self.name,
            "checkType": CheckType(self.type).value,
            "frequency": self.frequency,
            "activated": self.activated,
            "muted": self.muted,
            "shouldFail": self.should_fail,
            "locations": self.locations,
            "degradedResponseTime": self.degraded_response_time,
            "maxResponseTime": self.max_response_time,
            "doubleCheck": self.double_check,
            "sslCheck": self.ssl_check,
            "tags": self.tags,
            "environmentVariables": [v.to_dict() for v in self.environment_variables],
            "useGlobalAlertSettings": self.use_global_alert_settings,
        }
        if self.id is not None:
            result["id"] = self.id
        if self.script is not None:
            result["script"] = self.script
        if self.request is not None:
            result["request"] = self.request.to_dict()
        if self.alert_settings is not None:
            result["alertSettings"] = self.alert_settings.to_dict()
        if self.alert_channel_subscriptions:
            result["alertChannelSubscriptions"] = [
                s.to_dict() for s in self.alert_channel_subscriptions
            ]
        if self.setup_snippet_id is not None:
            result["setupSnippetId"] = self.setup_snippet_id
        if self.teardown_snippet_id is not None:
            result["tearDownSnippetId"] = self.teardown_snippet_id
        if self.local_setup_script is not None:
            result["localSetupScript"] = self.local_setup_script
        if self.local_teardown_script is not None:
            result["localTearDownScript"] = self.local_teardown_script
        if self.group_id is not None:
            result["groupId"] = self.group_id
        if self.group_order is not None:
            result["groupOrder"] = self.group_order
        if self.runtime_id is not None:
            result["runtimeId"] = self.runtime_id
        return result


@dataclass
class Group:
    """A check group sharing settings between its checks."""

    name: str
    activated: bool = True
    muted: bool = False
    locations: list[str] = field(default_factory=list)
    concurrency: int = 1
    tags: list[str] = field(default_factory=list)
    api_check_defaults: Optional[APICheckDefaults] = None
    environment_variables: list[EnvironmentVariable] = field(default_factory=list)
    double_check: bool = False
    use_global_alert_settings: bool = True
    alert_settings: Optional[AlertSettings] = None
    alert_channel_subscriptions: list[AlertChannelSubscription] = field(default_factory=list)
    setup_snippet_id: Optional[int] = None
    teardown_snippet_id: Optional[int] = None
    local_setup_script: Optional[str] = None
    local_teardown_script: Optional[str] = None
    runtime_id: Optional[str] = None
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Group":
        """Create from API response dict."""
        api_check_defaults = None
        if data.get("apiCheckDefaults"):
            api_check_defaults = APICheckDefaults.from_dict(data["apiCheckDefaults"])

        return cls(
            id=data.get("id"),
            name=data["name"],
            activated=data.get("activated", True),
            muted=data.get("muted", False),
            locations=data.get("locations") or [],
            concurrency=data.get("concurrency", 1),
            tags=data.get("tags") or [],
            api_check_defaults=api_check_defaults,
            environment_variables=_environment_variables(data.get("environmentVariables")),
            double_check=data.get("doubleCheck", False),
            use_global_alert_settings=data.get("useGlobalAlertSettings", True),
            alert_settings=_alert_settings(data.get("alertSettings")),
            alert_channel_subscriptions=_subscriptions(data.get("alertChannelSubscriptions")),
            setup_snippet_id=data.get("setupSnippetId"),
            teardown_snippet_id=data.get("tearDownSnippetId"),
            local_setup_script=data.get("localSetupScript"),
            local_teardown_script=data.get("localTearDownScript"),
            runtime_id=data.get("runtimeId"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to API request dict."""
        result: dict[str, Any] = {
            "name": self.name,
            "activated": self.activated,
            "muted": self.muted,
            "locations": self.locations,
            "concurrency": self.concurrency,
            "tags": self.tags,
            "environmentVariables": [v.to_dict() for v in self.environment_variables],
            "doubleCheck": self.double_check,
            "useGlobalAlertSettings": self.use_global_alert_settings,
        }
        if self.id is not None:
            result["id"] = self.id
        if self.api_check_defaults is not None:
            result["apiCheckDefaults"] = self.api_check_defaults.to_dict()
        if self.alert_settings is not None:
            result["alertSettings"] = self.alert_settings.to_dict()
        if self.alert_channel_subscriptions:
            result["alertChannelSubscriptions"] = [
                s.to_dict() for s in self.alert_channel_subscriptions
            ]
        if self.setup_snippet_id is not None:
            result["setupSnippetId"] = self.setup_snippet_id
        if self.teardown_snippet_id is not None:
            result["tearDownSnippetId"] = self.teardown_snippet_id
        if self.local_setup_script is not None:
            result["localSetupScript"] = self.local_setup_script
        if self.local_teardown_script is not None:
            result["localTearDownScript"] = self.local_teardown_script
        if self.runtime_id is not None:
            result["runtimeId"] = self.runtime_id
        return result


@dataclass
class Snippet:
    """Reusable code that checks can run as setup or teardown."""

    name: str
    script: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Snippet":
        """Create from API response dict."""
        return cls(
            id=data.get("id"),
            name=data["name"],
            script=data.get("script", ""),
            created_at=_parse_time(data.get("created_at")),
            updated_at=_parse_time(data.get("updated_at")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to API request dict."""
        result: dict[str, Any] = {"name": self.name, "script": self.script}
        if self.id is not None:
            result["id"] = self.id
        if self.created_at is not None:
            result["created_at"] = _format_time(self.created_at)
        if self.updated_at is not None:
            result["updated_at"] = _format_time(self.updated_at)
        return result


@dataclass(frozen=True)
class CheckResult:
    """The outcome of one check run. Read-only."""

    id: str
    check_id: str
    name: str = ""
    has_failures: bool = False
    has_errors: bool = False
    is_degraded: bool = False
    over_max_response_time: bool = False
    run_location: str = ""
    response_time: int = 0
    attempts: int = 0
    check_run_id: Optional[int] = None
    started_at: Optional[datetime] = None
    stopped_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    api_check_result: Optional[dict[str, Any]] = None
    browser_check_result: Optional[dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CheckResult":
        """Create from API response dict."""
        return cls(
            id=data["id"],
            check_id=data["checkId"],
            name=data.get("name", ""),
            has_failures=data.get("hasFailures", False),
            has_errors=data.get("hasErrors", False),
            is_degraded=data.get("isDegraded", False),
            over_max_response_time=data.get("overMaxResponseTime", False),
            run_location=data.get("runLocation", ""),
            response_time=data.get("responseTime", 0),
            attempts=data.get("attempts", 0),
            check_run_id=data.get("checkRunId"),
            started_at=_parse_time(data.get("startedAt")),
            stopped_at=_parse_time(data.get("stoppedAt")),
            created_at=_parse_time(data.get("created_at")),
            api_check_result=data.get("apiCheckResult"),
            browser_check_result=data.get("browserCheckResult"),
        )
