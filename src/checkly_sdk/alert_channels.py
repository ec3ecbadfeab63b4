"""Alert channel types and their type-tagged wire encoding.

An alert channel's ``config`` object changes shape with its ``type``. Each
supported type is one config dataclass registered in
``ALERT_CHANNEL_CONFIG_TYPES``; decoding looks the tag up there and fails for
anything unregistered instead of returning an empty config.
"""

import json
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Optional, Union

from .errors import (
    AlertChannelDecodeError,
    DecodeError,
    InvalidAlertChannelConfigError,
    UnsupportedAlertChannelTypeError,
)
from .types import KeyValue


def coerce_int(value: Any) -> int:
    """
    Convert a decoded JSON number to an int.

    JSON decoders may hand back ``42`` or ``42.0`` for the same wire value.
    Integral floats are accepted; fractional or non-finite ones are rejected
    rather than truncated.

    Raises:
        ValueError: If the value is not an integral number
    """
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise ValueError(f"expected an integral number, got {value!r}")
        return int(value)
    raise ValueError(f"expected a number, got {value!r}")


class AlertChannelConfig:
    """Base class of the type-specific alert channel configurations."""

    TYPE: ClassVar[str]
    REQUIRED: ClassVar[tuple[str, ...]] = ()

    def __post_init__(self) -> None:
        for attr in self.REQUIRED:
            if not getattr(self, attr):
                raise ValueError(f"{self.TYPE} alert channel config requires {attr}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AlertChannelConfig":
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError

    @classmethod
    def _required_str(cls, data: dict[str, Any], key: str) -> str:
        value = data.get(key)
        if not isinstance(value, str) or not value:
            raise InvalidAlertChannelConfigError(cls.TYPE, f"{key!r} must be a non-empty string")
        return value

    @classmethod
    def _optional_str(cls, data: dict[str, Any], key: str, default: str = "") -> str:
        value = data.get(key)
        if value is None:
            return default
        if not isinstance(value, str):
            raise InvalidAlertChannelConfigError(cls.TYPE, f"{key!r} must be a string")
        return value

    @classmethod
    def _key_values(cls, data: dict[str, Any], key: str) -> list[KeyValue]:
        items = data.get(key) or []
        if not isinstance(items, list):
            raise InvalidAlertChannelConfigError(cls.TYPE, f"{key!r} must be a list")
        try:
            return [KeyValue.from_dict(kv) for kv in items]
        except (KeyError, TypeError, AttributeError) as err:
            raise InvalidAlertChannelConfigError(cls.TYPE, f"malformed {key!r}: {err!r}") from err


@dataclass
class EmailConfig(AlertChannelConfig):
    """Sends alerts to an email address."""

    TYPE: ClassVar[str] = "EMAIL"
    REQUIRED: ClassVar[tuple[str, ...]] = ("address",)

    address: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EmailConfig":
        return cls(address=cls._required_str(data, "address"))

    def to_dict(self) -> dict[str, Any]:
        return {"address": self.address}


@dataclass
class SlackConfig(AlertChannelConfig):
    """Posts alerts to a Slack incoming webhook."""

    TYPE: ClassVar[str] = "SLACK"
    REQUIRED: ClassVar[tuple[str, ...]] = ("url",)

    url: str
    channel: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SlackConfig":
        return cls(
            url=cls._required_str(data, "url"),
            channel=cls._optional_str(data, "channel"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "channel": self.channel}


@dataclass
class SMSConfig(AlertChannelConfig):
    """Texts alerts to a phone number."""

    TYPE: ClassVar[str] = "SMS"
    REQUIRED: ClassVar[tuple[str, ...]] = ("number",)

    number: str
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SMSConfig":
        return cls(
            number=cls._required_str(data, "number"),
            name=cls._optional_str(data, "name"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "number": self.number}


@dataclass
class WebhookConfig(AlertChannelConfig):
    """Calls an arbitrary HTTP endpoint with a templated body."""

    TYPE: ClassVar[str] = "WEBHOOK"
    REQUIRED: ClassVar[tuple[str, ...]] = ("url",)

    url: str
    name: str = ""
    method: str = "POST"
    headers: list[KeyValue] = field(default_factory=list)
    query_parameters: list[KeyValue] = field(default_factory=list)
    template: str = ""
    webhook_secret: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WebhookConfig":
        return cls(
            url=cls._required_str(data, "url"),
            name=cls._optional_str(data, "name"),
            method=cls._optional_str(data, "method", "POST"),
            headers=cls._key_values(data, "headers"),
            query_parameters=cls._key_values(data, "queryParameters"),
            template=cls._optional_str(data, "template"),
            webhook_secret=cls._optional_str(data, "webhookSecret"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "url": self.url,
            "method": self.method,
            "headers": [h.to_dict() for h in self.headers],
            "queryParameters": [q.to_dict() for q in self.query_parameters],
            "template": self.template,
            "webhookSecret": self.webhook_secret,
        }


@dataclass
class OpsgenieConfig(AlertChannelConfig):
    """Creates Opsgenie alerts."""

    TYPE: ClassVar[str] = "OPSGENIE"
    REQUIRED: ClassVar[tuple[str, ...]] = ("api_key",)

    api_key: str
    name: str = ""
    region: str = "US"
    priority: str = "P3"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OpsgenieConfig":
        return cls(
            api_key=cls._required_str(data, "apiKey"),
            name=cls._optional_str(data, "name"),
            region=cls._optional_str(data, "region", "US"),
            priority=cls._optional_str(data, "priority", "P3"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "apiKey": self.api_key,
            "region": self.region,
            "priority": self.priority,
        }


@dataclass
class PagerdutyConfig(AlertChannelConfig):
    """Triggers PagerDuty incidents."""

    TYPE: ClassVar[str] = "PAGERDUTY"
    REQUIRED: ClassVar[tuple[str, ...]] = ("service_key",)

    service_key: str
    account: str = ""
    service_name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PagerdutyConfig":
        return cls(
            service_key=cls._required_str(data, "serviceKey"),
            account=cls._optional_str(data, "account"),
            service_name=cls._optional_str(data, "serviceName"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "account": self.account,
            "serviceKey": self.service_key,
            "serviceName": self.service_name,
        }


AnyAlertChannelConfig = Union[
    EmailConfig, SlackConfig, SMSConfig, WebhookConfig, OpsgenieConfig, PagerdutyConfig
]

ALERT_CHANNEL_CONFIG_TYPES: Mapping[str, type[AlertChannelConfig]] = MappingProxyType(
    {
        config_type.TYPE: config_type
        for config_type in (
            EmailConfig,
            SlackConfig,
            SMSConfig,
            WebhookConfig,
            OpsgenieConfig,
            PagerdutyConfig,
        )
    }
)


@dataclass
class AlertChannel:
    """
    A notification destination.

    The optional ``send_*`` and ``ssl_expiry*`` fields are tri-state: ``None``
    leaves the server default untouched, ``True``/``False`` (or a number) set
    it explicitly.
    """

    config: AlertChannelConfig
    id: Optional[int] = None
    send_recovery: Optional[bool] = None
    send_failure: Optional[bool] = None
    send_degraded: Optional[bool] = None
    ssl_expiry: Optional[bool] = None
    ssl_expiry_threshold: Optional[int] = None

    @property
    def type(self) -> str:
        return self.config.TYPE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AlertChannel":
        """Create from API response dict."""
        return alert_channel_from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to API request dict."""
        return encode_alert_channel(self)


_OPTIONAL_FLAGS = (
    ("sendRecovery", "send_recovery"),
    ("sendFailure", "send_failure"),
    ("sendDegraded", "send_degraded"),
    ("sslExpiry", "ssl_expiry"),
)


def encode_alert_channel(channel: AlertChannel) -> dict[str, Any]:
    """
    Build the wire payload for an alert channel.

    Optional fields are only present when set; they are never sent as null.
    """
    payload: dict[str, Any] = {
        "id": channel.id,
        "type": channel.type,
        "config": channel.config.to_dict(),
    }
    for wire_key, attr in _OPTIONAL_FLAGS:
        value = getattr(channel, attr)
        if value is not None:
            payload[wire_key] = value
    if channel.ssl_expiry_threshold is not None:
        payload["sslExpiryThreshold"] = channel.ssl_expiry_threshold
    return payload


def alert_channel_config_from_json(
    channel_type: str, data: Union[str, bytes]
) -> AlertChannelConfig:
    """
    Parse a serialized config object for the given alert channel type.

    Raises:
        UnsupportedAlertChannelTypeError: If no config type is registered for the tag
        InvalidAlertChannelConfigError: If the config does not fit the type
    """
    text = data.decode("utf-8") if isinstance(data, bytes) else data
    config_type = ALERT_CHANNEL_CONFIG_TYPES.get(channel_type)
    if config_type is None:
        raise UnsupportedAlertChannelTypeError(channel_type, text)
    try:
        parsed = json.loads(text)
    except ValueError as err:
        raise InvalidAlertChannelConfigError(channel_type, str(err), text) from err
    if not isinstance(parsed, dict):
        raise InvalidAlertChannelConfigError(channel_type, "config must be an object", text)
    try:
        return config_type.from_dict(parsed)
    except InvalidAlertChannelConfigError as err:
        raise InvalidAlertChannelConfigError(channel_type, err.reason, text) from err


def _optional_bool(data: dict[str, Any], key: str, body: str) -> Optional[bool]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise AlertChannelDecodeError(body, f"{key!r} must be a boolean, got {value!r}")
    return value


def _optional_int(data: dict[str, Any], key: str, body: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    try:
        return coerce_int(value)
    except ValueError as err:
        raise AlertChannelDecodeError(body, f"{key!r}: {err}") from err


def alert_channel_from_dict(data: dict[str, Any], body: str = "") -> AlertChannel:
    """
    Build a typed alert channel from a decoded JSON object.

    Args:
        data: The decoded response object
        body: Raw response text, attached to errors for diagnosis

    Raises:
        AlertChannelDecodeError: If a field has the wrong shape, the type is
            unsupported, or the config does not fit the type
    """
    channel_type = data.get("type")
    if not isinstance(channel_type, str) or channel_type not in ALERT_CHANNEL_CONFIG_TYPES:
        raise UnsupportedAlertChannelTypeError(channel_type, body)

    if "config" not in data or data["config"] is None:
        raise InvalidAlertChannelConfigError(channel_type, "missing config", body)
    try:
        config = alert_channel_config_from_json(channel_type, json.dumps(data["config"]))
    except InvalidAlertChannelConfigError as err:
        raise InvalidAlertChannelConfigError(channel_type, err.reason, body or err.body) from err

    flags = {attr: _optional_bool(data, wire_key, body) for wire_key, attr in _OPTIONAL_FLAGS}
    return AlertChannel(
        config=config,
        id=_optional_int(data, "id", body),
        ssl_expiry_threshold=_optional_int(data, "sslExpiryThreshold", body),
        **flags,
    )


def decode_alert_channel(text: str) -> AlertChannel:
    """
    Decode an alert channel response body.

    Raises:
        DecodeError: If the body is not a JSON object
        AlertChannelDecodeError: If the object is not a valid alert channel
    """
    try:
        data = json.loads(text)
    except ValueError as err:
        raise DecodeError(text, err) from err
    if not isinstance(data, dict):
        raise DecodeError(text, "expected a JSON object")
    return alert_channel_from_dict(data, text)
