"""Checkly SDK - Python client for the Checkly monitoring API."""

from .alert_channels import (
    ALERT_CHANNEL_CONFIG_TYPES,
    AlertChannel,
    AlertChannelConfig,
    EmailConfig,
    OpsgenieConfig,
    PagerdutyConfig,
    SlackConfig,
    SMSConfig,
    WebhookConfig,
    alert_channel_config_from_json,
    coerce_int,
    decode_alert_channel,
    encode_alert_channel,
)
from .client import ENDPOINTS, ChecklyClient, Endpoint
from .config import Credentials
from .errors import (
    AlertChannelDecodeError,
    ChecklyError,
    ConfigurationError,
    DecodeError,
    InvalidAlertChannelConfigError,
    TransportError,
    UnexpectedStatusError,
    UnsupportedAlertChannelTypeError,
)
from .query import CheckResultsFilter, build_check_results_query, with_auto_assign_alerts_flag
from .transport import Transport
from .types import (
    AlertChannelSubscription,
    AlertSettings,
    APICheckDefaults,
    Assertion,
    BasicAuth,
    Check,
    CheckResult,
    CheckType,
    EnvironmentVariable,
    EscalationType,
    Group,
    KeyValue,
    Request,
    Snippet,
)

__version__ = "1.0.0"

__all__ = [
    # Client
    "ChecklyClient",
    "Credentials",
    "Transport",
    "Endpoint",
    "ENDPOINTS",
    # Types
    "Check",
    "CheckType",
    "Group",
    "Snippet",
    "EnvironmentVariable",
    "CheckResult",
    "CheckResultsFilter",
    "KeyValue",
    "Assertion",
    "BasicAuth",
    "Request",
    "APICheckDefaults",
    "AlertSettings",
    "EscalationType",
    "AlertChannelSubscription",
    # Alert channels
    "AlertChannel",
    "AlertChannelConfig",
    "EmailConfig",
    "SlackConfig",
    "SMSConfig",
    "WebhookConfig",
    "OpsgenieConfig",
    "PagerdutyConfig",
    "ALERT_CHANNEL_CONFIG_TYPES",
    "encode_alert_channel",
    "decode_alert_channel",
    "alert_channel_config_from_json",
    "coerce_int",
    # Query
    "build_check_results_query",
    "with_auto_assign_alerts_flag",
    # Errors
    "ChecklyError",
    "ConfigurationError",
    "TransportError",
    "UnexpectedStatusError",
    "DecodeError",
    "AlertChannelDecodeError",
    "UnsupportedAlertChannelTypeError",
    "InvalidAlertChannelConfigError",
]
