"""Tests for alert channel encoding and decoding."""

import json

import pytest

from checkly_sdk import (
    ALERT_CHANNEL_CONFIG_TYPES,
    AlertChannel,
    AlertChannelDecodeError,
    DecodeError,
    EmailConfig,
    InvalidAlertChannelConfigError,
    KeyValue,
    OpsgenieConfig,
    PagerdutyConfig,
    SlackConfig,
    SMSConfig,
    UnsupportedAlertChannelTypeError,
    WebhookConfig,
    alert_channel_config_from_json,
    coerce_int,
    decode_alert_channel,
    encode_alert_channel,
)

CONFIGS = [
    EmailConfig(address="ops@example.com"),
    SlackConfig(url="https://hooks.slack.com/services/T0/B0/x", channel="#alerts"),
    SMSConfig(name="on-call", number="+15550100"),
    WebhookConfig(
        name="incident bot",
        url="https://bot.example.com/hook",
        method="PUT",
        headers=[KeyValue(key="X-Token", value="abc", locked=True)],
        query_parameters=[KeyValue(key="source", value="checkly")],
        template='{"check": "{{CHECK_NAME}}"}',
        webhook_secret="s3cret",
    ),
    OpsgenieConfig(name="ops", api_key="og_key", region="EU", priority="P1"),
    PagerdutyConfig(service_key="pd_key", account="acme", service_name="web"),
]


def roundtrip(channel: AlertChannel) -> AlertChannel:
    return decode_alert_channel(json.dumps(encode_alert_channel(channel)))


class TestRegistry:
    def test_every_config_is_registered(self) -> None:
        assert set(ALERT_CHANNEL_CONFIG_TYPES) == {c.TYPE for c in CONFIGS}

    def test_registry_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            ALERT_CHANNEL_CONFIG_TYPES["CARRIER_PIGEON"] = EmailConfig  # type: ignore[index]


class TestEncode:
    def test_omits_unset_optional_fields(self) -> None:
        payload = encode_alert_channel(
            AlertChannel(id=9, config=EmailConfig(address="ops@example.com"))
        )

        assert payload == {"id": 9, "type": "EMAIL", "config": {"address": "ops@example.com"}}

    def test_includes_explicit_false(self) -> None:
        payload = encode_alert_channel(
            AlertChannel(
                config=SlackConfig(url="https://hooks.slack.com/x"),
                send_recovery=False,
                send_failure=True,
                send_degraded=False,
                ssl_expiry=True,
                ssl_expiry_threshold=14,
            )
        )

        assert payload["sendRecovery"] is False
        assert payload["sendFailure"] is True
        assert payload["sendDegraded"] is False
        assert payload["sslExpiry"] is True
        assert payload["sslExpiryThreshold"] == 14

    def test_type_follows_config(self) -> None:
        channel = AlertChannel(config=PagerdutyConfig(service_key="pd"))

        assert channel.type == "PAGERDUTY"
        assert encode_alert_channel(channel)["type"] == "PAGERDUTY"


class TestRoundTrip:
    @pytest.mark.parametrize("config", CONFIGS, ids=lambda c: c.TYPE)
    def test_preserves_config_and_flags(self, config: object) -> None:
        channel = AlertChannel(
            id=42,
            config=config,  # type: ignore[arg-type]
            send_recovery=True,
            send_failure=False,
            ssl_expiry=True,
            ssl_expiry_threshold=30,
        )

        decoded = roundtrip(channel)

        assert decoded == channel
        assert decoded.send_degraded is None

    def test_unset_fields_stay_unset(self) -> None:
        channel = AlertChannel(config=SMSConfig(number="+15550100"))

        decoded = roundtrip(channel)

        assert decoded.id is None
        assert decoded.send_recovery is None
        assert decoded.send_failure is None
        assert decoded.send_degraded is None
        assert decoded.ssl_expiry is None
        assert decoded.ssl_expiry_threshold is None

    @pytest.mark.parametrize(
        "config",
        [
            OpsgenieConfig(api_key="og_key", region="", priority=""),
            WebhookConfig(url="https://bot.example.com/hook", method=""),
        ],
        ids=lambda c: c.TYPE,
    )
    def test_preserves_empty_optional_values(self, config: object) -> None:
        channel = AlertChannel(config=config)  # type: ignore[arg-type]

        assert roundtrip(channel) == channel

    def test_absent_optional_keys_take_defaults(self) -> None:
        opsgenie = alert_channel_config_from_json("OPSGENIE", '{"apiKey": "k"}')
        webhook = alert_channel_config_from_json("WEBHOOK", '{"url": "https://x"}')

        assert opsgenie == OpsgenieConfig(api_key="k", region="US", priority="P3")
        assert webhook == WebhookConfig(url="https://x", method="POST")

    @pytest.mark.parametrize(
        "config_type, kwargs",
        [
            (EmailConfig, {"address": ""}),
            (SlackConfig, {"url": ""}),
            (SMSConfig, {"number": ""}),
            (WebhookConfig, {"url": ""}),
            (OpsgenieConfig, {"api_key": ""}),
            (PagerdutyConfig, {"service_key": ""}),
        ],
        ids=lambda v: getattr(v, "TYPE", None),
    )
    def test_empty_required_value_is_rejected(self, config_type: type, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            config_type(**kwargs)


class TestDecode:
    def test_integer_and_float_numbers_decode_the_same(self) -> None:
        as_int = decode_alert_channel(
            '{"id": 42, "type": "EMAIL", "config": {"address": "a@b.c"}, "sslExpiryThreshold": 30}'
        )
        as_float = decode_alert_channel(
            '{"id": 42.0, "type": "EMAIL", "config": {"address": "a@b.c"},'
            ' "sslExpiryThreshold": 30.0}'
        )

        assert as_int.id == as_float.id == 42
        assert as_int.ssl_expiry_threshold == as_float.ssl_expiry_threshold == 30
        assert isinstance(as_float.id, int)

    def test_large_ids_keep_precision(self) -> None:
        channel = decode_alert_channel(
            '{"id": 9007199254740993, "type": "EMAIL", "config": {"address": "a@b.c"}}'
        )

        assert channel.id == 9007199254740993

    def test_rejects_fractional_id(self) -> None:
        with pytest.raises(AlertChannelDecodeError):
            decode_alert_channel('{"id": 42.5, "type": "EMAIL", "config": {"address": "a@b.c"}}')

    def test_rejects_non_boolean_flag(self) -> None:
        with pytest.raises(AlertChannelDecodeError):
            decode_alert_channel(
                '{"id": 1, "type": "EMAIL", "config": {"address": "a@b.c"}, "sendFailure": "yes"}'
            )

    def test_unknown_type_fails(self) -> None:
        with pytest.raises(UnsupportedAlertChannelTypeError) as exc_info:
            decode_alert_channel('{"id": 1, "type": "CARRIER_PIGEON", "config": {}}')

        assert exc_info.value.channel_type == "CARRIER_PIGEON"
        assert "CARRIER_PIGEON" in str(exc_info.value)

    def test_missing_type_fails(self) -> None:
        with pytest.raises(UnsupportedAlertChannelTypeError):
            decode_alert_channel('{"id": 1, "config": {"address": "a@b.c"}}')

    def test_config_not_matching_type_fails(self) -> None:
        with pytest.raises(InvalidAlertChannelConfigError) as exc_info:
            decode_alert_channel('{"id": 1, "type": "EMAIL", "config": {"url": "https://x"}}')

        assert exc_info.value.channel_type == "EMAIL"

    def test_config_error_carries_full_response_body(self) -> None:
        body = '{"id": 1, "type": "EMAIL", "config": {"url": "https://x"}}'

        with pytest.raises(InvalidAlertChannelConfigError) as exc_info:
            decode_alert_channel(body)

        assert exc_info.value.body == body

    def test_missing_config_fails(self) -> None:
        with pytest.raises(InvalidAlertChannelConfigError):
            decode_alert_channel('{"id": 1, "type": "SLACK"}')

    def test_malformed_json_is_a_generic_decode_error(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_alert_channel("{not json")

        assert not isinstance(exc_info.value, AlertChannelDecodeError)
        assert exc_info.value.body == "{not json"

    def test_ignores_unknown_config_keys(self) -> None:
        channel = decode_alert_channel(
            '{"id": 1, "type": "SLACK", "config": {"url": "https://hooks/x", "color": "red"}}'
        )

        assert channel.config == SlackConfig(url="https://hooks/x")


class TestConfigFromJSON:
    def test_parses_bytes(self) -> None:
        config = alert_channel_config_from_json("OPSGENIE", b'{"apiKey": "k", "region": "EU"}')

        assert config == OpsgenieConfig(api_key="k", region="EU")

    def test_malformed_webhook_headers(self) -> None:
        with pytest.raises(InvalidAlertChannelConfigError):
            alert_channel_config_from_json("WEBHOOK", '{"url": "https://x", "headers": [{}]}')

    def test_config_must_be_object(self) -> None:
        with pytest.raises(InvalidAlertChannelConfigError):
            alert_channel_config_from_json("EMAIL", '["a@b.c"]')


class TestCoerceInt:
    @pytest.mark.parametrize("value", [7, 7.0])
    def test_accepts_integral_numbers(self, value: object) -> None:
        assert coerce_int(value) == 7

    @pytest.mark.parametrize("value", [7.5, float("inf"), True, "7", None])
    def test_rejects_everything_else(self, value: object) -> None:
        with pytest.raises(ValueError):
            coerce_int(value)
