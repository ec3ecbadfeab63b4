"""Error types for Checkly SDK."""

from typing import Optional


class ChecklyError(Exception):
    """Base error class for Checkly SDK."""

    pass


class ConfigurationError(ChecklyError):
    """Client credentials are missing or invalid."""

    pass


class TransportError(ChecklyError):
    """The HTTP request could not be built or did not complete."""

    def __init__(self, method: str, url: str, cause: BaseException) -> None:
        super().__init__(f"checkly: {method} {url} failed: {cause}")
        self.method = method
        self.url = url
        self.cause = cause


class UnexpectedStatusError(ChecklyError):
    """The API answered with a status other than the one the operation expects."""

    def __init__(
        self,
        status_code: int,
        body: str,
        payload: Optional[str] = None,
    ) -> None:
        message = f"checkly: unexpected response status {status_code}: {body!r}"
        if payload is not None:
            message += f", payload: {payload}"
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.payload = payload

    def is_unauthorized(self) -> bool:
        """Check if this is an authorization error."""
        return self.status_code == 401

    def is_not_found(self) -> bool:
        """Check if this is a not found error."""
        return self.status_code == 404

    def is_rate_limited(self) -> bool:
        """Check if this is a rate limit error."""
        return self.status_code == 429

    def is_bad_request(self) -> bool:
        """Check if this is a bad request error."""
        return self.status_code in (400, 422)

    def is_server_error(self) -> bool:
        """Check if this is a server error."""
        return self.status_code >= 500


class DecodeError(ChecklyError):
    """A response body could not be decoded into the expected type."""

    def __init__(self, body: str, cause: object) -> None:
        super().__init__(f"checkly: decoding error for data {body!r}: {cause}")
        self.body = body
        self.cause = cause


class AlertChannelDecodeError(DecodeError):
    """An alert channel payload could not be turned into a typed channel."""

    pass


class UnsupportedAlertChannelTypeError(AlertChannelDecodeError):
    """No config parser is registered for the alert channel type."""

    def __init__(self, channel_type: object, body: str = "") -> None:
        super().__init__(body, f"unsupported alert channel type {channel_type!r}")
        self.channel_type = channel_type


class InvalidAlertChannelConfigError(AlertChannelDecodeError):
    """The config shape does not match its alert channel type."""

    def __init__(self, channel_type: str, reason: str, body: str = "") -> None:
        super().__init__(body, f"invalid {channel_type} alert channel config: {reason}")
        self.channel_type = channel_type
        self.reason = reason
