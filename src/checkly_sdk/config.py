"""Client credentials and environment configuration."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.checklyhq.com"
DEFAULT_TIMEOUT = 30.0

API_URL_ENV = "CHECKLY_API_URL"
API_KEY_ENV = "CHECKLY_API_KEY"


@dataclass(frozen=True)
class Credentials:
    """Base URL and API key used for every request of a client."""

    base_url: str
    api_key: str

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError("checkly: an API key is required")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def __repr__(self) -> str:
        return f"Credentials(base_url={self.base_url!r}, api_key='***')"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Credentials":
        """
        Load credentials from the environment.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            Credentials built from CHECKLY_API_URL and CHECKLY_API_KEY

        Raises:
            ConfigurationError: If CHECKLY_API_KEY is not set
        """
        env = os.environ if environ is None else environ
        api_key = env.get(API_KEY_ENV, "")
        if not api_key:
            raise ConfigurationError(f"checkly: {API_KEY_ENV} is not set")
        return cls(base_url=env.get(API_URL_ENV, DEFAULT_BASE_URL), api_key=api_key)
