"""Configuration for the MRP client.

Settings resolve with the precedence explicit argument > environment
variable > default. The transports read a single process-wide
:class:`ClientConfig` through :func:`get_client_config` when they are
constructed without explicit arguments.

Environment variables:
    MRP_API_URL: backend base URL (default ``http://localhost:8081/mrp/``)
    MRP_HTTP_TIMEOUT: optional per-request timeout in seconds (unset means none)
    MRP_PUBLIC_ENDPOINTS: comma separated public endpoint markers
    MRP_UPLOAD_HOSTS: comma separated third-party upload host markers
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from urllib.parse import urlparse

from mrp_client.constants import DEFAULT_API_URL, DEFAULT_PUBLIC_ENDPOINTS, DEFAULT_UPLOAD_MARKERS
from mrp_client.exceptions import ConfigurationError


@dataclass
class ConfigValidationResult:
    """Result of configuration validation with success state and error details."""

    success: bool
    errors: List[str] = field(default_factory=list)

    def add_error(self, error: str) -> None:
        self.errors.append(error)
        self.success = False


def _split_markers(raw: Optional[str], default: Tuple[str, ...]) -> Tuple[str, ...]:
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"MRP_HTTP_TIMEOUT must be a number, got {raw!r}") from exc
    return value if value > 0 else None


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings shared by the GraphQL transports and the auth client.

    Attributes:
        api_url: Backend base URL; ``/graphql`` is appended for GraphQL calls
        timeout: Per-request timeout in seconds, ``None`` leaves it to the HTTP library
        public_endpoints: URL substrings that never receive a bearer token
        upload_markers: URL substrings of third-party upload hosts, passed through untouched
    """

    api_url: str = DEFAULT_API_URL
    timeout: Optional[float] = None
    public_endpoints: Tuple[str, ...] = DEFAULT_PUBLIC_ENDPOINTS
    upload_markers: Tuple[str, ...] = DEFAULT_UPLOAD_MARKERS

    @classmethod
    def from_environment(cls, api_url: Optional[str] = None) -> "ClientConfig":
        """Build a configuration from environment variables.

        Args:
            api_url: Explicit base URL, takes precedence over ``MRP_API_URL``
        """
        return cls(
            api_url=api_url or os.getenv("MRP_API_URL") or DEFAULT_API_URL,
            timeout=_parse_timeout(os.getenv("MRP_HTTP_TIMEOUT")),
            public_endpoints=_split_markers(os.getenv("MRP_PUBLIC_ENDPOINTS"), DEFAULT_PUBLIC_ENDPOINTS),
            upload_markers=_split_markers(os.getenv("MRP_UPLOAD_HOSTS"), DEFAULT_UPLOAD_MARKERS),
        )

    def validate(self) -> ConfigValidationResult:
        result = ConfigValidationResult(success=True)

        if not self.api_url or not self.api_url.strip():
            result.add_error("API URL cannot be empty")
        else:
            parsed = urlparse(self.api_url)
            if parsed.scheme not in ("http", "https"):
                result.add_error("API URL must start with 'http://' or 'https://'")
            elif not parsed.netloc:
                result.add_error("API URL must include a host (e.g., 'http://localhost:8081/mrp/')")

        if self.timeout is not None and self.timeout <= 0:
            result.add_error("Timeout must be a positive number of seconds")

        return result


_client_config: Optional[ClientConfig] = None


def get_client_config() -> ClientConfig:
    """Return the process-wide configuration, loading it from the environment once."""
    global _client_config
    if _client_config is None:
        config = ClientConfig.from_environment()
        result = config.validate()
        if not result.success:
            raise ConfigurationError("Invalid MRP client configuration: " + "; ".join(result.errors))
        _client_config = config
    return _client_config


def reset_client_config() -> None:
    """Forget the cached configuration so the next lookup re-reads the environment."""
    global _client_config
    _client_config = None
