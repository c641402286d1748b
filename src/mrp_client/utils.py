"""URL helpers shared by the transports and the auth client."""

from __future__ import annotations

from mrp_client.constants import GRAPHQL_PATH
from mrp_client.exceptions import ConfigurationError


def normalize_url(url: str, *, strip_trailing_slash: bool = True) -> str:
    """Normalize URL by removing trailing slashes.

    Examples:
        >>> normalize_url("http://localhost:8081/mrp/")
        'http://localhost:8081/mrp'
        >>> normalize_url("http://localhost:8081/mrp/", strip_trailing_slash=False)
        'http://localhost:8081/mrp/'
    """
    if not url:
        return url

    if strip_trailing_slash:
        return url.rstrip("/")

    return url


def graphql_endpoint(base_url: str) -> str:
    """Construct the GraphQL endpoint URL from the API base URL.

    Trailing slashes on the base are dropped so ``.../mrp`` and ``.../mrp/``
    resolve to the same endpoint.

    Examples:
        >>> graphql_endpoint("http://localhost:8081/mrp/")
        'http://localhost:8081/mrp/graphql'
        >>> graphql_endpoint("http://localhost:8081/mrp")
        'http://localhost:8081/mrp/graphql'
    """
    normalized = normalize_url((base_url or "").strip())
    if not normalized:
        raise ConfigurationError("API base URL is required to build the GraphQL endpoint")
    return f"{normalized}{GRAPHQL_PATH}"


def api_url(base_url: str, path: str) -> str:
    """Join a REST path onto the API base URL."""
    normalized = normalize_url((base_url or "").strip())
    if not normalized:
        raise ConfigurationError("API base URL is required")
    return f"{normalized}/{path.lstrip('/')}"
