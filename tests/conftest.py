"""Shared fixtures for the MRP client test suite."""

from __future__ import annotations

from typing import List

import pytest

from mrp_client.config import ClientConfig, reset_client_config
from mrp_client.session import SessionStore
from tests.helpers import API_URL, RecordingTokenSource


@pytest.fixture(autouse=True)
def clean_client_config(monkeypatch: pytest.MonkeyPatch):
    """Reset cached configuration and clear MRP_* variables between tests."""
    reset_client_config()
    for name in ("MRP_API_URL", "MRP_ACCESS_TOKEN", "MRP_HTTP_TIMEOUT", "MRP_PUBLIC_ENDPOINTS", "MRP_UPLOAD_HOSTS"):
        monkeypatch.delenv(name, raising=False)
    yield
    reset_client_config()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_url=API_URL)


@pytest.fixture
def token_source() -> RecordingTokenSource:
    return RecordingTokenSource()


@pytest.fixture
def navigations() -> List[str]:
    return []


@pytest.fixture
def session_store(navigations: List[str]) -> SessionStore:
    return SessionStore(navigator=navigations.append)
