"""Tests for environment-driven client configuration."""

from __future__ import annotations

import pytest

from mrp_client.config import ClientConfig, get_client_config, reset_client_config
from mrp_client.constants import DEFAULT_API_URL, DEFAULT_PUBLIC_ENDPOINTS, DEFAULT_UPLOAD_MARKERS
from mrp_client.exceptions import ConfigurationError


class TestFromEnvironment:
    def test_defaults(self):
        config = ClientConfig.from_environment()

        assert config.api_url == DEFAULT_API_URL
        assert config.timeout is None
        assert config.public_endpoints == DEFAULT_PUBLIC_ENDPOINTS
        assert config.upload_markers == DEFAULT_UPLOAD_MARKERS

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("MRP_API_URL", "https://erp.example.com/mrp/")
        monkeypatch.setenv("MRP_HTTP_TIMEOUT", "12.5")
        monkeypatch.setenv("MRP_PUBLIC_ENDPOINTS", "auth/login, health ,")
        monkeypatch.setenv("MRP_UPLOAD_HOSTS", "uploads.example.com")

        config = ClientConfig.from_environment()

        assert config.api_url == "https://erp.example.com/mrp/"
        assert config.timeout == 12.5
        assert config.public_endpoints == ("auth/login", "health")
        assert config.upload_markers == ("uploads.example.com",)

    def test_explicit_url_wins(self, monkeypatch):
        monkeypatch.setenv("MRP_API_URL", "https://erp.example.com/mrp/")

        config = ClientConfig.from_environment("http://override.test/")

        assert config.api_url == "http://override.test/"

    @pytest.mark.parametrize("raw", ["0", "-3", ""])
    def test_non_positive_timeout_means_none(self, monkeypatch, raw):
        monkeypatch.setenv("MRP_HTTP_TIMEOUT", raw)

        assert ClientConfig.from_environment().timeout is None

    def test_invalid_timeout(self, monkeypatch):
        monkeypatch.setenv("MRP_HTTP_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError, match="MRP_HTTP_TIMEOUT"):
            ClientConfig.from_environment()


class TestValidate:
    def test_valid_config(self):
        assert ClientConfig(api_url="http://localhost:8081/mrp/").validate().success is True

    @pytest.mark.parametrize(
        "api_url, message",
        [
            ("", "cannot be empty"),
            ("ftp://files.example.com/", "http://"),
            ("http://", "host"),
        ],
    )
    def test_invalid_url(self, api_url, message):
        result = ClientConfig(api_url=api_url).validate()

        assert result.success is False
        assert any(message in error for error in result.errors)

    def test_negative_timeout(self):
        result = ClientConfig(timeout=-1).validate()

        assert result.success is False


class TestSingleton:
    def test_cached_until_reset(self, monkeypatch):
        first = get_client_config()
        monkeypatch.setenv("MRP_API_URL", "https://erp.example.com/mrp/")

        assert get_client_config() is first

        reset_client_config()
        assert get_client_config().api_url == "https://erp.example.com/mrp/"

    def test_invalid_environment_raises(self, monkeypatch):
        monkeypatch.setenv("MRP_API_URL", "not-a-url")

        with pytest.raises(ConfigurationError, match="Invalid MRP client configuration"):
            get_client_config()
