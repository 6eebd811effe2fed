import pytest

from corsrelay.config import ConfigManager
from corsrelay.constants import DEFAULT_USER_AGENT
from corsrelay.exceptions import ConfigurationException


def test_defaults(config):
    assert config.verify_upstream_tls is False
    assert config.IMAGE_FETCH_TIMEOUT_SECS == 30.0
    assert config.IMAGE_MAX_REDIRECTS == 5
    assert config.IMAGE_USER_AGENT == DEFAULT_USER_AGENT
    assert config.TEXT_FETCH_TIMEOUT_SECS == 60.0


def test_env_overrides(config, monkeypatch):
    monkeypatch.setenv("VERIFY_UPSTREAM_TLS", "yes")
    monkeypatch.setenv("IMAGE_FETCH_TIMEOUT_SECS", "12.5")
    monkeypatch.setenv("IMAGE_MAX_REDIRECTS", "2")
    monkeypatch.setenv("TEXT_FETCH_TIMEOUT_SECS", "5")

    config = ConfigManager()
    assert config.verify_upstream_tls is True
    assert config.IMAGE_FETCH_TIMEOUT_SECS == 12.5
    assert config.IMAGE_MAX_REDIRECTS == 2
    assert config.TEXT_FETCH_TIMEOUT_SECS == 5.0


def test_invalid_bool(config, monkeypatch):
    monkeypatch.setenv("VERIFY_UPSTREAM_TLS", "maybe")
    with pytest.raises(ConfigurationException):
        ConfigManager()


def test_invalid_number(config, monkeypatch):
    monkeypatch.setenv("IMAGE_MAX_REDIRECTS", "five")
    with pytest.raises(ConfigurationException):
        ConfigManager()
