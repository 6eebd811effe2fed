import pytest

from corsrelay.config import ConfigManager


@pytest.fixture
def config(monkeypatch):
    for key in (
        "VERIFY_UPSTREAM_TLS",
        "IMAGE_FETCH_TIMEOUT_SECS",
        "IMAGE_MAX_REDIRECTS",
        "IMAGE_USER_AGENT",
        "TEXT_FETCH_TIMEOUT_SECS",
    ):
        monkeypatch.delenv(key, raising=False)
    return ConfigManager()


@pytest.fixture
def anyio_backend():
    return 'asyncio'
