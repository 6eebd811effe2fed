import os

from corsrelay.constants import DEFAULT_USER_AGENT
from corsrelay.exceptions import ConfigurationException

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off", ""}


def _env_bool(key, default: bool) -> bool:
    value = os.environ.get(key)
    if value is None:
        return default
    value = value.strip().lower()
    if value in TRUTHY:
        return True
    if value in FALSY:
        return False
    raise ConfigurationException(f"Invalid boolean for {key}: '{value}'")


def _env_number(key, default, cast=float):
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        return default
    try:
        return cast(value)
    except ValueError as e:
        raise ConfigurationException(f"Invalid number for {key}: '{value}'") from e


class ConfigManager:
    def __init__(self):
        # Upstream certificates are not verified unless explicitly enabled.
        self.VERIFY_UPSTREAM_TLS: bool = _env_bool("VERIFY_UPSTREAM_TLS", False)
        self.IMAGE_FETCH_TIMEOUT_SECS: float = _env_number("IMAGE_FETCH_TIMEOUT_SECS", 30.0)
        self.IMAGE_MAX_REDIRECTS: int = _env_number("IMAGE_MAX_REDIRECTS", 5, cast=int)
        self.IMAGE_USER_AGENT: str = os.environ.get("IMAGE_USER_AGENT", DEFAULT_USER_AGENT)
        self.TEXT_FETCH_TIMEOUT_SECS: float = _env_number("TEXT_FETCH_TIMEOUT_SECS", 60.0)

    @property
    def verify_upstream_tls(self) -> bool:
        return self.VERIFY_UPSTREAM_TLS
