import ipaddress
import logging
import re

from starlette.datastructures import URL

from corsrelay.exceptions import InvalidURLException

logger = logging.getLogger("corsrelay")

# Printable ASCII that may not appear unescaped anywhere in a URL
UNSAFE_URL_CHARS = set('<>"{}|\\^`')

BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
HOST_LABEL = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")


def is_valid_hostname(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname)
        return True
    except ValueError:
        pass
    labels = hostname[:-1].split(".") if hostname.endswith(".") else hostname.split(".")
    return all(HOST_LABEL.match(label) for label in labels)


def is_valid_url(url: str) -> bool:
    """Absolute URL check: a scheme and a well-formed host.

    The characters must all be printable ASCII allowed by RFC 3986 and every
    percent sign must start a two digit hex escape. No scheme allow-list.
    """
    if not url:
        return False
    if any(not (0x20 < ord(c) < 0x7f) or c in UNSAFE_URL_CHARS for c in url):
        return False
    if BAD_PERCENT_ESCAPE.search(url):
        return False
    try:
        parsed = URL(url)
        # raises ValueError on a non-numeric port
        parsed.port
    except ValueError:
        return False
    if not parsed.scheme or not parsed.hostname:
        return False
    return is_valid_hostname(parsed.hostname)


def validate_url(url: str, correlation_id: str = None) -> str:
    if not is_valid_url(url):
        logger.info("Rejected invalid URL", extra={"correlation_id": correlation_id, "url": url})
        raise InvalidURLException()
    return url


def path_extension(url: str) -> str:
    """Lowercased extension of the last path segment, without the dot."""
    path = URL(url).path.rstrip("/")
    basename = path.rsplit("/", 1)[-1]
    if "." not in basename:
        return ""
    return basename.rsplit(".", 1)[-1].lower()
