RELAY_ERROR_HEADER = "X-Corsrelay-Error"

IMAGE_RELAY_PATH = "/image-proxy"
TEXT_RELAY_PATH = "/url-proxy"
META_PATH = "/_corsrelay/meta"

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

TEXT_MAX_REDIRECTS = 20

DEFAULT_IMAGE_CONTENT_TYPE = "image/jpeg"
TEXT_CONTENT_TYPE = "application/xml; charset=UTF-8"

IMAGE_MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "bmp": "image/bmp",
}
