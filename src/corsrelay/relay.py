import functools
import logging
import time
import uuid

import anyio
import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from corsrelay.config import ConfigManager
from corsrelay.constants import (
    DEFAULT_IMAGE_CONTENT_TYPE,
    IMAGE_MIME_TYPES,
    IMAGE_RELAY_PATH,
    META_PATH,
    RELAY_ERROR_HEADER,
    TEXT_CONTENT_TYPE,
    TEXT_MAX_REDIRECTS,
    TEXT_RELAY_PATH,
)
from corsrelay.cors import IMAGE_CORS_POLICY, META_CORS_POLICY, TEXT_CORS_POLICY, CorsPolicy
from corsrelay.datastructures import FetchOptions, UpstreamResponse
from corsrelay.encoding import normalize_to_utf8
from corsrelay.exceptions import (
    FetchException,
    RelayException,
    UpstreamException,
)
from corsrelay.logging import setup_logging
from corsrelay.validation import path_extension, validate_url
from corsrelay.version import VERSION


setup_logging()

logger = logging.getLogger("corsrelay")


def relay_route(cors_policy: CorsPolicy):
    def wrapper(func):
        @functools.wraps(func)
        async def wrapped(*args, **kwargs):
            request: Request = kwargs.get("request") or args[-1]
            correlation_id = str(uuid.uuid4())
            request.state.correlation_id = correlation_id

            if cors_policy.is_preflight(request.method):
                response = Response(status_code=200)
                cors_policy.apply(response.headers)
                return response

            logger.info(
                "Incoming relay request",
                extra={
                    "correlation_id": correlation_id,
                    "method": request.method,
                    "url": str(request.url),
                    "client_host": request.client.host if request.client else "unknown",
                }
            )
            start_time = time.time()

            try:
                response = await func(*args, **kwargs)
                elapsed_time = time.time() - start_time
                logger.info(
                    "Relay request processed successfully",
                    extra={
                        "correlation_id": correlation_id,
                        "status_code": response.status_code,
                        "content_type": response.headers.get("Content-Type", "unknown"),
                        "elapsed_time": f"{elapsed_time:.3f}s",
                    }
                )
            except RelayException as rex:
                elapsed_time = time.time() - start_time
                logger.warning(
                    "RelayException encountered",
                    extra={
                        "correlation_id": correlation_id,
                        "exception": rex.__class__.__name__,
                        "details": rex.message,
                        "status_code": rex.status_code,
                        "elapsed_time": f"{elapsed_time:.3f}s",
                    }
                )
                response = PlainTextResponse(
                    content=rex.message,
                    status_code=rex.status_code,
                    headers={RELAY_ERROR_HEADER: rex.source},
                )
            except Exception as exc:
                elapsed_time = time.time() - start_time
                logger.error(
                    "Unexpected error occurred",
                    exc_info=True,
                    extra={
                        "correlation_id": correlation_id,
                        "exception": str(exc),
                        "elapsed_time": f"{elapsed_time:.3f}s",
                    }
                )
                response = PlainTextResponse(
                    content="Internal Server Error",
                    status_code=500,
                    headers={RELAY_ERROR_HEADER: "relay"},
                )

            cors_policy.apply(response.headers)
            return response
        return wrapped
    return wrapper


def resolve_image_content_type(url: str, upstream_content_type: str | None) -> str:
    if upstream_content_type:
        return upstream_content_type
    return IMAGE_MIME_TYPES.get(path_extension(url), DEFAULT_IMAGE_CONTENT_TYPE)


class Relay:
    def __init__(self, config: ConfigManager | None = None):
        self.config = config or ConfigManager()
        if not self.config.verify_upstream_tls:
            logger.warning("Upstream TLS certificate verification is disabled for the image relay")

    def image_fetch_options(self) -> FetchOptions:
        return FetchOptions(
            timeout=self.config.IMAGE_FETCH_TIMEOUT_SECS,
            follow_redirects=True,
            max_redirects=self.config.IMAGE_MAX_REDIRECTS,
            verify=self.config.verify_upstream_tls,
            headers={"User-Agent": self.config.IMAGE_USER_AGENT},
        )

    def text_fetch_options(self) -> FetchOptions:
        return FetchOptions(
            timeout=self.config.TEXT_FETCH_TIMEOUT_SECS,
            follow_redirects=True,
            max_redirects=TEXT_MAX_REDIRECTS,
            verify=True,
        )

    async def fetch(self, url: str, options: FetchOptions, correlation_id: str = None) -> UpstreamResponse:
        logger.debug("Fetching upstream", extra={"correlation_id": correlation_id, "url": url})
        # Hard deadline on the whole transfer; httpx timeouts are per phase.
        try:
            with anyio.fail_after(options.timeout):
                async with httpx.AsyncClient(**options.client_kwargs()) as client:
                    response = await client.get(url)
        except TimeoutError as e:
            raise TimeoutError(f"Operation timed out after {options.timeout:g} seconds") from e

        content_type = response.headers.get("content-type") or None
        return UpstreamResponse(
            status_code=response.status_code,
            body=response.content,
            content_type=content_type,
        )

    @relay_route(IMAGE_CORS_POLICY)
    async def _image_route(self, request: Request):
        correlation_id = request.state.correlation_id
        url = validate_url(request.query_params.get("url", ""), correlation_id=correlation_id)

        try:
            upstream = await self.fetch(url, self.image_fetch_options(), correlation_id=correlation_id)
        except (httpx.RequestError, httpx.InvalidURL, TimeoutError) as e:
            raise FetchException(f"Error fetching image: {str(e) or e.__class__.__name__}") from e

        if upstream.status_code != 200:
            raise UpstreamException(upstream.status_code)

        content_type = resolve_image_content_type(url, upstream.content_type)
        return Response(
            content=upstream.body,
            status_code=200,
            headers={"Content-Type": content_type},
        )

    @relay_route(TEXT_CORS_POLICY)
    async def _text_route(self, request: Request):
        correlation_id = request.state.correlation_id
        url = validate_url(request.query_params.get("url", ""), correlation_id=correlation_id)

        try:
            upstream = await self.fetch(url, self.text_fetch_options(), correlation_id=correlation_id)
        except (httpx.RequestError, httpx.InvalidURL, TimeoutError) as e:
            raise FetchException(f"Error fetching URL: {str(e) or e.__class__.__name__}") from e

        if upstream.status_code != 200:
            logger.warning(
                "Relaying non-200 upstream body",
                extra={"correlation_id": correlation_id, "upstream_status": upstream.status_code},
            )

        body, upstream.detected_encoding = normalize_to_utf8(upstream.body)
        logger.debug(
            "Normalized upstream encoding",
            extra={"correlation_id": correlation_id, "encoding": upstream.detected_encoding},
        )
        return Response(
            content=body,
            status_code=200,
            headers={"Content-Type": TEXT_CONTENT_TYPE},
        )

    @relay_route(META_CORS_POLICY)
    async def _meta_route(self, request: Request):
        return JSONResponse(
            content={
                "version": VERSION,
                "endpoints": {
                    "image": IMAGE_RELAY_PATH,
                    "text": TEXT_RELAY_PATH,
                },
                "verify_upstream_tls": self.config.verify_upstream_tls,
            },
            status_code=200,
        )

    def to_fastapi(self, app: FastAPI):
        app.api_route(META_PATH, methods=["GET"])(self._meta_route)
        app.api_route(IMAGE_RELAY_PATH, methods=["GET", "OPTIONS"])(self._image_route)
        app.api_route(TEXT_RELAY_PATH, methods=["GET"])(self._text_route)
