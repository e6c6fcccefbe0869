import logging

from .exceptions import HttpClientError
from .models import Request, Response
from .types import Middleware, NextFn


def logging_middleware(logger: logging.Logger | None = None) -> Middleware:
    log = logger or logging.getLogger(__name__)

    def middleware(request: Request, next: NextFn) -> Response:
        log.info(f"-> {request.method} {request.url}")
        try:
            response = next(request)
        except HttpClientError as e:
            log.warning(f"<- {type(e).__name__}: {e.detail}")
            raise
        log.info(f"<- {response.status_code} ({response.latency_ms}ms)")
        return response

    return middleware


def headers_middleware(**headers: str) -> Middleware:
    def middleware(request: Request, next: NextFn) -> Response:
        return next(request.with_headers(**headers))

    return middleware
