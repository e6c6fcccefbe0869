"""HTTP Client module."""

from .client import HttpClient
from .config import HttpClientConfig, http_client_config
from .exceptions import (
    ClientError,
    ConnectionError,
    HttpClientError,
    HttpStatusError,
    InvalidRequest,
    JsonConversionError,
    ServerError,
)
from .ext_logging import init_logging
from .methods import HttpMethod
from .middleware import headers_middleware, logging_middleware
from .models import Request, Response, build_request
from .types import Middleware, NextFn

__all__ = [
    "HttpClient",
    "HttpClientConfig",
    "http_client_config",
    "HttpMethod",
    "Request",
    "Response",
    "build_request",
    "Middleware",
    "NextFn",
    "HttpClientError",
    "InvalidRequest",
    "ConnectionError",
    "HttpStatusError",
    "ClientError",
    "ServerError",
    "JsonConversionError",
    "logging_middleware",
    "headers_middleware",
    "init_logging",
]
