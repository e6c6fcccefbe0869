import logging
import time
from dataclasses import replace
from typing import Any

from .classifier import raise_for_outcome
from .config import http_client_config
from .ext_logging import trace_id_generator, trace_id_var
from .models import Body, Request, Response, build_request, encode_json
from .negotiation import APPLICATION_JSON, negotiate
from .parser import parse_response
from .serializer import write_request
from .transport import open_connection, resolve
from .types import Middleware

logger = logging.getLogger(__name__)


class HttpClient:
    """One-shot HTTP/1.1 client.

    Every call opens its own connection, writes the request, reads the whole
    response and closes the connection again, whatever the outcome.
    """

    def __init__(
        self,
        middlewares: list[Middleware] | None = None,
        connect_timeout: float | None = None,
        default_headers: dict[str, str] | None = None,
    ):
        self._middlewares = middlewares or []
        self._connect_timeout = (
            connect_timeout if connect_timeout is not None else http_client_config.CONNECT_TIMEOUT
        )
        self._default_headers = default_headers or {}

    def _merge_headers(self, headers: dict[str, str] | None) -> dict[str, str]:
        merged = dict(self._default_headers)
        if headers:
            merged.update(headers)
        return merged

    def send(
        self,
        method: str,
        url: str,
        body: Body = "",
        headers: dict[str, str] | None = None,
    ) -> Response:
        request = build_request(method, url, body, self._merge_headers(headers))
        token = trace_id_var.set(trace_id_generator())
        try:
            return self._execute(request)
        finally:
            trace_id_var.reset(token)

    def send_json(
        self,
        method: str,
        url: str,
        body_object: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        body = encode_json({} if body_object is None else body_object)
        headers = {
            **(headers or {}),
            "Content-type": APPLICATION_JSON,
            "Accept": APPLICATION_JSON,
        }
        return self.send(method, url, body, headers)

    def _execute(self, request: Request) -> Response:
        if self._middlewares:
            return self._execute_with_middleware(request, 0)
        return self._do_request(request)

    def _execute_with_middleware(self, request: Request, index: int) -> Response:
        if index >= len(self._middlewares):
            return self._do_request(request)

        middleware = self._middlewares[index]

        def next_fn(req: Request) -> Response:
            return self._execute_with_middleware(req, index + 1)

        return middleware(request, next_fn)

    def _do_request(self, request: Request) -> Response:
        params = resolve(request)
        start_time = time.time()

        with open_connection(params, self._connect_timeout) as conn:
            write_request(conn, request, params)
            result = parse_response(conn)

        response = negotiate(raise_for_outcome(result))
        latency_ms = int((time.time() - start_time) * 1000)
        logger.debug(f"{request.method} {request.url} -> {result.status_code} in {latency_ms}ms")

        return replace(response, latency_ms=latency_ms, request=request)

    def get(self, url: str, **kwargs: Any) -> Response:
        return self.send("GET", url, **kwargs)

    def head(self, url: str, **kwargs: Any) -> Response:
        return self.send("HEAD", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> Response:
        return self.send("POST", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> Response:
        return self.send("PUT", url, **kwargs)

    def patch(self, url: str, **kwargs: Any) -> Response:
        return self.send("PATCH", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> Response:
        return self.send("DELETE", url, **kwargs)

    def options(self, url: str, **kwargs: Any) -> Response:
        return self.send("OPTIONS", url, **kwargs)
