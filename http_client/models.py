import json
from dataclasses import dataclass, field, replace
from typing import Any

from .exceptions import InvalidRequest
from .methods import HttpMethod, is_valid_method
from .urls import parse_url

PROTOCOL = "HTTP/1.1"

Body = str | dict | list


def encode_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


@dataclass(frozen=True)
class Request:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Body = ""
    protocol: str = PROTOCOL

    def with_header(self, name: str, value: str) -> "Request":
        return replace(self, headers={**self.headers, name: value})

    def with_headers(self, **headers: str) -> "Request":
        return replace(self, headers={**self.headers, **headers})

    def with_body(self, body: Body) -> "Request":
        return replace(self, body=body)

    def serialized_body(self) -> str:
        if isinstance(self.body, str):
            return self.body
        return encode_json(self.body)


@dataclass(frozen=True)
class Response:
    status_code: str
    reason_phrase: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = ""
    protocol: str = PROTOCOL
    latency_ms: int = 0
    request: Request | None = None

    @property
    def ok(self) -> bool:
        return self.status_code[:1] in ("2", "3")

    def get_header(self, name: str, default: str = "") -> str:
        if name in self.headers:
            return self.headers[name]
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default

    def with_header(self, name: str, value: str) -> "Response":
        return replace(self, headers={**self.headers, name: value})

    def with_body(self, body: Any) -> "Response":
        return replace(self, body=body)

    def text(self) -> str:
        if isinstance(self.body, str):
            return self.body
        return encode_json(self.body)


def build_request(
    method: str,
    url: str,
    body: Body = "",
    headers: dict[str, str] | None = None,
) -> Request:
    """Validate the parts of a request and assemble them.

    The method is matched case-sensitively against :class:`HttpMethod`. The
    URL is lower-cased before it is parsed and stored; it must yield a host
    or a non-trivial path. Headers are inserted in order, a repeated name
    keeps the last value.
    """
    if not is_valid_method(method):
        raise InvalidRequest(f"Invalid HTTP method given: {method}")

    url = url.lower()
    if not parse_url(url).is_usable:
        raise InvalidRequest(f"Invalid URL given: {url}")

    request = Request(method=HttpMethod(method).value, url=url, body=body)
    for name, value in (headers or {}).items():
        request = request.with_header(name, value)
    return request
