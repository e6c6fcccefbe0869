from enum import StrEnum


class HttpMethod(StrEnum):
    """Supported HTTP request methods."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"


ALL_METHODS: frozenset[str] = frozenset(m.value for m in HttpMethod)


def is_valid_method(method: str) -> bool:
    # case-sensitive, "get" is not a method
    return isinstance(method, str) and method in ALL_METHODS
