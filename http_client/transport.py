import logging
import socket
import ssl
from dataclasses import dataclass
from typing import Any

from .exceptions import ConnectionError
from .models import Request
from .urls import parse_url

logger = logging.getLogger(__name__)

DEFAULT_PORT = 80
SECURE_PORT = 443
SECURE_SCHEME = "https"


@dataclass(frozen=True)
class ConnectionParams:
    scheme: str
    host: str
    port: int
    path: str
    query: str
    secure: bool = False

    @property
    def host_header(self) -> str:
        # IPv6 literals keep their brackets in the Host header
        if ":" in self.host:
            return f"[{self.host}]"
        return self.host

    @property
    def target(self) -> str:
        """Path and query as they appear on the request line."""
        if self.query:
            return f"{self.path}?{self.query}"
        return self.path


def resolve(request: Request) -> ConnectionParams:
    parsed = parse_url(request.url)
    secure = parsed.scheme == SECURE_SCHEME
    # https always goes to 443, an explicit port in the URL is ignored
    port = SECURE_PORT if secure else (parsed.port or DEFAULT_PORT)
    return ConnectionParams(
        scheme=parsed.scheme,
        host=parsed.host,
        port=port,
        path=parsed.path or "/",
        query=parsed.query,
        secure=secure,
    )


class Connection:
    """Blocking stream over a connected socket, closed exactly once."""

    def __init__(self, sock: socket.socket):
        self._sock = sock
        self._reader = sock.makefile("rb")
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: bytes) -> None:
        try:
            self._sock.sendall(data)
        except OSError as e:
            raise ConnectionError(f"Write failed: {e}", errno=e.errno) from e

    def read_line(self) -> bytes:
        try:
            return self._reader.readline()
        except OSError as e:
            raise ConnectionError(f"Read failed: {e}", errno=e.errno) from e

    def read_until_close(self) -> bytes:
        try:
            return self._reader.read()
        except OSError as e:
            raise ConnectionError(f"Read failed: {e}", errno=e.errno) from e

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._reader.close()
        self._sock.close()
        logger.debug("Connection closed")

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *_args: Any) -> None:
        self.close()


def open_connection(params: ConnectionParams, timeout: float) -> Connection:
    try:
        sock = socket.create_connection((params.host, params.port), timeout=timeout)
    except OSError as e:
        raise ConnectionError(e.strerror or str(e), errno=e.errno) from e

    try:
        if params.secure:
            context = ssl.create_default_context()
            sock = context.wrap_socket(sock, server_hostname=params.host)
        # only the connect attempt is time-bounded
        sock.settimeout(None)
    except OSError as e:
        sock.close()
        raise ConnectionError(e.strerror or str(e), errno=e.errno) from e

    logger.debug(f"Connected to {params.host}:{params.port} (secure={params.secure})")
    return Connection(sock)
