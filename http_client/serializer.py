import logging

from .models import Request
from .transport import Connection, ConnectionParams

logger = logging.getLogger(__name__)

NEW_LINE = "\r\n"


def render_request(request: Request, params: ConnectionParams) -> bytes:
    """Render ``request`` as the exact HTTP/1.1 byte stream sent on the wire."""
    body = request.serialized_body().encode("utf-8")

    lines = [
        f"{request.method} {params.target} {request.protocol}",
        f"Host: {params.host_header}",
    ]
    lines.extend(f"{name}: {value}" for name, value in request.headers.items())
    lines.append(f"Content-length: {len(body)}")
    lines.append("Connection: close")

    head = NEW_LINE.join(lines) + NEW_LINE + NEW_LINE
    return head.encode("utf-8") + body + (NEW_LINE + NEW_LINE).encode("ascii")


def write_request(conn: Connection, request: Request, params: ConnectionParams) -> None:
    data = render_request(request, params)
    logger.debug(f"{request.method} {params.target} {request.protocol} ({len(data)} bytes)")
    conn.write(data)
