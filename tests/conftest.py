import io
import socket
import threading

import pytest


class FakeConnection:
    """Scripted stand-in for transport.Connection."""

    def __init__(self, response: bytes = b""):
        self._stream = io.BytesIO(response)
        self.written = bytearray()
        self.closed = False

    def write(self, data: bytes) -> None:
        self.written += data

    def read_line(self) -> bytes:
        return self._stream.readline()

    def read_until_close(self) -> bytes:
        return self._stream.read()

    def close(self) -> None:
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *_args):
        self.close()


@pytest.fixture
def fake_connection(monkeypatch):
    """Patch the client's connector to hand out a FakeConnection.

    Returns a factory taking the raw response bytes; the created connection
    records the params and timeout it was opened with.
    """

    def factory(response: bytes) -> FakeConnection:
        conn = FakeConnection(response)

        def open_connection(params, timeout):
            conn.params = params
            conn.timeout = timeout
            return conn

        monkeypatch.setattr("http_client.client.open_connection", open_connection)
        return conn

    return factory


def _serve_echo(server: socket.socket) -> None:
    conn, _ = server.accept()
    with conn, conn.makefile("rb") as reader:
        content_length = 0
        while True:
            line = reader.readline()
            if line in (b"\r\n", b""):
                break
            name, _, value = line.decode("ascii").partition(": ")
            if name.lower() == "content-length":
                content_length = int(value.strip())
        # body plus the blank line the client sends after it
        body = reader.read(content_length + 4)[:content_length]
        conn.sendall(b"HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\n\r\n" + body)
        conn.shutdown(socket.SHUT_WR)


@pytest.fixture
def echo_server():
    """Loopback server answering one request with its own body."""
    server = socket.create_server(("127.0.0.1", 0))
    thread = threading.Thread(target=_serve_echo, args=(server,), daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.getsockname()[1]}/echo"
    thread.join(timeout=5)
    server.close()
