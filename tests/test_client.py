import json

import pytest

from http_client.client import HttpClient
from http_client.exceptions import (
    ClientError,
    ConnectionError,
    InvalidRequest,
    JsonConversionError,
    ServerError,
)
from http_client.ext_logging import trace_id_var

OK_TEXT = b"HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\n\r\n"
OK_JSON = b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\n\r\n"


class TestSend:
    def test_simple_get(self, fake_connection):
        conn = fake_connection(OK_TEXT + b"hi there")
        response = HttpClient().send("GET", "http://example.com/get?foo1=bar1")

        assert response.status_code == "200"
        assert response.reason_phrase == "OK"
        assert response.body == "hi there"
        assert response.headers == {"Content-Type": "text/plain"}
        assert response.request.url == "http://example.com/get?foo1=bar1"
        assert bytes(conn.written).startswith(b"GET /get?foo1=bar1 HTTP/1.1\r\nHost: example.com\r\n")
        assert conn.closed is True

    def test_post_wire_bytes(self, fake_connection):
        conn = fake_connection(OK_TEXT + b"hello")
        response = HttpClient().send("POST", "http://example.com/echo", "hello")

        assert response.body == "hello"
        assert bytes(conn.written) == (
            b"POST /echo HTTP/1.1\r\n"
            b"Host: example.com\r\n"
            b"Content-length: 5\r\n"
            b"Connection: close\r\n\r\n"
            b"hello\r\n\r\n"
        )

    def test_uses_connect_timeout(self, fake_connection):
        conn = fake_connection(OK_TEXT)
        HttpClient(connect_timeout=5.0).send("GET", "https://example.com:8443/")
        assert conn.timeout == 5.0
        assert conn.params.port == 443
        assert conn.params.secure is True

    def test_default_connect_timeout(self, fake_connection):
        conn = fake_connection(OK_TEXT)
        HttpClient().send("GET", "http://example.com/")
        assert conn.timeout == 30.0

    def test_explicit_zero_connect_timeout_kept(self, fake_connection):
        conn = fake_connection(OK_TEXT)
        HttpClient(connect_timeout=0).send("GET", "http://example.com/")
        assert conn.timeout == 0

    def test_default_headers(self, fake_connection):
        conn = fake_connection(OK_TEXT)
        client = HttpClient(default_headers={"X-Api-Key": "secret", "X-Request-Id": "0"})
        client.send("GET", "http://example.com/", headers={"X-Request-Id": "123"})
        written = bytes(conn.written)
        assert b"X-Api-Key: secret\r\n" in written
        assert b"X-Request-Id: 123\r\n" in written
        assert b"X-Request-Id: 0\r\n" not in written

    def test_json_response_decoded(self, fake_connection):
        fake_connection(OK_JSON + b'{"a":1}')
        response = HttpClient().send("GET", "http://example.com/")
        assert response.body == {"a": 1}

    def test_invalid_json_response(self, fake_connection):
        conn = fake_connection(OK_JSON + b'{"a":')
        with pytest.raises(JsonConversionError) as exc_info:
            HttpClient().send("GET", "http://example.com/")
        assert exc_info.value.raw == '{"a":'
        assert conn.closed is True

    def test_client_error(self, fake_connection):
        conn = fake_connection(b"HTTP/1.1 404 Not Found\r\nContent-Type: text/plain\r\n\r\nmissing")
        with pytest.raises(ClientError) as exc_info:
            HttpClient().send("GET", "http://example.com/status/404")
        assert exc_info.value.status_code == "404"
        assert conn.closed is True

    def test_server_error(self, fake_connection):
        conn = fake_connection(b"HTTP/1.1 500 Internal Server Error\r\n\r\n")
        with pytest.raises(ServerError) as exc_info:
            HttpClient().send("GET", "http://example.com/status/500")
        assert exc_info.value.status_code == "500"
        assert conn.closed is True

    def test_peer_closed_without_answer(self, fake_connection):
        conn = fake_connection(b"")
        with pytest.raises(ConnectionError):
            HttpClient().send("GET", "http://example.com/")
        assert conn.closed is True

    def test_invalid_request_before_io(self, fake_connection):
        conn = fake_connection(OK_TEXT)
        with pytest.raises(InvalidRequest):
            HttpClient().send("get", "http://example.com/")
        with pytest.raises(InvalidRequest):
            HttpClient().send("GET", "///")
        assert conn.written == b""

    def test_trace_id_bound_during_call(self, fake_connection):
        fake_connection(OK_TEXT)
        seen = []

        def middleware(request, next):
            seen.append(trace_id_var.get())
            return next(request)

        HttpClient(middlewares=[middleware]).send("GET", "http://example.com/")
        assert seen[0] is not None
        assert trace_id_var.get() is None


class TestSendJson:
    def test_wire_body_and_headers(self, fake_connection):
        conn = fake_connection(OK_JSON + b'{"json":{"foo1":"bar1","foo2":"bar2"}}')
        payload = {"foo1": "bar1", "foo2": "bar2"}
        response = HttpClient().send_json("POST", "http://example.com/post", payload)

        written = bytes(conn.written)
        body = b'{"foo1":"bar1","foo2":"bar2"}'
        assert b"Content-type: application/json\r\n" in written
        assert b"Accept: application/json\r\n" in written
        assert f"Content-length: {len(body)}\r\n".encode() in written
        assert written.endswith(b"\r\n\r\n" + body + b"\r\n\r\n")
        assert response.body["json"] == payload

    def test_overrides_caller_content_headers(self, fake_connection):
        conn = fake_connection(OK_JSON + b"{}")
        HttpClient().send_json(
            "PUT",
            "http://example.com/",
            {"a": 1},
            headers={"Content-type": "text/html", "Accept": "text/html", "foo": "bar"},
        )
        written = bytes(conn.written)
        assert b"text/html" not in written
        assert b"foo: bar\r\n" in written

    def test_empty_body_object(self, fake_connection):
        conn = fake_connection(OK_JSON + b"{}")
        HttpClient().send_json("POST", "http://example.com/")
        assert bytes(conn.written).endswith(b"\r\n\r\n{}\r\n\r\n")


class TestShortcuts:
    @pytest.mark.parametrize("name", ["get", "head", "post", "put", "patch", "delete", "options"])
    def test_method_shortcuts(self, fake_connection, name):
        conn = fake_connection(OK_TEXT)
        response = getattr(HttpClient(), name)("http://example.com/")
        assert response.request.method == name.upper()
        assert bytes(conn.written).startswith(f"{name.upper()} / HTTP/1.1".encode())


class TestLoopback:
    def test_round_trip_echo(self, echo_server):
        response = HttpClient().send("POST", echo_server, "hello")
        assert response.status_code == "200"
        assert response.reason_phrase == "OK"
        assert response.body == "hello"

    def test_round_trip_json(self, echo_server):
        response = HttpClient().send(
            "POST",
            echo_server,
            json.dumps({"a": 1}),
            {"Content-type": "application/json"},
        )
        # echo server always answers text/plain
        assert response.body == '{"a": 1}'
