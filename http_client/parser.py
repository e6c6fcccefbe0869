"""Response parsing.

The parser reads a response off a :class:`~http_client.transport.Connection`
in four states::

    STATUS_LINE -> HEADERS -> BODY -> DONE

The status code is classified as soon as the status line is read. A 4xx or
5xx code ends parsing right there and the remaining headers and body are left
unread on the connection; the caller gets a :class:`ParseResult` carrying only
the code and is expected to close the connection.

Chunked bodies are decoded line by line. The declared chunk size acts as a
budget that every line read consumes by its length, and the next size line is
expected once the budget is used up. This is not a byte-exact chunk decoder:
chunks whose data spans several lines, or whose lines carry meaningful leading
or trailing whitespace, decode differently from a strict implementation.
"""

import logging
import string
from enum import StrEnum
from typing import Protocol

from .classifier import Outcome, ParseResult, classify
from .exceptions import ConnectionError
from .models import Response

logger = logging.getLogger(__name__)

HEADER_SEPARATOR = ": "
CHUNKED = "chunked"

_HEX_DIGITS = frozenset(string.hexdigits)


class LineReader(Protocol):
    def read_line(self) -> bytes: ...

    def read_until_close(self) -> bytes: ...


class ParserState(StrEnum):
    STATUS_LINE = "status_line"
    HEADERS = "headers"
    BODY = "body"
    DONE = "done"


def parse_chunk_size(line: bytes) -> int:
    """Read a chunk-size line as hexadecimal, skipping non-hex characters.

    An empty or digit-less line reads as 0.
    """
    digits = "".join(c for c in line.decode("latin-1") if c in _HEX_DIGITS)
    return int(digits, 16) if digits else 0


def decode_chunked(conn: LineReader) -> bytes:
    body = bytearray()
    remaining: int | None = None
    while True:
        raw = conn.read_line()
        if not raw:
            break
        line = raw.strip()
        if remaining is None:
            remaining = parse_chunk_size(line)
            logger.debug(f"Chunk size {remaining}")
            if remaining == 0:
                break
            continue
        remaining -= len(line)
        if remaining <= 0:
            remaining = None
        body += line
    return bytes(body)


def _decode_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class ResponseParser:
    def __init__(self, conn: LineReader):
        self._conn = conn
        self.state = ParserState.STATUS_LINE
        self._protocol = ""
        self._status_code = ""
        self._reason_phrase = ""
        self._headers: dict[str, str] = {}
        self._body = ""

    def parse(self) -> ParseResult:
        outcome = self._read_status_line()
        if outcome is not Outcome.SUCCESS:
            return ParseResult(outcome=outcome, status_code=self._status_code)

        self._read_headers()
        self._read_body()

        response = Response(
            status_code=self._status_code,
            reason_phrase=self._reason_phrase,
            headers=self._headers,
            body=self._body,
            protocol=self._protocol,
        )
        return ParseResult(outcome=outcome, status_code=self._status_code, response=response)

    def _read_status_line(self) -> Outcome:
        line = _decode_text(self._conn.read_line()).strip()
        if not line:
            raise ConnectionError("Connection closed before a status line was received.")

        # at most two splits so a multi-word reason phrase stays whole
        parts = line.split(" ", 2)
        parts += [""] * (3 - len(parts))
        self._protocol, self._status_code, self._reason_phrase = parts
        logger.debug(f"Status line: {line}")

        outcome = classify(self._status_code)
        self.state = ParserState.HEADERS if outcome is Outcome.SUCCESS else ParserState.DONE
        return outcome

    def _read_headers(self) -> None:
        while True:
            raw = self._conn.read_line()
            if not raw:
                break
            line = _decode_text(raw).strip()
            if line == "":
                break
            name, _, value = line.partition(HEADER_SEPARATOR)
            self._headers[name] = value
        self.state = ParserState.BODY

    def _read_body(self) -> None:
        if self._header("Transfer-Encoding") == CHUNKED:
            data = decode_chunked(self._conn)
        else:
            data = self._conn.read_until_close()
        self._body = _decode_text(data)
        self.state = ParserState.DONE

    def _header(self, name: str) -> str:
        lowered = name.lower()
        for key, value in self._headers.items():
            if key.lower() == lowered:
                return value
        return ""


def parse_response(conn: LineReader) -> ParseResult:
    return ResponseParser(conn).parse()
