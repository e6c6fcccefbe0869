from dataclasses import dataclass

import httpx

from .exceptions import InvalidRequest


@dataclass(frozen=True)
class ParsedUrl:
    scheme: str = ""
    host: str = ""
    port: int | None = None
    path: str = ""
    query: str = ""

    @property
    def is_usable(self) -> bool:
        return bool(self.host or self.path.strip("/"))


def parse_url(url: str) -> ParsedUrl:
    """Split a URL into its components.

    Percent-escapes in path and query are kept as written so the request line
    carries them verbatim. Raises ``InvalidRequest`` on malformed input.
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidRequest(f"Invalid URL given: {url}") from e

    path = parsed.raw_path.split(b"?", 1)[0]
    return ParsedUrl(
        scheme=parsed.scheme,
        host=parsed.host,
        port=parsed.port,
        path=path.decode("ascii"),
        query=parsed.query.decode("ascii"),
    )
