from dataclasses import dataclass
from enum import StrEnum

from .exceptions import ClientError, ServerError
from .models import Response


class Outcome(StrEnum):
    SUCCESS = "success"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"


def classify(status_code: str) -> Outcome:
    leading = status_code[:1]
    if leading == "4":
        return Outcome.CLIENT_ERROR
    if leading == "5":
        return Outcome.SERVER_ERROR
    return Outcome.SUCCESS


@dataclass(frozen=True)
class ParseResult:
    outcome: Outcome
    status_code: str
    # None unless outcome is SUCCESS, error responses are not drained
    response: Response | None = None

    @property
    def is_error(self) -> bool:
        return self.outcome is not Outcome.SUCCESS


def raise_for_outcome(result: ParseResult) -> Response:
    """Return the parsed response, or raise the error its status code maps to."""
    if result.outcome is Outcome.CLIENT_ERROR:
        raise ClientError(result.status_code)
    if result.outcome is Outcome.SERVER_ERROR:
        raise ServerError(result.status_code)
    assert result.response is not None
    return result.response
