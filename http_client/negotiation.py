import json

from .exceptions import JsonConversionError
from .models import Response

APPLICATION_JSON = "application/json"


def is_json(response: Response) -> bool:
    return APPLICATION_JSON in response.get_header("Content-Type")


def negotiate(response: Response) -> Response:
    """Decode a JSON body when the response declares a JSON content type.

    The literal ``null`` decodes to ``None``. Anything that fails to decode
    raises :class:`JsonConversionError` with the raw text attached.
    """
    if not is_json(response):
        return response

    raw = response.body
    try:
        decoded = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise JsonConversionError(raw) from e
    return response.with_body(decoded)
