class HttpClientError(Exception):
    detail: str = "HTTP client error."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.detail
        super().__init__(self.detail)


# =============================================================================
# Request errors (raised before any I/O)
# =============================================================================
class InvalidRequest(HttpClientError, ValueError):
    detail = "Invalid request."


# =============================================================================
# Transport errors
# =============================================================================
class ConnectionError(HttpClientError):
    detail = "Connection failed."

    def __init__(self, message: str | None = None, errno: int | None = None):
        super().__init__(message)
        self.message = self.detail
        self.errno = errno


# =============================================================================
# Response status errors
# =============================================================================
class HttpStatusError(HttpClientError):
    def __init__(self, status_code: str):
        self.status_code = status_code
        super().__init__(f"Server responded with {status_code} status code.")


class ClientError(HttpStatusError):
    """4xx response."""


class ServerError(HttpStatusError):
    """5xx response."""


# =============================================================================
# Content negotiation errors
# =============================================================================
class JsonConversionError(HttpClientError, ValueError):
    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Error decoding JSON:\r\n{raw}")
