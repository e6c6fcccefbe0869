import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime

from .config import HttpClientConfig, http_client_config

# bound by HttpClient.send for the duration of one call
trace_id_var: ContextVar[str | None] = ContextVar("trace_id", default=None)


def trace_id_generator() -> str:
    return uuid.uuid4().hex


class TraceIdFilter(logging.Filter):
    def filter(self, record):
        record.trace_id = trace_id_var.get() or "-"
        return True


def init_logging(config: HttpClientConfig | None = None) -> None:
    """Route log records to stdout (and ``LOG_FILE`` when set) with trace ids.

    For applications embedding the client; the library never configures
    logging on its own.
    """
    config = config or http_client_config

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))
    for handler in handlers:
        handler.addFilter(TraceIdFilter())

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFORMAT,
        handlers=handlers,
        force=True,
    )

    if config.LOG_TZ:
        import pytz

        timezone = pytz.timezone(config.LOG_TZ)
        for handler in handlers:
            handler.formatter.converter = lambda seconds: datetime.fromtimestamp(seconds, tz=timezone).timetuple()
