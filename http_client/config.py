from pydantic import Field, PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(trace_id)s - %(message)s"


class HttpClientConfig(BaseSettings):
    CONNECT_TIMEOUT: PositiveFloat = Field(
        description="Seconds allowed for opening a connection; reads are not time-bounded",
        default=30.0,
    )

    LOG_LEVEL: str = Field(description="Level applied by init_logging", default="INFO")

    LOG_FORMAT: str = Field(description="Record format, may use %(trace_id)s", default=DEFAULT_LOG_FORMAT)

    LOG_DATEFORMAT: str | None = Field(description="strftime format for %(asctime)s", default=None)

    LOG_FILE: str | None = Field(description="Also append records to this file", default=None)

    LOG_TZ: str | None = Field(description="Timezone name for timestamps, e.g. 'Europe/Berlin'", default=None)

    model_config = SettingsConfigDict(
        env_prefix="HTTP_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


http_client_config: HttpClientConfig = HttpClientConfig()
