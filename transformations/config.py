from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    SERVICE_PORT: int = 8080
    LOG_JSON: bool = True
    # Which transformation this process runs: "sentiment" or "archive"
    TRANSFORMATION: Literal["sentiment", "archive"] = "sentiment"
    # If set, outbound events are sent there instead of replied
    K_SINK: AnyHttpUrl | None = None
    SINK_TIMEOUT: float = 10.0
    # Upstream adapter selection: "aws" or "memory"
    ADAPTER: Literal["aws", "memory"] = "aws"
    BUCKET: str | None = None
    LANGUAGE: str = "en"
    NAMESPACE: str = ""
    AWS_REGION: str | None = None
    AWS_ENDPOINT_URL: str | None = None

    @field_validator("K_SINK", "BUCKET", "AWS_REGION", "AWS_ENDPOINT_URL", mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
