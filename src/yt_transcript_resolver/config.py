"""Configuration via environment variables."""

from collections.abc import Callable
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class Transport(str, Enum):
    STDIO = "stdio"
    STREAMABLE_HTTP = "streamable-http"


class CacheOptions(BaseModel):
    enabled: bool = True
    max_age: float = Field(default=3600.0, ge=0)  # seconds
    max_size: int = Field(default=256, ge=1)


class LoggerOptions(BaseModel):
    enabled: bool = False
    namespace: str = "youtube-transcript"
    # sink(kind, message, data) -> True when it handled the record itself.
    sink: Callable[[str, str, Any], bool] | None = Field(default=None, exclude=True)


class GatewayOptions(BaseModel):
    enabled: bool = False
    base_urls: list[str] = []
    mode: Literal["before", "after"] = "after"
    timeout: float = 60.0
    api_key: str = ""


class NetworkOptions(BaseModel):
    timeout: float = 10.0
    cookie: str = ""
    proxy: str | None = None
    accept_language: str = "en-US"


class Settings(BaseSettings):
    model_config = {"env_prefix": "YT_TRANSCRIPT_", "env_nested_delimiter": "__"}

    cache: CacheOptions = CacheOptions()
    logger: LoggerOptions = LoggerOptions()
    gateway: GatewayOptions = GatewayOptions()
    network: NetworkOptions = NetworkOptions()
    default_languages: list[str] = ["en"]
    transport: Transport = Transport.STDIO
