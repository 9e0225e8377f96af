from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Upstream providers; empty means the built-in exchangerate-api -> frankfurter chain
    PROVIDER_ENDPOINTS: list[str] = Field(default_factory=list)
    CONNECT_TIMEOUT: float = Field(default=5.0, gt=0)
    READ_TIMEOUT: float = Field(default=5.0, gt=0)

    CACHE_TTL_SECONDS: int = Field(default=3600, gt=0)
    DEFAULT_BASE_CURRENCY: str = 'USD'
    RATE_SOURCE: Literal['remote', 'static'] = 'remote'

    # Application
    APP_NAME: str = 'Currency Converter API'
    DEBUG: bool = False
    HOST: str = '0.0.0.0'
    PORT: int = 8000

    # Logging
    LOG_LEVEL: str = 'INFO'
    LOG_DIRECTORY: str = 'logs'
    LOG_TO_FILE: bool = True

    model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
    return Settings()
