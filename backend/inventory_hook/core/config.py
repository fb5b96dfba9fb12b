from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    stripe_api_key: str
    stripe_webhook_secret: str
    strapi_api_url: str
    strapi_token: str = Field(
        validation_alias=AliasChoices("strapi_token", "strapi_api_token")
    )
    stripe_port: int = 8084
    webhook_tolerance: int = 300  # seconds
    line_items_limit: int = 100
    max_body_bytes: int = 1_048_576  # 1 MiB
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore", "populate_by_name": True}

    @field_validator("strapi_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
