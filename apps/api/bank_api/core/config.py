"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    jwt_secret: SecretStr | None = None
    token_ttl_seconds: int = Field(default=900, gt=0)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    storage_backend: Literal["memory", "sqlite"] = "memory"
    database_path: str = "bank.db"
    admin_api_key: SecretStr | None = None
    seed_demo_account: bool = False

    model_config = SettingsConfigDict(env_prefix="BANK_API_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
