"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PositiveInt = Annotated[int, Field(gt=0)]


class Settings(BaseSettings):
    """Environment-driven credential policy settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    password_min_length: Annotated[int, Field(ge=1, le=72)] = Field(
        default=8,
        validation_alias="PASSWORD_MIN_LENGTH",
    )
    bcrypt_rounds: Annotated[int, Field(ge=4, le=31)] = Field(
        default=12,
        validation_alias="BCRYPT_ROUNDS",
    )
    password_change_backdate_seconds: PositiveInt = Field(
        default=1,
        validation_alias="PASSWORD_CHANGE_BACKDATE_SECONDS",
    )
    reset_token_bytes: Annotated[int, Field(ge=32)] = Field(
        default=32,
        validation_alias="RESET_TOKEN_BYTES",
    )
    reset_token_ttl_seconds: PositiveInt = Field(
        default=600,
        validation_alias="RESET_TOKEN_TTL_SECONDS",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()
