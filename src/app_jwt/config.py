from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app_jwt.errors import ConfigurationError

# GitHub rejects App JWTs whose exp is more than 10 minutes in the future.
MAX_LIFETIME_SECONDS = 600


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    github_private_key_path: Path
    github_app_id: str
    github_api_url: str = "https://api.github.com"

    jwt_clock_skew: int = Field(default=60, ge=0)
    jwt_lifetime: int = Field(default=MAX_LIFETIME_SECONDS, gt=0, le=MAX_LIFETIME_SECONDS)

    @field_validator("github_app_id")
    @classmethod
    def app_id_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("github_private_key_path", mode="before")
    @classmethod
    def key_path_not_blank(cls, value):
        if isinstance(value, str) and not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("github_api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        name = ".".join(str(loc) for loc in item["loc"]).upper()
        parts.append(f"{name}: {item['msg']}")
    return "; ".join(parts)


def get_settings(**overrides) -> Settings:
    """Build settings from the environment, letting non-None overrides win.

    Raises ConfigurationError instead of pydantic's ValidationError so callers
    only deal with this package's error types.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {_describe(e)}") from e
