# lobby/config.py
import logging
from typing import Optional

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Reported name for each field when it fails validation
ENV_NAMES = {
    "supabase_url": "SUPABASE_URL",
    "supabase_key": "SUPABASE_KEY",
    "jwt_secret": "SUPABASE_JWT_SECRET",
    "log_level": "LOG_LEVEL",
    "host": "HOST",
    "port": "PORT",
}


class ConfigError(RuntimeError):
    """Raised at startup when required configuration is missing or malformed"""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(str_strip_whitespace=True, populate_by_name=True)

    supabase_url: str = Field(
        min_length=1,
        validation_alias=AliasChoices("SUPABASE_URL", "PUBLIC_SUPABASE_URL"),
    )
    supabase_key: str = Field(
        min_length=1,
        validation_alias=AliasChoices("SUPABASE_KEY", "SUPABASE_SERVICE_ROLE_KEY", "PUBLIC_SUPABASE_ANON_KEY"),
    )
    jwt_secret: Optional[str] = Field(default=None, validation_alias="SUPABASE_JWT_SECRET")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")

    @field_validator("jwt_secret")
    @classmethod
    def blank_secret_is_unset(cls, v):
        return v or None

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v):
        return v.upper()


def load_settings() -> Settings:
    """
    Read settings from the environment.

    Raises ConfigError naming every bad or missing variable, so a bad deploy
    fails before any client or app object is built.
    """
    try:
        return Settings()
    except ValidationError as e:
        problems = []
        for error in e.errors():
            name = str(error["loc"][0]) if error["loc"] else "settings"
            problems.append(f"{ENV_NAMES.get(name, name.upper())}: {error['msg']}")
        raise ConfigError(f"Invalid Supabase environment: {'; '.join(problems)}") from e


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
