from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentVariables(BaseSettings):
    """Simple primitive values loaded from environment variables and .env files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    config_file: str = Field(default="config.yaml", validation_alias="CONFIG_FILE")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
