"""Settings for CrossQuery."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class CrossQuerySettings(BaseSettings):
    """CrossQuery configuration settings."""

    LOG_LEVEL: str = "INFO"

    # Query evaluation
    QUERY_CACHE_COMPILED: bool = True
    # Reject capability and type mismatches at construction when types are known
    QUERY_STRICT_TYPES: bool = True

    # Export
    QUERY_DEFAULT_BACKEND: Literal["generic", "mongo", "sql"] = "generic"

    # Prefix for generated parameter names (p0, p1, ...)
    QUERY_PARAMETER_PREFIX: str = "p"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = CrossQuerySettings()
