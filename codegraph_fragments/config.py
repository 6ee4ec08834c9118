from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FragmentSettings(BaseSettings):
    """Runtime settings, read from CODEGRAPH_FRAGMENTS_* variables or .env"""

    model_config = SettingsConfigDict(
        env_prefix="CODEGRAPH_FRAGMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"
    structured_logs: bool = False

    # CLI stdin handling
    stdin_notice_delay: float = Field(default=0.5, ge=0)
    stdin_read_limit: int = Field(default=1_000_000, gt=0)


@lru_cache
def get_settings() -> FragmentSettings:
    return FragmentSettings()
