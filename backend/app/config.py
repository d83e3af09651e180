"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - max_forms_per_plan only feeds the bundled in-memory quota; a hosting product
      supplies its own quota collaborator
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Editor
    field_id_prefix: str = "field"
    max_forms_per_plan: int = 5

    @field_validator("field_id_prefix")
    @classmethod
    def strip_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("_")
        if not v:
            raise ValueError("field_id_prefix cannot be empty")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
