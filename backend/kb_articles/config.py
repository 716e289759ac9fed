from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

from kb_articles.domain.entities import TITLE_MAX_LENGTH

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Knowledge Base Articles"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./kb_articles.db"

    # Article rules
    article_title_max_length: int = TITLE_MAX_LENGTH

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_validation: str = "INFO"       # ArticleValidator rejections (DEBUG to see them)

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
