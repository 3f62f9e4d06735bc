# dashboard/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Everything has a default so the API boots against a local SQLite file.

    Common overrides (.env):
      - DATABASE_URL (e.g. mysql+pymysql://root:pw@localhost/auth_db)
      - WEBHOOK_URL  (external relay; when unset, events go to the
                      in-process relay mounted at /webhook and /sse)
      - DEVICE_STRATEGY ("counting" | "insert")
      - GOOGLE_CLIENT_ID (only used by the client helpers)
    """

    PROJECT_NAME: str = "Dashboard Backend"

    # The browser client calls root paths (/checkUser, /logs, ...)
    API_PREFIX: str = ""

    # DB config
    DATABASE_URL: str = "sqlite:///./dashboard.db"
    DB_ECHO: bool = False

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    # Event emission
    WEBHOOKS_ENABLED: bool = True
    WEBHOOK_URL: str | None = None
    WEBHOOK_TIMEOUT: float | None = None

    # Device registration behaviour
    DEVICE_STRATEGY: Literal["counting", "insert"] = "counting"

    RECENT_LOGS_LIMIT: int = 50

    # Client-side OAuth (Google implicit grant)
    GOOGLE_CLIENT_ID: str = ""
    OAUTH_REDIRECT_URI: str = "http://127.0.0.1:5501/dashboard.html"
    API_BASE_URL: str = "http://localhost:3001"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
