import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Repo root is always the parent of /backend (i.e., qscore/)
repo_root = Path(__file__).resolve().parent.parent

# Load local environment variables (do NOT commit secrets).
# Lets developers set API_KEY / DATABASE_URL in qscore/.env without exporting them in every terminal.
load_dotenv(repo_root / ".env", override=False)


def _get_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    app_name: str = "Ticket Quality Scores"
    env: str = os.getenv("APP_ENV", os.getenv("ENV", "local"))

    # Boundary auth: a single shared key checked on every /api/v1 request.
    api_key: str = os.getenv("API_KEY", "dev-api-key")
    api_key_header: str = os.getenv("API_KEY_HEADER", "X-API-KEY")

    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Ratings store (read-only from this service's point of view)
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./database.db")

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Only creates missing tables; never inserts or rewrites rows.
    create_schema_on_startup: bool = _get_bool("CREATE_SCHEMA_ON_STARTUP", "true")


settings = Settings()
