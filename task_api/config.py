# task_api/config.py
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

from task_api.logger import LOG_LEVELS

# -------------------------------------------------
# Load environment variables
# -------------------------------------------------
load_dotenv()

# Fixed pool size, only applied to PostgreSQL backends.
DB_POOL_MIN_CONN = 1
DB_POOL_MAX_CONN = 5


class ConfigurationError(RuntimeError):
    """Raised when the process cannot start with the given environment."""


# -------------------------------------------------
# Settings
# -------------------------------------------------
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database
    DATABASE_URL: str

    # App
    APP_HOST: str = "0.0.0.0"
    PORT: int = 3000
    SERVICE_NAME: str = "task-service"
    CORS_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    @field_validator("LOG_LEVEL")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level

    # -------------------------------------------------
    # DB helpers
    # -------------------------------------------------
    @property
    def database_url(self) -> str:
        """
        Async URL handed to `databases`.
        Accepts the short `postgres://` scheme and rewrites it.
        """
        url = self.DATABASE_URL.strip()
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        return url

    @property
    def sync_database_url(self) -> str:
        # Sync engine (used ONLY for create_all)
        url = self.database_url
        for driver in ("+asyncpg", "+aiosqlite", "+aiopg"):
            url = url.replace(driver, "")
        return url

    @property
    def is_postgres(self) -> bool:
        return self.database_url.startswith("postgresql")

    def pool_options(self) -> dict:
        if not self.is_postgres:
            return {}
        return {"min_size": DB_POOL_MIN_CONN, "max_size": DB_POOL_MAX_CONN}

    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


def load_settings(**overrides) -> Settings:
    """
    Read the environment once. Fails fast when DATABASE_URL is missing.
    """
    try:
        settings = Settings(**overrides)
    except ValidationError as exc:
        missing = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
        raise ConfigurationError(
            f"Invalid configuration, check: {', '.join(missing)}"
        ) from exc

    if not settings.DATABASE_URL.strip():
        raise ConfigurationError("DATABASE_URL is not set in .env")
    return settings
