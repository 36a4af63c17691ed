from functools import lru_cache

from pydantic_settings import BaseSettings

DEFAULT_DATABASE_PASSWORD = "password"


class Settings(BaseSettings):
    PROJECT_NAME: str = "newsletter"
    ENVIRONMENT: str = "development"

    # Listener
    APPLICATION_HOST: str = "127.0.0.1"
    APPLICATION_PORT: int = 8000

    # Database
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_USERNAME: str = "postgres"
    DATABASE_PASSWORD: str = DEFAULT_DATABASE_PASSWORD
    DATABASE_NAME: str = "newsletter"
    DATABASE_URL: str = ""  # Full URL, wins over the individual fields when set

    LOG_LEVEL: str = "INFO"
    LOGFIRE_TOKEN: str = ""
    SENTRY_DSN: str = ""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Refuse to boot production against the stock credentials
        if self.ENVIRONMENT == "production" and not self.DATABASE_URL:
            if self.DATABASE_PASSWORD == DEFAULT_DATABASE_PASSWORD:
                raise ValueError(
                    "DATABASE_PASSWORD must be set in production environment."
                )

    @property
    def connection_string_without_db(self) -> str:
        return (
            f"postgresql+asyncpg://{self.DATABASE_USERNAME}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}"
        )

    @property
    def connection_string(self) -> str:
        """Async SQLAlchemy URL of the subscriptions database."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"{self.connection_string_without_db}/{self.DATABASE_NAME}"

    class Config:
        case_sensitive = True
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
