# config.py
import logging
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Settings from environment variables (DB_USER, DB_PORT, ...) or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, env_ignore_empty=True, extra="ignore",
    )

    # Database
    db_user: str = "postgres"
    db_pass: str = "postgres"
    db_host: str = "db"
    db_port: int = 5432
    db_name: str = "postgres"
    db_dialect: str = "postgresql"
    # Full SQLAlchemy URL, overrides the DB_* values
    database_url: Optional[str] = None

    # Observability
    log_level: str = "INFO"

    @property
    def sqlalchemy_url(self):
        if self.database_url:
            return self.database_url
        if self.db_dialect.startswith("sqlite"):
            # DB_NAME is the file path for sqlite
            return URL.create(self.db_dialect, database=self.db_name)
        return URL.create(
            self.db_dialect,
            username=self.db_user,
            password=self.db_pass,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level="INFO"):
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
