import logging

import pytest
from pydantic import ValidationError

from config import Settings, configure_logging, get_settings

DB_VARS = ["DB_USER", "DB_PASS", "DB_HOST", "DB_PORT", "DB_NAME", "DB_DIALECT", "DATABASE_URL", "LOG_LEVEL"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # Keep a developer's .env and shell variables out of the picture
    monkeypatch.chdir(tmp_path)
    for var in DB_VARS:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.db_port == 5432
        assert settings.log_level == "INFO"
        assert settings.sqlalchemy_url.render_as_string(hide_password=False) == (
            "postgresql://postgres:postgres@db:5432/postgres"
        )

    def test_reads_db_vars(self, monkeypatch):
        monkeypatch.setenv("DB_USER", "app")
        monkeypatch.setenv("DB_PASS", "p@ss")
        monkeypatch.setenv("DB_HOST", "localhost")
        monkeypatch.setenv("DB_PORT", "3306")
        monkeypatch.setenv("DB_NAME", "users")
        monkeypatch.setenv("DB_DIALECT", "mysql+pymysql")
        url = Settings().sqlalchemy_url
        assert url.drivername == "mysql+pymysql"
        assert url.username == "app"
        assert url.password == "p@ss"
        assert url.host == "localhost"
        assert url.port == 3306
        assert url.database == "users"

    def test_database_url_overrides(self, monkeypatch):
        monkeypatch.setenv("DB_HOST", "ignored")
        monkeypatch.setenv("DATABASE_URL", "sqlite:///users.db")
        assert Settings().sqlalchemy_url == "sqlite:///users.db"

    def test_sqlite_dialect_uses_name_as_path(self, monkeypatch):
        monkeypatch.setenv("DB_DIALECT", "sqlite")
        monkeypatch.setenv("DB_NAME", ":memory:")
        url = Settings().sqlalchemy_url
        assert url.drivername == "sqlite"
        assert url.database == ":memory:"
        assert url.host is None

    def test_dotenv_file_is_loaded(self, tmp_path):
        (tmp_path / ".env").write_text("DB_NAME=from_dotenv\nDB_PORT=6543\n")
        settings = Settings()
        assert settings.db_name == "from_dotenv"
        assert settings.db_port == 6543

    def test_empty_values_fall_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("DB_PORT", "")
        monkeypatch.setenv("DB_HOST", "")
        settings = Settings()
        assert settings.db_port == 5432
        assert settings.db_host == "db"
        assert settings.database_url is None

    def test_invalid_port(self, monkeypatch):
        monkeypatch.setenv("DB_PORT", "abc")
        with pytest.raises(ValidationError, match="db_port"):
            Settings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


def test_configure_logging_sets_level(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
    configure_logging("debug")
    assert calls["level"] == "DEBUG"
