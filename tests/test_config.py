"""Test settings loading."""
from catalog.config import CatalogConfig
from core.config import Settings
from core.filters import SortOrder


def test_defaults(monkeypatch):
    for name in ("DATABASE_URL", "ENVIRONMENT", "CORS_ORIGINS", "PORT", "DB_ECHO"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.database_url == "sqlite+aiosqlite:///./bookstore.db"
    assert settings.environment == "production"
    assert not settings.is_development
    assert settings.cors_origins == ["*"]
    assert settings.port == 3000
    assert settings.echo_sql is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db:5432/books")
    monkeypatch.setenv("ENVIRONMENT", "Development")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, http://admin.example.com")
    monkeypatch.setenv("DB_POOL_SIZE", "5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.database_url.startswith("postgresql+asyncpg://")
    assert settings.is_development
    assert settings.cors_origins == ["http://localhost:5173", "http://admin.example.com"]
    assert settings.pool_size == 5
    assert settings.log_level == "DEBUG"


def test_catalog_config_is_fixed():
    config = CatalogConfig.default()
    assert config.page_size == 6
    assert config.default_sort is SortOrder.DESCENDING
