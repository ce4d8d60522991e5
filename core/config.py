"""Process-level settings loaded from the environment.

Follows the frozen-dataclass configuration pattern used by the catalog:
- Type safety and sensible defaults
- Immutable once loaded (frozen=True)
- Overrides from environment variables (and a local .env file)
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the API process.

    Usage::

        settings = Settings.from_env()
        database = Database(settings)
    """

    database_url: str = "sqlite+aiosqlite:///./bookstore.db"
    pool_size: int = 20
    max_overflow: int = 10
    echo_sql: bool = False
    create_tables: bool = True

    environment: str = "production"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables.

        Example: DATABASE_URL=postgresql+asyncpg://user:pw@db:5432/bookstore
        """
        load_dotenv()

        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            pool_size=int(os.getenv("DB_POOL_SIZE", "20")),
            max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "10")),
            echo_sql=_env_bool("DB_ECHO", "false"),
            create_tables=_env_bool("DB_CREATE_TABLES", "true"),
            environment=os.getenv("ENVIRONMENT", "production").lower(),
            cors_origins=_env_list("CORS_ORIGINS", "*"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
        )
