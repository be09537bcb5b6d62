"""
Database configuration.

One PostgreSQL database (with the pgvector extension) holds documents,
sessions, pipeline logs and the category/prompt catalogs. POSTGRES_* env
vars; hosted databases usually need POSTGRES_SSLMODE=require.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from visual_rag.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = "postgres"
    db: str = Field(default="visual_rag", description="Database name")
    sslmode: str = Field(default="prefer", description="libpq sslmode (disable, prefer, require)")

    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    echo_sql: bool = False

    def _dsn(self, driver: str) -> str:
        return f"postgresql+{driver}://{self.user}:{self.password}@{self.host}:{self.port}/{self.db}"

    @property
    def database_url(self) -> str:
        """psycopg URL used by the schema bootstrap."""
        return f"{self._dsn('psycopg')}?sslmode={self.sslmode}"

    @property
    def async_database_url(self) -> str:
        """asyncpg URL; asyncpg takes ssl=require instead of sslmode."""
        suffix = "?ssl=require" if self.sslmode == "require" else ""
        return f"{self._dsn('asyncpg')}{suffix}"
