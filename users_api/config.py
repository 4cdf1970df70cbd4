"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - DATABASE_URL has no default: Settings() fails if it is absent
    - get_settings() is cached (lru_cache) — single instance per process
    - Routes receive settings through Depends(get_settings), never a module global

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Pool defaults fixed at 10 connections / 5s acquire timeout
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    server_address: str = "127.0.0.1:3000"

    # Database
    database_url: str

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Plain postgres URLs need the asyncpg driver spelled out."""
        if isinstance(v, str):
            for prefix in ("postgresql://", "postgres://"):
                if v.startswith(prefix):
                    return v.replace(prefix, "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 10
    database_pool_timeout: float = 5.0

    # Behavior
    user_not_found_status_404: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def listen_address(self) -> tuple[str, int]:
        """Split SERVER_ADDRESS into (host, port). Accepts [v6]:port."""
        host, sep, port = self.server_address.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError(
                f"SERVER_ADDRESS must be host:port, got {self.server_address!r}",
            )
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        port_number = int(port)
        if not 0 <= port_number <= 65535:
            raise ValueError(f"SERVER_ADDRESS port out of range: {port_number}")
        return host, port_number


@lru_cache
def get_settings() -> Settings:
    return Settings()
