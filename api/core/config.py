"""
Configuration helpers for the backoffice API.

Settings are read from environment variables once and cached so that routers,
services and stores do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "db"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_dir: Path
    cors_origins: tuple[str, ...]
    log_level: str
    host: str
    port: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None) -> tuple[str, ...]:
        items = [item.strip() for item in (value or "").split(",")]
        return tuple(item for item in items if item)

    data_dir = os.getenv("DATA_DIR")
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        cors_origins=_csv(os.getenv("CORS_ORIGINS", "*")) or ("*",),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "8080"), 8080),
    )
