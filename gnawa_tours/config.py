"""Runtime configuration for the Gnawa Tours site."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    database_url: str | None
    database_timeout_seconds: int
    accept_bookings_without_backend: bool
    admin_api_key: str | None
    media_root: Path
    media_url_prefix: str
    max_upload_bytes: int
    log_level: str

    @property
    def backend_configured(self) -> bool:
        return bool(self.database_url)

    @classmethod
    def from_env(cls) -> "Settings":
        # An explicitly empty DATABASE_URL disables persistence entirely.
        database_url = os.getenv("DATABASE_URL", "sqlite:///./gnawa_tours.db").strip() or None
        return cls(
            database_url=database_url,
            database_timeout_seconds=_env_int("DATABASE_TIMEOUT_SECONDS", 10),
            accept_bookings_without_backend=_env_flag("ACCEPT_BOOKINGS_WITHOUT_BACKEND", True),
            admin_api_key=os.getenv("ADMIN_API_KEY") or None,
            media_root=Path(os.getenv("MEDIA_ROOT") or BASE_DIR / "media_storage"),
            media_url_prefix=(os.getenv("MEDIA_URL_PREFIX") or "/media").rstrip("/"),
            max_upload_bytes=_env_int("MAX_UPLOAD_BYTES", 25 * 1024 * 1024),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )


settings = Settings.from_env()


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
