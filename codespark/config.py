"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger("codespark")

STORE_FILE = "file"
STORE_MEMORY = "memory"
STORE_REDIS = "redis"
STORE_BACKENDS = (STORE_FILE, STORE_MEMORY, STORE_REDIS)


def default_data_dir() -> Path:
    return Path.home() / ".local" / "share" / "codespark"


@dataclass(slots=True)
class Settings:
    """Runtime configuration for the CLI and the HTTP API."""

    data_dir: Path
    store_backend: str
    redis_url: str
    redis_prefix: str
    default_library_id: str | None
    search_limit: int
    log_level: str

    @property
    def preferences_path(self) -> Path:
        return self.data_dir / "preferences.json"

    @classmethod
    def from_env(cls) -> "Settings":
        def _int_env(name: str, default: int) -> int:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return int(raw)
            except ValueError:
                logger.warning("Invalid integer for %s: %s", name, raw)
                return default

        backend = os.getenv("CODESPARK_STORE", STORE_FILE).strip().lower()
        if backend not in STORE_BACKENDS:
            logger.warning("Unknown CODESPARK_STORE %r, using %s", backend, STORE_FILE)
            backend = STORE_FILE

        data_dir = os.getenv("CODESPARK_DATA_DIR")
        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else default_data_dir(),
            store_backend=backend,
            redis_url=os.getenv("REDIS_URL", "redis://127.0.0.1:6379/0"),
            redis_prefix=os.getenv("CODESPARK_REDIS_PREFIX", "codespark"),
            default_library_id=os.getenv("CODESPARK_DEFAULT_LIBRARY", "personal") or None,
            search_limit=_int_env("CODESPARK_SEARCH_LIMIT", 20),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


__all__ = ["STORE_BACKENDS", "STORE_FILE", "STORE_MEMORY", "STORE_REDIS", "Settings", "default_data_dir"]
