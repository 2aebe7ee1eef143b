"""JSON-file backed user preferences."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from ..snippet.model import UserPreferences, default_preferences
from .file_store import write_text_atomic

logger = logging.getLogger("codespark")

DEFAULT_FILE_NAME = "preferences.json"

_ALIASES = {name: info.alias or name for name, info in UserPreferences.model_fields.items()}


class FilePreferencesGateway:
    """Preferences stored as one JSON object.

    Missing or null keys fall back to :func:`default_preferences`; an
    unreadable file yields the defaults without touching the disk.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._cache: UserPreferences | None = None

    async def get_preferences(self) -> UserPreferences | None:
        if self._cache is not None:
            return self._cache.model_copy()

        defaults = default_preferences()
        if not self.path.exists():
            return defaults

        try:
            parsed = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(parsed, dict):
                raise ValueError("preferences document must be a JSON object")
            merged = defaults.model_dump(by_alias=True)
            merged.update(
                {_ALIASES.get(key, key): value for key, value in parsed.items() if value is not None}
            )
            preferences = UserPreferences.model_validate(merged)
        except (OSError, ValueError, ValidationError) as exc:
            logger.error("Failed to read preferences store %s: %s", self.path, exc)
            return defaults

        self._cache = preferences
        return preferences.model_copy()

    async def save_preferences(self, preferences: UserPreferences) -> None:
        write_text_atomic(self.path, json.dumps(preferences.model_dump(mode="json", by_alias=True), indent=2))
        self._cache = preferences.model_copy()


__all__ = ["DEFAULT_FILE_NAME", "FilePreferencesGateway"]
