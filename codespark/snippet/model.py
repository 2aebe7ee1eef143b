"""Pydantic models for snippets, libraries and user preferences."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

SnippetId = str
LibraryId = str
TagName = str

_MODEL_CONFIG = ConfigDict(
    populate_by_name=True,
    extra="ignore",
    alias_generator=to_camel,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class LibraryCategory(str, Enum):
    PERSONAL = "PERSONAL"
    TEAM = "TEAM"
    PROJECT = "PROJECT"


class Snippet(BaseModel):
    """A reusable text fragment stored in a library."""

    id: SnippetId
    title: str
    body: str
    tags: list[TagName] = Field(default_factory=list)
    shortcut: str | None = None
    description: str | None = None
    language: str | None = None
    is_favorite: bool = False
    usage_count: int = Field(0, ge=0)
    last_used_at: datetime | None = None
    library_id: LibraryId
    created_at: datetime
    updated_at: datetime

    model_config = _MODEL_CONFIG

    @field_validator("created_at", "updated_at", "last_used_at")
    @classmethod
    def _normalize_timestamp(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        return as_utc(value)


class SnippetLibrary(BaseModel):
    id: LibraryId
    name: str
    description: str = ""
    category: LibraryCategory = LibraryCategory.PERSONAL
    is_read_only: bool = False

    model_config = _MODEL_CONFIG


class SnippetPatch(BaseModel):
    """Partial update of a snippet.

    Only fields present in ``model_fields_set`` are applied. An explicit
    ``None`` (or a blank string) clears ``shortcut``, ``description`` and
    ``language``; on the remaining fields it leaves the stored value alone.
    """

    title: str | None = None
    body: str | None = None
    tags: list[TagName] | None = None
    shortcut: str | None = None
    description: str | None = None
    language: str | None = None
    is_favorite: bool | None = None
    library_id: LibraryId | None = None

    model_config = _MODEL_CONFIG

    def changes(self) -> dict[str, Any]:
        """Return the fields that were explicitly provided."""
        return {name: getattr(self, name) for name in self.model_fields_set}


Theme = Literal["light", "dark", "system"]


def default_command_palette_shortcut() -> str:
    if sys.platform == "darwin":
        return "Cmd+Enter"
    return "Ctrl+Enter"


class UserPreferences(BaseModel):
    default_library_id: LibraryId | None = None
    theme: Theme = "system"
    global_shortcut: str | None = None
    command_palette_shortcut: str | None = Field(default_factory=default_command_palette_shortcut)
    data_directory: str | None = None

    model_config = _MODEL_CONFIG


def default_preferences() -> UserPreferences:
    return UserPreferences(
        default_library_id=None,
        theme="system",
        global_shortcut=None,
        command_palette_shortcut=default_command_palette_shortcut(),
        data_directory=None,
    )


__all__ = [
    "LibraryCategory",
    "LibraryId",
    "Snippet",
    "SnippetId",
    "SnippetLibrary",
    "SnippetPatch",
    "TagName",
    "Theme",
    "UserPreferences",
    "as_utc",
    "default_command_palette_shortcut",
    "default_preferences",
    "utc_now",
]
