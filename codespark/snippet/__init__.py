"""Snippet domain: entities, validation rules, errors and ports."""

from .errors import (
    ClipboardCopyError,
    CodesparkError,
    LibraryNotFoundError,
    MissingLibraryError,
    ReadOnlyLibraryViolationError,
    SnippetNotFoundError,
    SnippetValidationError,
    ValidationIssue,
)
from .model import (
    LibraryCategory,
    LibraryId,
    Snippet,
    SnippetId,
    SnippetLibrary,
    SnippetPatch,
    TagName,
    UserPreferences,
    as_utc,
    default_preferences,
    utc_now,
)
from .ports import ClipboardGateway, LibraryGateway, PreferencesGateway, SnippetGateway, SnippetStore
from .validation import apply_snippet_update, construct_snippet

__all__ = [
    "ClipboardCopyError",
    "ClipboardGateway",
    "CodesparkError",
    "LibraryCategory",
    "LibraryGateway",
    "LibraryId",
    "LibraryNotFoundError",
    "MissingLibraryError",
    "PreferencesGateway",
    "ReadOnlyLibraryViolationError",
    "Snippet",
    "SnippetGateway",
    "SnippetStore",
    "SnippetId",
    "SnippetLibrary",
    "SnippetNotFoundError",
    "SnippetPatch",
    "SnippetValidationError",
    "TagName",
    "UserPreferences",
    "ValidationIssue",
    "apply_snippet_update",
    "as_utc",
    "construct_snippet",
    "default_preferences",
    "utc_now",
]
