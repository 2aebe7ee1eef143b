"""Snippet construction and update rules.

Every snippet that reaches a store goes through :func:`construct_snippet`,
which checks all rules and reports every violation at once.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, List, Sequence

from .errors import SnippetValidationError, ValidationIssue
from .model import LibraryId, Snippet, SnippetId, SnippetPatch, TagName, as_utc

# Patch fields where an explicit None (or blank string) clears the stored value.
NULLABLE_PATCH_FIELDS = frozenset({"shortcut", "description", "language"})


def construct_snippet(
    *,
    id: SnippetId,
    title: str | None,
    body: str | None,
    library_id: LibraryId,
    created_at: Any,
    updated_at: Any,
    tags: Sequence[TagName] | None = None,
    shortcut: str | None = None,
    description: str | None = None,
    language: str | None = None,
    is_favorite: bool = False,
    usage_count: int = 0,
    last_used_at: datetime | None = None,
) -> Snippet:
    """Validate the given fields and build a :class:`Snippet`.

    Raises :class:`SnippetValidationError` listing every violated rule.
    """
    issues: List[ValidationIssue] = []
    clean_title = (title or "").strip()
    clean_body = (body or "").strip()

    if not clean_title:
        issues.append(ValidationIssue("TITLE_EMPTY", "title", "title must not be empty"))

    if not clean_body:
        issues.append(ValidationIssue("BODY_EMPTY", "body", "body must not be empty"))

    tag_list = list(tags or [])
    duplicates = find_duplicate_tags(tag_list)
    if duplicates:
        issues.append(
            ValidationIssue(
                "TAGS_DUPLICATED",
                "tags",
                f"tags contain duplicates: {', '.join(duplicates)}",
            )
        )

    if not isinstance(created_at, datetime) or not isinstance(updated_at, datetime):
        issues.append(
            ValidationIssue(
                "INVALID_TIMESTAMP",
                "timestamps",
                "createdAt and updatedAt must be valid datetime objects",
            )
        )
    elif _timestamp(updated_at) < _timestamp(created_at):
        issues.append(
            ValidationIssue(
                "UPDATED_AT_BEFORE_CREATED_AT",
                "timestamps",
                "updatedAt must be greater than or equal to createdAt",
            )
        )

    if issues:
        raise SnippetValidationError(issues)

    return Snippet(
        id=id,
        title=clean_title,
        body=clean_body,
        tags=tag_list,
        shortcut=_clean_optional(shortcut),
        description=_clean_optional(description),
        language=_clean_optional(language),
        is_favorite=is_favorite,
        usage_count=usage_count,
        last_used_at=last_used_at,
        library_id=library_id,
        created_at=created_at,
        updated_at=updated_at,
    )


def apply_snippet_update(
    snippet: Snippet,
    patch: SnippetPatch,
    *,
    updated_at: datetime,
) -> Snippet:
    """Merge ``patch`` onto ``snippet`` and re-validate the result.

    ``created_at`` and the usage statistics are carried over untouched.
    """
    merged = snippet.model_dump()
    for name, value in patch.changes().items():
        if name in NULLABLE_PATCH_FIELDS:
            merged[name] = _clean_optional(value)
        elif value is not None:
            merged[name] = value

    return construct_snippet(
        id=snippet.id,
        title=merged["title"],
        body=merged["body"],
        library_id=merged["library_id"],
        created_at=snippet.created_at,
        updated_at=updated_at,
        tags=merged["tags"],
        shortcut=merged["shortcut"],
        description=merged["description"],
        language=merged["language"],
        is_favorite=merged["is_favorite"],
        usage_count=snippet.usage_count,
        last_used_at=snippet.last_used_at,
    )


def find_duplicate_tags(tags: Iterable[TagName]) -> List[TagName]:
    seen: set[TagName] = set()
    duplicates: List[TagName] = []
    for tag in tags:
        if tag in seen:
            if tag not in duplicates:
                duplicates.append(tag)
            continue
        seen.add(tag)
    return duplicates


def _clean_optional(value: str | None) -> str | None:
    if value is None:
        return None
    return value if value.strip() else None


def _timestamp(value: datetime) -> float:
    return as_utc(value).timestamp()


__all__ = [
    "NULLABLE_PATCH_FIELDS",
    "apply_snippet_update",
    "construct_snippet",
    "find_duplicate_tags",
]
