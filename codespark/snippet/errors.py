"""Domain errors raised by the snippet use cases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

ValidationIssueCode = Literal[
    "TITLE_EMPTY",
    "BODY_EMPTY",
    "TAGS_DUPLICATED",
    "UPDATED_AT_BEFORE_CREATED_AT",
    "INVALID_TIMESTAMP",
]

ValidationIssueField = Literal["title", "body", "tags", "timestamps"]


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    code: ValidationIssueCode
    field: ValidationIssueField
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "field": self.field, "message": self.message}


class CodesparkError(Exception):
    """Base class for every failure surfaced by the core."""


class SnippetValidationError(CodesparkError):
    """One or more snippet rules were violated."""

    def __init__(self, issues: Sequence[ValidationIssue]) -> None:
        self.issues = list(issues)
        super().__init__("\n".join(issue.message for issue in self.issues))

    @property
    def codes(self) -> list[str]:
        return [issue.code for issue in self.issues]


class SnippetNotFoundError(CodesparkError):
    def __init__(self, snippet_id: str) -> None:
        self.snippet_id = snippet_id
        super().__init__(f"snippet {snippet_id} not found")


class ReadOnlyLibraryViolationError(CodesparkError):
    def __init__(self, library_id: str) -> None:
        self.library_id = library_id
        super().__init__(f"library {library_id} is read-only")


class MissingLibraryError(CodesparkError):
    def __init__(self) -> None:
        super().__init__("libraryId is required when no default library is configured")


class ClipboardCopyError(CodesparkError):
    """The clipboard rejected the copy; chained to the original exception."""

    def __init__(self, snippet_id: str, cause: BaseException | None = None) -> None:
        self.snippet_id = snippet_id
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"failed to copy snippet {snippet_id} to clipboard{detail}")


class LibraryNotFoundError(CodesparkError):
    def __init__(self, library_id: str) -> None:
        self.library_id = library_id
        super().__init__(f"library {library_id} not found")


__all__ = [
    "ClipboardCopyError",
    "CodesparkError",
    "LibraryNotFoundError",
    "MissingLibraryError",
    "ReadOnlyLibraryViolationError",
    "SnippetNotFoundError",
    "SnippetValidationError",
    "ValidationIssue",
    "ValidationIssueCode",
    "ValidationIssueField",
]
