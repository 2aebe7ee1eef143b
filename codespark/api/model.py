"""Pydantic models for the public API surface."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from ..search import ScoredSnippet
from ..snippet import Snippet, SnippetLibrary
from ..usecases import CreateSnippetInput


class SnippetCreateRequest(BaseModel):
    title: str = Field(..., description="Short human readable title")
    body: str = Field(..., description="Text copied to the clipboard")
    tags: List[str] = Field(default_factory=list, description="Tags, without duplicates")
    shortcut: str | None = Field(None, description="Exact-match alias for instant lookup")
    description: str | None = None
    language: str | None = Field(None, description="Language used for syntax highlighting")
    library_id: str | None = Field(
        None,
        description="Target library; the configured default library is used when omitted",
    )
    is_favorite: bool = False

    def to_input(self) -> CreateSnippetInput:
        return CreateSnippetInput(
            title=self.title,
            body=self.body,
            tags=list(self.tags),
            shortcut=self.shortcut,
            description=self.description,
            language=self.language,
            library_id=self.library_id,
            is_favorite=self.is_favorite,
        )


class SnippetResponse(BaseModel):
    id: str
    title: str
    body: str
    tags: List[str]
    shortcut: str | None = None
    description: str | None = None
    language: str | None = None
    is_favorite: bool
    usage_count: int
    last_used_at: datetime | None = None
    library_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_snippet(cls, snippet: Snippet) -> "SnippetResponse":
        return cls(**snippet.model_dump())


class ScoredSnippetResponse(BaseModel):
    snippet: SnippetResponse
    score: float

    @classmethod
    def from_result(cls, result: ScoredSnippet) -> "ScoredSnippetResponse":
        return cls(snippet=SnippetResponse.from_snippet(result.snippet), score=round(result.score, 4))


class SnippetSearchResponse(BaseModel):
    query: str
    results: List[ScoredSnippetResponse]


class LibraryResponse(BaseModel):
    id: str
    name: str
    description: str
    category: str
    is_read_only: bool

    @classmethod
    def from_library(cls, library: SnippetLibrary) -> "LibraryResponse":
        return cls(
            id=library.id,
            name=library.name,
            description=library.description,
            category=library.category.value,
            is_read_only=library.is_read_only,
        )


class ActiveLibraryRequest(BaseModel):
    library_id: str | None = Field(None, description="Library to activate; null selects all")


class ActiveLibraryResponse(BaseModel):
    library_id: str | None = None


class PreferencesResponse(BaseModel):
    default_library_id: str | None = None
    theme: str
    global_shortcut: str | None = None
    command_palette_shortcut: str | None = None
    data_directory: str | None = None


__all__ = [
    "ActiveLibraryRequest",
    "ActiveLibraryResponse",
    "LibraryResponse",
    "PreferencesResponse",
    "ScoredSnippetResponse",
    "SnippetCreateRequest",
    "SnippetResponse",
    "SnippetSearchResponse",
]
