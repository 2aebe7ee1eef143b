"""Local snippet manager: ranked search and guarded snippet mutations."""

from .search import (
    GetTopSnippetsForEmptyQueryUseCase,
    ScoredSnippet,
    SearchQuery,
    SearchSnippetsUseCase,
)
from .services import Services, build_services, create_services
from .snippet import Snippet, SnippetLibrary, SnippetPatch, UserPreferences
from .usecases import (
    CopySnippetUseCase,
    CreateSnippetInput,
    CreateSnippetUseCase,
    DeleteSnippetUseCase,
    GetActiveLibraryUseCase,
    GetLibrariesUseCase,
    SwitchActiveLibraryUseCase,
    UpdateSnippetUseCase,
)

__all__ = [
    "CopySnippetUseCase",
    "CreateSnippetInput",
    "CreateSnippetUseCase",
    "DeleteSnippetUseCase",
    "GetActiveLibraryUseCase",
    "GetLibrariesUseCase",
    "GetTopSnippetsForEmptyQueryUseCase",
    "ScoredSnippet",
    "SearchQuery",
    "SearchSnippetsUseCase",
    "Services",
    "Snippet",
    "SnippetLibrary",
    "SnippetPatch",
    "SwitchActiveLibraryUseCase",
    "UpdateSnippetUseCase",
    "UserPreferences",
    "build_services",
    "create_services",
]
