"""Use cases that mutate snippets and library selection."""

from .copy_snippet import CopySnippetUseCase
from .create_snippet import CreateSnippetInput, CreateSnippetUseCase
from .delete_snippet import DeleteSnippetUseCase
from .library import (
    GetActiveLibraryUseCase,
    GetLibrariesUseCase,
    SwitchActiveLibraryUseCase,
)
from .update_snippet import UpdateSnippetUseCase

__all__ = [
    "CopySnippetUseCase",
    "CreateSnippetInput",
    "CreateSnippetUseCase",
    "DeleteSnippetUseCase",
    "GetActiveLibraryUseCase",
    "GetLibrariesUseCase",
    "SwitchActiveLibraryUseCase",
    "UpdateSnippetUseCase",
]
