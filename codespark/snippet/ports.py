"""Interfaces the core depends on. Concrete stores live in ``codespark.storage``."""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from .model import LibraryId, Snippet, SnippetId, SnippetLibrary, UserPreferences


class SnippetGateway(Protocol):
    async def get_all(self) -> List[Snippet]: ...

    async def get_by_id(self, snippet_id: SnippetId) -> Snippet | None: ...

    async def save(self, snippet: Snippet) -> None:
        """Insert or replace the snippet with the same id."""
        ...

    async def delete(self, snippet_id: SnippetId) -> None:
        """Remove the snippet; unknown ids are ignored."""
        ...


class LibraryGateway(Protocol):
    async def get_libraries(self) -> List[SnippetLibrary]: ...


@runtime_checkable
class SnippetStore(SnippetGateway, LibraryGateway, Protocol):
    """A store serving both snippets and the libraries they live in."""


class PreferencesGateway(Protocol):
    async def get_preferences(self) -> UserPreferences | None: ...

    async def save_preferences(self, preferences: UserPreferences) -> None: ...


class ClipboardGateway(Protocol):
    async def copy_text(self, text: str) -> None: ...


async def find_library(
    library_gateway: LibraryGateway, library_id: LibraryId
) -> SnippetLibrary | None:
    for library in await library_gateway.get_libraries():
        if library.id == library_id:
            return library
    return None


__all__ = [
    "ClipboardGateway",
    "LibraryGateway",
    "PreferencesGateway",
    "SnippetGateway",
    "SnippetStore",
    "find_library",
]
