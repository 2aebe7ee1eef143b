"""In-process snippet and preference stores."""

from __future__ import annotations

from typing import Dict, Iterable, List

from ..snippet.model import LibraryId, Snippet, SnippetId, SnippetLibrary, UserPreferences
from .defaults import default_libraries


class InMemorySnippetStore:
    """Snippet and library gateway backed by dictionaries.

    Snippets are copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(
        self,
        snippets: Iterable[Snippet] = (),
        libraries: Iterable[SnippetLibrary] | None = None,
    ) -> None:
        self._snippets: Dict[SnippetId, Snippet] = {
            snippet.id: snippet.model_copy(deep=True) for snippet in snippets
        }
        base_libraries = list(libraries or []) or default_libraries()
        self._libraries: Dict[LibraryId, SnippetLibrary] = {
            library.id: library for library in base_libraries
        }

    async def get_all(self) -> List[Snippet]:
        return [snippet.model_copy(deep=True) for snippet in self._snippets.values()]

    async def get_by_id(self, snippet_id: SnippetId) -> Snippet | None:
        snippet = self._snippets.get(snippet_id)
        return snippet.model_copy(deep=True) if snippet is not None else None

    async def save(self, snippet: Snippet) -> None:
        self._snippets[snippet.id] = snippet.model_copy(deep=True)

    async def delete(self, snippet_id: SnippetId) -> None:
        self._snippets.pop(snippet_id, None)

    async def get_libraries(self) -> List[SnippetLibrary]:
        return list(self._libraries.values())


class InMemoryPreferencesGateway:
    def __init__(self, preferences: UserPreferences | None = None) -> None:
        self._preferences = preferences

    async def get_preferences(self) -> UserPreferences | None:
        if self._preferences is None:
            return None
        return self._preferences.model_copy()

    async def save_preferences(self, preferences: UserPreferences) -> None:
        self._preferences = preferences.model_copy()


__all__ = ["InMemoryPreferencesGateway", "InMemorySnippetStore"]
