"""Library listing and active-library selection."""

from __future__ import annotations

import logging
from typing import List, Sequence

from ..snippet.errors import LibraryNotFoundError
from ..snippet.model import LibraryId, SnippetLibrary, UserPreferences, default_preferences
from ..snippet.ports import LibraryGateway, PreferencesGateway, find_library

logger = logging.getLogger("codespark")


class GetLibrariesUseCase:
    def __init__(self, *, library_gateway: LibraryGateway) -> None:
        self.library_gateway = library_gateway

    async def execute(self) -> List[SnippetLibrary]:
        return await self.library_gateway.get_libraries()


class GetActiveLibraryUseCase:
    """Resolve the library the user is currently working in.

    The persisted ``default_library_id`` wins over ``fallback_library_id``.
    A candidate that no longer exists in ``available_libraries`` is replaced
    by the fallback (itself checked), and ``None`` means "all libraries".
    """

    def __init__(self, *, preferences_gateway: PreferencesGateway) -> None:
        self.preferences_gateway = preferences_gateway

    async def execute(
        self,
        available_libraries: Sequence[SnippetLibrary],
        fallback_library_id: LibraryId | None = None,
    ) -> LibraryId | None:
        preferences = await self.preferences_gateway.get_preferences()
        preferred = preferences.default_library_id if preferences else None
        candidate = preferred or fallback_library_id
        if not candidate:
            return None

        known_ids = {library.id for library in available_libraries}
        if candidate in known_ids:
            return candidate

        logger.debug("Active library %s no longer exists; using fallback", candidate)
        if fallback_library_id and fallback_library_id in known_ids:
            return fallback_library_id
        return None


class SwitchActiveLibraryUseCase:
    """Persist a new active library (``None`` selects all libraries)."""

    def __init__(
        self,
        *,
        library_gateway: LibraryGateway,
        preferences_gateway: PreferencesGateway,
    ) -> None:
        self.library_gateway = library_gateway
        self.preferences_gateway = preferences_gateway

    async def execute(self, library_id: LibraryId | None) -> UserPreferences:
        if library_id and await find_library(self.library_gateway, library_id) is None:
            raise LibraryNotFoundError(library_id)

        current = await self.preferences_gateway.get_preferences() or default_preferences()
        updated = current.model_copy(update={"default_library_id": library_id or None})

        await self.preferences_gateway.save_preferences(updated)
        logger.info("Active library switched to %s", library_id or "all libraries")
        return updated


__all__ = [
    "GetActiveLibraryUseCase",
    "GetLibrariesUseCase",
    "SwitchActiveLibraryUseCase",
]
