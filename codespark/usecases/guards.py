from __future__ import annotations

from ..snippet.errors import LibraryNotFoundError, ReadOnlyLibraryViolationError
from ..snippet.model import LibraryId, SnippetLibrary
from ..snippet.ports import LibraryGateway, find_library


async def assert_writable(
    library_gateway: LibraryGateway,
    library_id: LibraryId,
    *,
    require_exists: bool = False,
) -> SnippetLibrary | None:
    """Raise when ``library_id`` is read-only (or unknown, if ``require_exists``)."""
    library = await find_library(library_gateway, library_id)
    if library is None:
        if require_exists:
            raise LibraryNotFoundError(library_id)
        return None
    if library.is_read_only:
        raise ReadOnlyLibraryViolationError(library_id)
    return library


__all__ = ["assert_writable"]
