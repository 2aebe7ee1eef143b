"""Service-layer helpers translating API calls into use case invocations."""

from __future__ import annotations

import logging
from typing import List, Sequence

from fastapi import HTTPException, status

from ..search import SearchQuery
from ..services import Services
from ..snippet import (
    ClipboardCopyError,
    CodesparkError,
    LibraryNotFoundError,
    MissingLibraryError,
    ReadOnlyLibraryViolationError,
    SnippetNotFoundError,
    SnippetPatch,
    SnippetValidationError,
)
from .model import (
    ActiveLibraryResponse,
    LibraryResponse,
    PreferencesResponse,
    ScoredSnippetResponse,
    SnippetCreateRequest,
    SnippetResponse,
    SnippetSearchResponse,
)

logger = logging.getLogger("codespark")


def to_http_error(exc: CodesparkError) -> HTTPException:
    if isinstance(exc, SnippetValidationError):
        return HTTPException(
            status_code=422,
            detail={"message": "Snippet validation failed", "issues": [issue.to_dict() for issue in exc.issues]},
        )
    if isinstance(exc, (SnippetNotFoundError, LibraryNotFoundError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ReadOnlyLibraryViolationError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, MissingLibraryError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, ClipboardCopyError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    logger.error("Unmapped domain error: %s", exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


async def search_snippets_service(
    services: Services,
    query: str,
    *,
    library_ids: Sequence[str] | None = None,
    tags: Sequence[str] | None = None,
    limit: int | None = None,
) -> SnippetSearchResponse:
    request = SearchQuery(
        query=query,
        library_ids=library_ids,
        tags=tags,
        limit=limit or services.settings.search_limit,
    )
    results = await services.search.execute(request)
    return SnippetSearchResponse(
        query=query,
        results=[ScoredSnippetResponse.from_result(result) for result in results],
    )


async def suggest_snippets_service(
    services: Services,
    *,
    library_ids: Sequence[str] | None = None,
    tags: Sequence[str] | None = None,
    limit: int | None = None,
) -> List[ScoredSnippetResponse]:
    request = SearchQuery(
        library_ids=library_ids,
        tags=tags,
        limit=limit or services.settings.search_limit,
    )
    results = await services.suggestions.execute(request)
    return [ScoredSnippetResponse.from_result(result) for result in results]


async def create_snippet_service(services: Services, payload: SnippetCreateRequest) -> SnippetResponse:
    try:
        snippet = await services.create.execute(payload.to_input())
    except CodesparkError as exc:
        raise to_http_error(exc) from exc
    return SnippetResponse.from_snippet(snippet)


async def update_snippet_service(
    services: Services,
    snippet_id: str,
    patch: SnippetPatch,
) -> SnippetResponse:
    try:
        snippet = await services.update.execute(snippet_id, patch)
    except CodesparkError as exc:
        raise to_http_error(exc) from exc
    return SnippetResponse.from_snippet(snippet)


async def delete_snippet_service(services: Services, snippet_id: str) -> SnippetResponse:
    try:
        snippet = await services.delete.execute(snippet_id)
    except CodesparkError as exc:
        raise to_http_error(exc) from exc
    return SnippetResponse.from_snippet(snippet)


async def copy_snippet_service(services: Services, snippet_id: str) -> SnippetResponse:
    try:
        snippet = await services.copy.execute(snippet_id)
    except CodesparkError as exc:
        raise to_http_error(exc) from exc
    return SnippetResponse.from_snippet(snippet)


async def list_libraries_service(services: Services) -> List[LibraryResponse]:
    libraries = await services.libraries.execute()
    return [LibraryResponse.from_library(library) for library in libraries]


async def get_active_library_service(services: Services) -> ActiveLibraryResponse:
    libraries = await services.libraries.execute()
    library_id = await services.active_library.execute(
        libraries,
        fallback_library_id=services.settings.default_library_id,
    )
    return ActiveLibraryResponse(library_id=library_id)


async def switch_active_library_service(services: Services, library_id: str | None) -> ActiveLibraryResponse:
    try:
        preferences = await services.switch_library.execute(library_id)
    except CodesparkError as exc:
        raise to_http_error(exc) from exc
    return ActiveLibraryResponse(library_id=preferences.default_library_id)


async def get_preferences_service(services: Services) -> PreferencesResponse:
    preferences = await services.preferences_gateway.get_preferences()
    if preferences is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Preferences not found")
    return PreferencesResponse(**preferences.model_dump())


__all__ = [
    "copy_snippet_service",
    "create_snippet_service",
    "delete_snippet_service",
    "get_active_library_service",
    "get_preferences_service",
    "list_libraries_service",
    "search_snippets_service",
    "suggest_snippets_service",
    "switch_active_library_service",
    "to_http_error",
    "update_snippet_service",
]
