"""FastAPI routes for snippet search, mutation and library selection."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, Request, status

from ..services import Services
from ..snippet import SnippetPatch
from .model import (
    ActiveLibraryRequest,
    ActiveLibraryResponse,
    LibraryResponse,
    PreferencesResponse,
    ScoredSnippetResponse,
    SnippetCreateRequest,
    SnippetResponse,
    SnippetSearchResponse,
)
from .service import (
    copy_snippet_service,
    create_snippet_service,
    delete_snippet_service,
    get_active_library_service,
    get_preferences_service,
    list_libraries_service,
    search_snippets_service,
    suggest_snippets_service,
    switch_active_library_service,
    update_snippet_service,
)


def get_services(request: Request) -> Services:
    services = getattr(request.app.state, "services", None)
    if not isinstance(services, Services):
        raise RuntimeError("Services have not been initialised")
    return services


router = APIRouter()


@router.get("/snippets", response_model=SnippetSearchResponse)
async def search_snippets(
    query: str = Query("", description="Free-text query; blank returns suggestions"),
    library_id: List[str] | None = Query(None, description="Restrict to these libraries"),
    tag: List[str] | None = Query(None, description="Snippets must carry every tag"),
    limit: int | None = Query(None, ge=1, le=200, description="Maximum number of results"),
    services: Services = Depends(get_services),
) -> SnippetSearchResponse:
    return await search_snippets_service(
        services,
        query,
        library_ids=library_id,
        tags=tag,
        limit=limit,
    )


@router.get("/snippets/suggestions", response_model=List[ScoredSnippetResponse])
async def suggest_snippets(
    library_id: List[str] | None = Query(None),
    tag: List[str] | None = Query(None),
    limit: int | None = Query(None, ge=1, le=200),
    services: Services = Depends(get_services),
) -> List[ScoredSnippetResponse]:
    return await suggest_snippets_service(services, library_ids=library_id, tags=tag, limit=limit)


@router.post("/snippets", response_model=SnippetResponse, status_code=status.HTTP_201_CREATED)
async def create_snippet(
    payload: SnippetCreateRequest,
    services: Services = Depends(get_services),
) -> SnippetResponse:
    return await create_snippet_service(services, payload)


@router.patch("/snippets/{snippet_id}", response_model=SnippetResponse)
async def update_snippet(
    snippet_id: str,
    patch: SnippetPatch,
    services: Services = Depends(get_services),
) -> SnippetResponse:
    return await update_snippet_service(services, snippet_id, patch)


@router.delete("/snippets/{snippet_id}", response_model=SnippetResponse)
async def delete_snippet(
    snippet_id: str,
    services: Services = Depends(get_services),
) -> SnippetResponse:
    return await delete_snippet_service(services, snippet_id)


@router.post("/snippets/{snippet_id}/copy", response_model=SnippetResponse)
async def copy_snippet(
    snippet_id: str,
    services: Services = Depends(get_services),
) -> SnippetResponse:
    return await copy_snippet_service(services, snippet_id)


@router.get("/libraries", response_model=List[LibraryResponse])
async def list_libraries(services: Services = Depends(get_services)) -> List[LibraryResponse]:
    return await list_libraries_service(services)


@router.get("/libraries/active", response_model=ActiveLibraryResponse)
async def get_active_library(services: Services = Depends(get_services)) -> ActiveLibraryResponse:
    return await get_active_library_service(services)


@router.put("/libraries/active", response_model=ActiveLibraryResponse)
async def switch_active_library(
    payload: ActiveLibraryRequest,
    services: Services = Depends(get_services),
) -> ActiveLibraryResponse:
    return await switch_active_library_service(services, payload.library_id)


@router.get("/preferences", response_model=PreferencesResponse)
async def get_preferences(services: Services = Depends(get_services)) -> PreferencesResponse:
    return await get_preferences_service(services)


__all__ = ["get_services", "router"]
