"""Wire stores, clipboard, clock and id generator into the use cases."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

import redis

from .clipboard import SubprocessClipboard
from .config import STORE_MEMORY, STORE_REDIS, Settings
from .search import GetTopSnippetsForEmptyQueryUseCase, SearchSnippetsUseCase
from .snippet.model import SnippetId, utc_now
from .snippet.ports import ClipboardGateway, PreferencesGateway, SnippetStore
from .storage import (
    FilePreferencesGateway,
    FileSnippetStore,
    InMemoryPreferencesGateway,
    InMemorySnippetStore,
    RedisSnippetStore,
)
from .storage.file_store import DEFAULT_FILE_NAME
from .usecases import (
    CopySnippetUseCase,
    CreateSnippetUseCase,
    DeleteSnippetUseCase,
    GetActiveLibraryUseCase,
    GetLibrariesUseCase,
    SwitchActiveLibraryUseCase,
    UpdateSnippetUseCase,
)

logger = logging.getLogger("codespark")


def new_snippet_id() -> SnippetId:
    return uuid.uuid4().hex


@dataclass(slots=True)
class Services:
    settings: Settings
    snippet_store: SnippetStore
    preferences_gateway: PreferencesGateway
    search: SearchSnippetsUseCase
    suggestions: GetTopSnippetsForEmptyQueryUseCase
    create: CreateSnippetUseCase
    update: UpdateSnippetUseCase
    delete: DeleteSnippetUseCase
    copy: CopySnippetUseCase
    libraries: GetLibrariesUseCase
    active_library: GetActiveLibraryUseCase
    switch_library: SwitchActiveLibraryUseCase


def create_services(
    settings: Settings,
    *,
    snippet_store: SnippetStore,
    preferences_gateway: PreferencesGateway,
    clipboard: ClipboardGateway,
    now: Callable[[], datetime] | None = None,
    generate_id: Callable[[], SnippetId] | None = None,
) -> Services:
    """Build every use case around one snippet store."""
    clock = now or utc_now
    suggestions = GetTopSnippetsForEmptyQueryUseCase(snippet_gateway=snippet_store, now=clock)
    return Services(
        settings=settings,
        snippet_store=snippet_store,
        preferences_gateway=preferences_gateway,
        search=SearchSnippetsUseCase(
            snippet_gateway=snippet_store,
            now=clock,
            empty_query_strategy=suggestions.execute,
        ),
        suggestions=suggestions,
        create=CreateSnippetUseCase(
            snippet_gateway=snippet_store,
            generate_id=generate_id or new_snippet_id,
            now=clock,
            default_library_id=settings.default_library_id,
            library_gateway=snippet_store,
        ),
        update=UpdateSnippetUseCase(
            snippet_gateway=snippet_store,
            library_gateway=snippet_store,
            now=clock,
        ),
        delete=DeleteSnippetUseCase(snippet_gateway=snippet_store, library_gateway=snippet_store),
        copy=CopySnippetUseCase(
            snippet_gateway=snippet_store,
            clipboard_gateway=clipboard,
            now=clock,
        ),
        libraries=GetLibrariesUseCase(library_gateway=snippet_store),
        active_library=GetActiveLibraryUseCase(preferences_gateway=preferences_gateway),
        switch_library=SwitchActiveLibraryUseCase(
            library_gateway=snippet_store,
            preferences_gateway=preferences_gateway,
        ),
    )


async def build_services(
    settings: Settings,
    *,
    clipboard: ClipboardGateway | None = None,
) -> Services:
    """Create the stores selected by ``settings`` and wire the use cases.

    A ``data_directory`` saved in the user's preferences overrides
    ``settings.data_dir`` for the snippet file.
    """
    if settings.store_backend == STORE_MEMORY:
        preferences_gateway: PreferencesGateway = InMemoryPreferencesGateway()
        snippet_store: SnippetStore = InMemorySnippetStore()
    else:
        preferences_gateway = FilePreferencesGateway(settings.preferences_path)
        if settings.store_backend == STORE_REDIS:
            snippet_store = RedisSnippetStore(
                redis.Redis.from_url(settings.redis_url),
                prefix=settings.redis_prefix,
            )
        else:
            snippet_store = FileSnippetStore(await _snippet_file_path(settings, preferences_gateway))

    logger.debug("Using %s snippet store", settings.store_backend)
    return create_services(
        settings,
        snippet_store=snippet_store,
        preferences_gateway=preferences_gateway,
        clipboard=clipboard or SubprocessClipboard(),
    )


async def _snippet_file_path(settings: Settings, preferences_gateway: PreferencesGateway) -> Path:
    preferences = await preferences_gateway.get_preferences()
    if preferences is not None and preferences.data_directory:
        return Path(preferences.data_directory).expanduser() / DEFAULT_FILE_NAME
    return settings.data_dir / DEFAULT_FILE_NAME


__all__ = ["Services", "build_services", "create_services", "new_snippet_id"]
