"""Storage adapters implementing the snippet, library and preference ports."""

from .defaults import PERSONAL_LIBRARY_ID, TEAM_LIBRARY_ID, default_libraries
from .file_store import FileSnippetStore
from .memory import InMemoryPreferencesGateway, InMemorySnippetStore
from .preferences import FilePreferencesGateway
from .redis_store import RedisSnippetStore

__all__ = [
    "FilePreferencesGateway",
    "FileSnippetStore",
    "InMemoryPreferencesGateway",
    "InMemorySnippetStore",
    "PERSONAL_LIBRARY_ID",
    "RedisSnippetStore",
    "TEAM_LIBRARY_ID",
    "default_libraries",
]
