from __future__ import annotations

from typing import List

from ..snippet.model import LibraryCategory, SnippetLibrary

PERSONAL_LIBRARY_ID = "personal"
TEAM_LIBRARY_ID = "team"


def default_libraries() -> List[SnippetLibrary]:
    return [
        SnippetLibrary(
            id=PERSONAL_LIBRARY_ID,
            name="Personal",
            description="Local personal library",
            category=LibraryCategory.PERSONAL,
            is_read_only=False,
        ),
        SnippetLibrary(
            id=TEAM_LIBRARY_ID,
            name="Team",
            description="Shared team library",
            category=LibraryCategory.TEAM,
            is_read_only=True,
        ),
    ]


__all__ = ["PERSONAL_LIBRARY_ID", "TEAM_LIBRARY_ID", "default_libraries"]
