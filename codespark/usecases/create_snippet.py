"""Create a snippet and persist it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List

from ..snippet.errors import MissingLibraryError
from ..snippet.model import LibraryId, Snippet, SnippetId, TagName, utc_now
from ..snippet.ports import LibraryGateway, SnippetGateway
from ..snippet.validation import construct_snippet
from .guards import assert_writable

logger = logging.getLogger("codespark")


@dataclass(slots=True)
class CreateSnippetInput:
    title: str
    body: str
    tags: List[TagName] = field(default_factory=list)
    shortcut: str | None = None
    description: str | None = None
    language: str | None = None
    library_id: LibraryId | None = None
    is_favorite: bool = False


class CreateSnippetUseCase:
    """Validate a new snippet and save it.

    The target library is the explicit ``library_id`` or, failing that, the
    configured ``default_library_id``. When a ``library_gateway`` is supplied
    the target must exist and must not be read-only.
    """

    def __init__(
        self,
        *,
        snippet_gateway: SnippetGateway,
        generate_id: Callable[[], SnippetId],
        now: Callable[[], datetime] | None = None,
        default_library_id: LibraryId | None = None,
        library_gateway: LibraryGateway | None = None,
    ) -> None:
        self.snippet_gateway = snippet_gateway
        self.generate_id = generate_id
        self.now = now or utc_now
        self.default_library_id = default_library_id
        self.library_gateway = library_gateway

    async def execute(self, data: CreateSnippetInput) -> Snippet:
        library_id = data.library_id or self.default_library_id
        if not library_id:
            raise MissingLibraryError()

        if self.library_gateway is not None:
            await assert_writable(self.library_gateway, library_id, require_exists=True)

        timestamp = self.now()
        snippet = construct_snippet(
            id=self.generate_id(),
            title=data.title,
            body=data.body,
            tags=data.tags,
            shortcut=data.shortcut,
            description=data.description,
            language=data.language,
            is_favorite=data.is_favorite,
            usage_count=0,
            last_used_at=None,
            library_id=library_id,
            created_at=timestamp,
            updated_at=timestamp,
        )

        await self.snippet_gateway.save(snippet)
        logger.info("Created snippet %s in library %s", snippet.id, library_id)
        return snippet


__all__ = ["CreateSnippetInput", "CreateSnippetUseCase"]
