"""Apply a partial update to an existing snippet."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from ..snippet.errors import SnippetNotFoundError
from ..snippet.model import Snippet, SnippetId, SnippetPatch, utc_now
from ..snippet.ports import LibraryGateway, SnippetGateway
from ..snippet.validation import apply_snippet_update
from .guards import assert_writable

logger = logging.getLogger("codespark")


class UpdateSnippetUseCase:
    def __init__(
        self,
        *,
        snippet_gateway: SnippetGateway,
        library_gateway: LibraryGateway,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.snippet_gateway = snippet_gateway
        self.library_gateway = library_gateway
        self.now = now or utc_now

    async def execute(self, snippet_id: SnippetId, patch: SnippetPatch) -> Snippet:
        """Merge ``patch`` onto the stored snippet and save the result.

        Neither the current library nor, when moving, the new ``library_id``
        may be read-only. Nothing is written when any check or validation
        fails.
        """
        snippet = await self.snippet_gateway.get_by_id(snippet_id)
        if snippet is None:
            raise SnippetNotFoundError(snippet_id)

        moving = patch.library_id is not None and patch.library_id != snippet.library_id
        await assert_writable(self.library_gateway, snippet.library_id)
        if moving:
            await assert_writable(self.library_gateway, patch.library_id, require_exists=True)

        updated = apply_snippet_update(snippet, patch, updated_at=self.now())
        await self.snippet_gateway.save(updated)
        logger.info(
            "Updated snippet %s (%s)", snippet_id, ", ".join(sorted(patch.model_fields_set)) or "no fields"
        )
        return updated


__all__ = ["UpdateSnippetUseCase"]
