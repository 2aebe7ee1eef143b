from __future__ import annotations

import logging

from ..snippet.errors import SnippetNotFoundError
from ..snippet.model import Snippet, SnippetId
from ..snippet.ports import LibraryGateway, SnippetGateway
from .guards import assert_writable

logger = logging.getLogger("codespark")


class DeleteSnippetUseCase:
    """Delete a snippet and hand back its last state for undo messaging."""

    def __init__(
        self,
        *,
        snippet_gateway: SnippetGateway,
        library_gateway: LibraryGateway,
    ) -> None:
        self.snippet_gateway = snippet_gateway
        self.library_gateway = library_gateway

    async def execute(self, snippet_id: SnippetId) -> Snippet:
        snippet = await self.snippet_gateway.get_by_id(snippet_id)
        if snippet is None:
            raise SnippetNotFoundError(snippet_id)

        await assert_writable(self.library_gateway, snippet.library_id)
        await self.snippet_gateway.delete(snippet.id)
        logger.info("Deleted snippet %s from library %s", snippet.id, snippet.library_id)
        return snippet


__all__ = ["DeleteSnippetUseCase"]
