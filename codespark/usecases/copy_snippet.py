"""Copy a snippet body to the clipboard and record the usage."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from ..snippet.errors import ClipboardCopyError, SnippetNotFoundError
from ..snippet.model import Snippet, SnippetId, as_utc, utc_now
from ..snippet.ports import ClipboardGateway, SnippetGateway

logger = logging.getLogger("codespark")


class CopySnippetUseCase:
    """Usage statistics only change after the clipboard accepted the text."""

    def __init__(
        self,
        *,
        snippet_gateway: SnippetGateway,
        clipboard_gateway: ClipboardGateway,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.snippet_gateway = snippet_gateway
        self.clipboard_gateway = clipboard_gateway
        self.now = now or utc_now

    async def execute(self, snippet_id: SnippetId) -> Snippet:
        snippet = await self.snippet_gateway.get_by_id(snippet_id)
        if snippet is None:
            raise SnippetNotFoundError(snippet_id)

        try:
            await self.clipboard_gateway.copy_text(snippet.body)
        except Exception as exc:
            logger.warning("Clipboard rejected snippet %s: %s", snippet_id, exc)
            raise ClipboardCopyError(snippet_id, exc) from exc

        timestamp = as_utc(self.now())
        updated = snippet.model_copy(
            update={
                "usage_count": snippet.usage_count + 1,
                "last_used_at": timestamp,
                "updated_at": timestamp,
            }
        )
        await self.snippet_gateway.save(updated)
        logger.info("Copied snippet %s (usage count %d)", snippet_id, updated.usage_count)
        return updated


__all__ = ["CopySnippetUseCase"]
