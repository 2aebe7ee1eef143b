"""Search use cases built on the ranking rules in :mod:`.ranking`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Awaitable, Callable, List, Sequence

from ..snippet.model import LibraryId, TagName, utc_now
from ..snippet.ports import SnippetGateway
from .ranking import (
    ScoredSnippet,
    create_recency_normalizer,
    create_usage_normalizer,
    filter_snippets,
    rank_results,
    score_snippet,
    surface_defaults,
)

logger = logging.getLogger("codespark")


@dataclass(slots=True)
class SearchQuery:
    """Search request: free text plus optional library/tag filters."""

    query: str = ""
    library_ids: Sequence[LibraryId] | None = None
    tags: Sequence[TagName] | None = None
    limit: int | None = None

    @property
    def normalized_query(self) -> str:
        return (self.query or "").strip().lower()


EmptyQueryStrategy = Callable[[SearchQuery], Awaitable[List[ScoredSnippet]]]


class SearchSnippetsUseCase:
    """Rank snippets against a free-text query.

    A blank query is delegated to ``empty_query_strategy`` when one is given,
    otherwise the built-in favorites/usage/recency ranking is applied to the
    filtered set. Snippets scoring 0 never appear in text-search results.
    """

    def __init__(
        self,
        *,
        snippet_gateway: SnippetGateway,
        now: Callable[[], datetime] | None = None,
        empty_query_strategy: EmptyQueryStrategy | None = None,
    ) -> None:
        self.snippet_gateway = snippet_gateway
        self.now = now or utc_now
        self.empty_query_strategy = empty_query_strategy

    async def execute(self, request: SearchQuery) -> List[ScoredSnippet]:
        query = request.normalized_query
        snippets = await self.snippet_gateway.get_all()
        filtered = filter_snippets(snippets, request.library_ids, request.tags)

        if not query:
            if self.empty_query_strategy is not None:
                return await self.empty_query_strategy(request)
            return surface_defaults(filtered, now=self.now(), limit=request.limit)

        usage_normalizer = create_usage_normalizer(filtered)
        recency_normalizer = create_recency_normalizer(filtered, self.now())

        scored = []
        for snippet in filtered:
            score = score_snippet(snippet, query, usage_normalizer, recency_normalizer)
            if score > 0:
                scored.append(ScoredSnippet(snippet, score))

        results = rank_results(scored, limit=request.limit)
        logger.debug(
            "Search %r matched %d of %d snippets", query, len(scored), len(filtered)
        )
        return results


class GetTopSnippetsForEmptyQueryUseCase:
    """Suggestions shown before the user types anything.

    Usable directly, or as the ``empty_query_strategy`` of
    :class:`SearchSnippetsUseCase` (pass ``use_case.execute``).
    """

    def __init__(
        self,
        *,
        snippet_gateway: SnippetGateway,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.snippet_gateway = snippet_gateway
        self.now = now or utc_now

    async def execute(self, request: SearchQuery | None = None) -> List[ScoredSnippet]:
        request = request or SearchQuery()
        snippets = await self.snippet_gateway.get_all()
        filtered = filter_snippets(snippets, request.library_ids, request.tags)
        return surface_defaults(filtered, now=self.now(), limit=request.limit)


__all__ = [
    "EmptyQueryStrategy",
    "GetTopSnippetsForEmptyQueryUseCase",
    "SearchQuery",
    "SearchSnippetsUseCase",
]
