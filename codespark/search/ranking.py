"""Scoring and ordering rules shared by text search and empty-query suggestions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Iterable, List, Optional, Sequence

from ..snippet.model import LibraryId, Snippet, TagName, as_utc

SHORTCUT_EXACT = 100.0
TITLE_PREFIX = 60.0
TITLE_PARTIAL = 30.0
TAG_MATCH = 20.0
BODY_MATCH = 10.0
FAVORITE_BONUS = 15.0
USAGE_WEIGHT = 10.0
RECENCY_WEIGHT = 15.0

RECENCY_WINDOW = timedelta(days=30)

UsageNormalizer = Callable[[int], float]
RecencyNormalizer = Callable[[Optional[datetime]], float]


@dataclass(frozen=True, slots=True)
class ScoredSnippet:
    snippet: Snippet
    score: float


def normalize_tags(tags: Iterable[TagName] | None) -> List[str]:
    if not tags:
        return []
    normalized = (tag.strip().lower() for tag in tags)
    return [tag for tag in normalized if tag]


def filter_snippets(
    snippets: Sequence[Snippet],
    library_ids: Iterable[LibraryId] | None = None,
    tags: Iterable[TagName] | None = None,
) -> List[Snippet]:
    """Keep snippets in any of ``library_ids`` that carry every tag in ``tags``.

    Tag matching is case-insensitive; an empty filter matches everything.
    """
    result = list(snippets)

    library_set = set(library_ids or ())
    if library_set:
        result = [snippet for snippet in result if snippet.library_id in library_set]

    required_tags = normalize_tags(tags)
    if required_tags:
        result = [
            snippet
            for snippet in result
            if set(required_tags).issubset(tag.lower() for tag in snippet.tags)
        ]

    return result


def create_usage_normalizer(snippets: Sequence[Snippet]) -> UsageNormalizer:
    max_usage = max((snippet.usage_count for snippet in snippets), default=0)
    if max_usage <= 0:
        return lambda _usage_count: 0.0
    return lambda usage_count: usage_count / max_usage * USAGE_WEIGHT


def create_recency_normalizer(snippets: Sequence[Snippet], now: datetime) -> RecencyNormalizer:
    """Linear decay from ``RECENCY_WEIGHT`` (used now) to 0 (used a window ago)."""
    if not any(snippet.last_used_at for snippet in snippets):
        return lambda _timestamp: 0.0

    reference = as_utc(now)
    window = RECENCY_WINDOW.total_seconds()

    def normalize(timestamp: datetime | None) -> float:
        if timestamp is None:
            return 0.0
        diff = (reference - as_utc(timestamp)).total_seconds()
        if diff <= 0:
            return RECENCY_WEIGHT
        if diff >= window:
            return 0.0
        return (window - diff) / window * RECENCY_WEIGHT

    return normalize


def score_snippet(
    snippet: Snippet,
    query: str,
    usage_normalizer: UsageNormalizer,
    recency_normalizer: RecencyNormalizer,
) -> float:
    """Score ``snippet`` against an already trimmed and lowercased ``query``."""
    title = snippet.title.lower()
    shortcut = snippet.shortcut.lower() if snippet.shortcut else None

    score = 0.0
    if shortcut and shortcut == query:
        score += SHORTCUT_EXACT

    if title.startswith(query):
        score += TITLE_PREFIX
    elif query in title:
        score += TITLE_PARTIAL

    if any(query in tag.lower() for tag in snippet.tags):
        score += TAG_MATCH

    if query in snippet.body.lower():
        score += BODY_MATCH

    return score + _signal_score(snippet, usage_normalizer, recency_normalizer)


def surface_defaults(
    snippets: Sequence[Snippet],
    *,
    now: datetime,
    limit: int | None = None,
) -> List[ScoredSnippet]:
    """Rank snippets without a query: favorites, usage and recency only.

    Normalizers are computed over ``snippets`` themselves, so a filtered view
    is ranked against its own usage and recency distribution.
    """
    usage_normalizer = create_usage_normalizer(snippets)
    recency_normalizer = create_recency_normalizer(snippets, now)
    scored = [
        ScoredSnippet(snippet, _signal_score(snippet, usage_normalizer, recency_normalizer))
        for snippet in snippets
    ]
    return rank_results(scored, limit=limit)


def rank_results(results: Iterable[ScoredSnippet], *, limit: int | None = None) -> List[ScoredSnippet]:
    ordered = sorted(results, key=_sort_key)
    if limit and limit > 0:
        return ordered[:limit]
    return ordered


def _signal_score(
    snippet: Snippet,
    usage_normalizer: UsageNormalizer,
    recency_normalizer: RecencyNormalizer,
) -> float:
    score = FAVORITE_BONUS if snippet.is_favorite else 0.0
    score += usage_normalizer(snippet.usage_count)
    score += recency_normalizer(snippet.last_used_at)
    return score


def _sort_key(result: ScoredSnippet) -> tuple:
    # score desc, favorite first, usage desc, most recently updated, then title
    snippet = result.snippet
    return (
        -result.score,
        not snippet.is_favorite,
        -snippet.usage_count,
        -as_utc(snippet.updated_at).timestamp(),
        snippet.title.casefold(),
        snippet.title,
    )


__all__ = [
    "BODY_MATCH",
    "FAVORITE_BONUS",
    "RECENCY_WEIGHT",
    "RECENCY_WINDOW",
    "SHORTCUT_EXACT",
    "ScoredSnippet",
    "TAG_MATCH",
    "TITLE_PARTIAL",
    "TITLE_PREFIX",
    "USAGE_WEIGHT",
    "create_recency_normalizer",
    "create_usage_normalizer",
    "filter_snippets",
    "normalize_tags",
    "rank_results",
    "score_snippet",
    "surface_defaults",
]
