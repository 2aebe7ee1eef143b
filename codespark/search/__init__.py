"""Snippet ranking: text search and empty-query suggestions."""

from .engine import (
    EmptyQueryStrategy,
    GetTopSnippetsForEmptyQueryUseCase,
    SearchQuery,
    SearchSnippetsUseCase,
)
from .ranking import ScoredSnippet, filter_snippets, surface_defaults

__all__ = [
    "EmptyQueryStrategy",
    "GetTopSnippetsForEmptyQueryUseCase",
    "ScoredSnippet",
    "SearchQuery",
    "SearchSnippetsUseCase",
    "filter_snippets",
    "surface_defaults",
]
