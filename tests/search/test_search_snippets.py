from datetime import datetime, timedelta, timezone

import pytest

from codespark.search import GetTopSnippetsForEmptyQueryUseCase, SearchQuery, SearchSnippetsUseCase
from codespark.search.ranking import RECENCY_WEIGHT, create_recency_normalizer
from codespark.snippet import Snippet
from codespark.storage import InMemorySnippetStore

BASE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _make_snippet(id: str, title: str, body: str, **overrides) -> Snippet:
    fields = {
        "id": id,
        "title": title,
        "body": body,
        "tags": [],
        "library_id": "personal",
        "created_at": BASE_DATE,
        "updated_at": BASE_DATE,
    }
    fields.update(overrides)
    return Snippet(**fields)


def _make_use_case(snippets, **kwargs) -> SearchSnippetsUseCase:
    return SearchSnippetsUseCase(snippet_gateway=InMemorySnippetStore(snippets), **kwargs)


def _ids(results):
    return [result.snippet.id for result in results]


@pytest.mark.asyncio
async def test_shortcut_match_outranks_title_matches():
    use_case = _make_use_case(
        [
            _make_snippet("shortcut-match", "Deploy command", "deploy with script", shortcut="deploy", usage_count=5),
            _make_snippet("favorite-match", "Deploy favorite", "deploy favorite", is_favorite=True),
            _make_snippet("title-match", "Deploy via CLI", "cli deploy"),
        ]
    )

    results = await use_case.execute(SearchQuery(query="deploy"))

    assert _ids(results) == ["shortcut-match", "favorite-match", "title-match"]
    assert results[0].score > results[1].score > results[2].score


@pytest.mark.asyncio
async def test_title_prefix_beats_title_substring():
    use_case = _make_use_case(
        [
            _make_snippet("substring", "Quick deploy", "run it"),
            _make_snippet("prefix", "Deploy now", "run it"),
        ]
    )

    results = await use_case.execute(SearchQuery(query="  DEPLOY "))

    assert _ids(results) == ["prefix", "substring"]
    assert [result.score for result in results] == [60, 30]


@pytest.mark.asyncio
async def test_tag_and_body_matches_are_scored():
    use_case = _make_use_case(
        [
            _make_snippet("tagged", "Warm up", "prime keys", tags=["Redis-Cache"]),
            _make_snippet("body", "Warm up two", "flush the redis db"),
        ]
    )

    results = await use_case.execute(SearchQuery(query="redis"))

    assert {result.snippet.id: result.score for result in results} == {"tagged": 20, "body": 10}


@pytest.mark.asyncio
async def test_snippets_without_any_signal_are_excluded():
    use_case = _make_use_case(
        [
            _make_snippet("match", "Docker prune", "docker system prune"),
            _make_snippet("other", "Git log", "git log --oneline"),
        ]
    )

    results = await use_case.execute(SearchQuery(query="docker"))

    assert _ids(results) == ["match"]


@pytest.mark.asyncio
async def test_filters_by_library_ids():
    use_case = _make_use_case(
        [
            _make_snippet("personal-api", "API call personal", "api request", library_id="personal"),
            _make_snippet("team-api", "API call team", "api request team", library_id="team", tags=["api", "team"]),
        ]
    )

    results = await use_case.execute(SearchQuery(query="api", library_ids=["team"]))

    assert _ids(results) == ["team-api"]


@pytest.mark.asyncio
async def test_requires_all_selected_tags():
    use_case = _make_use_case(
        [
            _make_snippet("redis-cache", "Redis cache priming", "cache warmup", tags=["redis", "cache"]),
            _make_snippet("redis-only", "Redis helpers", "redis script", tags=["redis"]),
        ]
    )

    results = await use_case.execute(SearchQuery(query="cache", tags=["Redis", " cache ", ""]))

    assert _ids(results) == ["redis-cache"]


@pytest.mark.asyncio
async def test_usage_and_recency_bonuses_order_equal_text_matches():
    now = datetime(2024, 1, 6, tzinfo=timezone.utc)
    use_case = _make_use_case(
        [
            _make_snippet(
                "high-usage",
                "Logger setup",
                "logger info",
                tags=["log"],
                usage_count=20,
                last_used_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
            ),
            _make_snippet(
                "recent",
                "Logger advanced",
                "logger debug",
                tags=["log"],
                usage_count=5,
                last_used_at=datetime(2024, 1, 5, tzinfo=timezone.utc),
            ),
        ],
        now=lambda: now,
    )

    results = await use_case.execute(SearchQuery(query="log"))

    assert _ids(results) == ["high-usage", "recent"]
    assert results[0].score == pytest.approx(60 + 20 + 10 + 10 + 13)
    assert results[1].score == pytest.approx(60 + 20 + 10 + 2.5 + 14.5)


@pytest.mark.asyncio
async def test_ties_break_on_updated_at_then_title():
    use_case = _make_use_case(
        [
            _make_snippet("older", "Curl post", "curl -X POST"),
            _make_snippet("newer", "Curl get", "curl -X GET", updated_at=BASE_DATE + timedelta(days=1)),
            _make_snippet("beta", "beta curl", "curl beta"),
            _make_snippet("alpha", "Alpha curl", "curl alpha"),
        ]
    )

    results = await use_case.execute(SearchQuery(query="curl"))

    assert _ids(results) == ["newer", "older", "alpha", "beta"]


@pytest.mark.asyncio
async def test_limit_truncates_results():
    use_case = _make_use_case(
        [_make_snippet(f"s{index}", f"Make target {index}", "make") for index in range(5)]
    )

    limited = await use_case.execute(SearchQuery(query="make", limit=2))
    unlimited = await use_case.execute(SearchQuery(query="make", limit=0))

    assert len(limited) == 2
    assert len(unlimited) == 5


@pytest.mark.asyncio
async def test_blank_query_surfaces_favorites_first():
    use_case = _make_use_case(
        [
            _make_snippet("busy", "Busy", "busy", usage_count=5),
            _make_snippet("favorite", "Favorite", "favorite", is_favorite=True, usage_count=2),
        ]
    )

    results = await use_case.execute(SearchQuery(query="   "))

    assert _ids(results) == ["favorite", "busy"]
    assert results[0].score == pytest.approx(15 + 4)
    assert results[1].score == pytest.approx(10)


@pytest.mark.asyncio
async def test_blank_query_keeps_zero_score_snippets():
    use_case = _make_use_case([_make_snippet("plain", "Plain", "plain")])

    results = await use_case.execute(SearchQuery(query=""))

    assert _ids(results) == ["plain"]
    assert results[0].score == 0


@pytest.mark.asyncio
async def test_blank_query_delegates_to_injected_strategy():
    calls = []

    async def strategy(request):
        calls.append(request)
        return []

    use_case = _make_use_case([_make_snippet("plain", "Plain", "plain")], empty_query_strategy=strategy)
    request = SearchQuery(query="", tags=["cli"], limit=3)

    results = await use_case.execute(request)

    assert results == []
    assert calls == [request]


@pytest.mark.asyncio
async def test_top_snippets_strategy_matches_builtin_ranking():
    now = datetime(2024, 2, 1, tzinfo=timezone.utc)
    snippets = [
        _make_snippet("fav", "Favorite", "Favorite", is_favorite=True, usage_count=2),
        _make_snippet(
            "recent",
            "Recent",
            "Recent",
            usage_count=1,
            last_used_at=datetime(2024, 1, 31, tzinfo=timezone.utc),
        ),
        _make_snippet("regular", "Regular", "Regular", usage_count=5),
    ]
    store = InMemorySnippetStore(snippets)
    top = GetTopSnippetsForEmptyQueryUseCase(snippet_gateway=store, now=lambda: now)
    builtin = SearchSnippetsUseCase(snippet_gateway=store, now=lambda: now)
    delegating = SearchSnippetsUseCase(snippet_gateway=store, now=lambda: now, empty_query_strategy=top.execute)

    request = SearchQuery(query="", limit=2)
    expected = await builtin.execute(request)

    assert _ids(expected) == ["fav", "recent"]
    assert await delegating.execute(request) == expected
    assert await top.execute(request) == expected


@pytest.mark.asyncio
async def test_top_snippets_respects_filters():
    store = InMemorySnippetStore(
        [
            _make_snippet("personal", "Personal", "Personal", tags=["cli"], library_id="personal", is_favorite=True),
            _make_snippet("team", "Team", "Team", tags=["ui"], library_id="team", is_favorite=True),
        ]
    )
    top = GetTopSnippetsForEmptyQueryUseCase(snippet_gateway=store)

    results = await top.execute(SearchQuery(library_ids=["team"], tags=["ui"]))

    assert _ids(results) == ["team"]


def test_recency_bonus_decays_linearly_over_the_window():
    now = datetime(2024, 3, 1, tzinfo=timezone.utc)
    snippets = [_make_snippet("used", "Used", "used", last_used_at=now)]
    normalize = create_recency_normalizer(snippets, now)

    assert normalize(None) == 0
    assert normalize(now + timedelta(hours=1)) == RECENCY_WEIGHT
    assert normalize(now) == RECENCY_WEIGHT
    assert normalize(now - timedelta(days=15)) == pytest.approx(RECENCY_WEIGHT / 2)
    assert normalize(now - timedelta(days=30)) == 0
    assert normalize(now - timedelta(days=45)) == 0


def test_recency_bonus_is_disabled_without_usage_history():
    now = datetime(2024, 3, 1, tzinfo=timezone.utc)
    normalize = create_recency_normalizer([_make_snippet("new", "New", "new")], now)

    assert normalize(now) == 0
