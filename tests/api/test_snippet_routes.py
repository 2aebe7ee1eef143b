from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from codespark.api import create_app
from codespark.config import STORE_MEMORY, Settings
from codespark.services import create_services
from codespark.snippet import Snippet
from codespark.storage import InMemoryPreferencesGateway, InMemorySnippetStore

BASE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)
NOW = datetime(2024, 3, 1, tzinfo=timezone.utc)


class _StubClipboard:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.copied = []

    async def copy_text(self, text):
        if self.error is not None:
            raise self.error
        self.copied.append(text)


def _make_settings(**overrides) -> Settings:
    fields = {
        "data_dir": Path("/tmp/codespark-tests"),
        "store_backend": STORE_MEMORY,
        "redis_url": "redis://127.0.0.1:6379/0",
        "redis_prefix": "codespark",
        "default_library_id": "personal",
        "search_limit": 20,
        "log_level": "INFO",
    }
    fields.update(overrides)
    return Settings(**fields)


def _make_snippet(id: str, title: str, **overrides) -> Snippet:
    fields = {
        "id": id,
        "title": title,
        "body": "echo hello",
        "library_id": "personal",
        "created_at": BASE_DATE,
        "updated_at": BASE_DATE,
    }
    fields.update(overrides)
    return Snippet(**fields)


def _make_client(snippets=(), *, clipboard=None, **settings_overrides):
    store = InMemorySnippetStore(snippets)
    preferences = InMemoryPreferencesGateway()
    clipboard = clipboard or _StubClipboard()
    services = create_services(
        _make_settings(**settings_overrides),
        snippet_store=store,
        preferences_gateway=preferences,
        clipboard=clipboard,
        now=lambda: NOW,
        generate_id=lambda: "generated-id",
    )
    return TestClient(create_app(services=services)), store, clipboard


@pytest.fixture
def seeded():
    return _make_client(
        [
            _make_snippet("deploy-shortcut", "Ship it", shortcut="deploy"),
            _make_snippet("deploy-favorite", "Deploy favorite", is_favorite=True),
            _make_snippet("deploy-title", "Run deploy via CLI"),
            _make_snippet("team-note", "Team deploy notes", library_id="team", tags=["ops"]),
        ]
    )


def test_search_orders_by_score(seeded):
    client, _store, _clipboard = seeded

    response = client.get("/snippets", params={"query": "deploy", "library_id": "personal"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["query"] == "deploy"
    assert [item["snippet"]["id"] for item in payload["results"]] == [
        "deploy-shortcut",
        "deploy-favorite",
        "deploy-title",
    ]
    assert payload["results"][1]["score"] == pytest.approx(75)


def test_search_filters_by_tag(seeded):
    client, _store, _clipboard = seeded

    response = client.get("/snippets", params={"query": "deploy", "tag": ["OPS"]})

    assert [item["snippet"]["id"] for item in response.json()["results"]] == ["team-note"]


def test_blank_query_returns_suggestions(seeded):
    client, _store, _clipboard = seeded

    search = client.get("/snippets", params={"limit": 2})
    suggestions = client.get("/snippets/suggestions", params={"limit": 2})

    assert search.status_code == 200
    assert suggestions.status_code == 200
    assert [item["snippet"]["id"] for item in search.json()["results"]] == [
        item["snippet"]["id"] for item in suggestions.json()
    ]
    assert suggestions.json()[0]["snippet"]["id"] == "deploy-favorite"


def test_create_snippet_uses_default_library():
    client, store, _clipboard = _make_client()

    response = client.post("/snippets", json={"title": "  Greeting ", "body": "hello", "tags": ["demo"]})

    assert response.status_code == 201
    payload = response.json()
    assert payload["id"] == "generated-id"
    assert payload["title"] == "Greeting"
    assert payload["library_id"] == "personal"


def test_create_snippet_reports_every_validation_issue():
    client, _store, _clipboard = _make_client()

    response = client.post("/snippets", json={"title": " ", "body": "", "tags": ["a", "a"]})

    assert response.status_code == 422
    codes = [issue["code"] for issue in response.json()["detail"]["issues"]]
    assert codes == ["TITLE_EMPTY", "BODY_EMPTY", "TAGS_DUPLICATED"]


def test_create_snippet_without_any_library_is_rejected():
    client, _store, _clipboard = _make_client(default_library_id=None)

    response = client.post("/snippets", json={"title": "t", "body": "b"})

    assert response.status_code == 400


def test_create_snippet_in_read_only_library_is_forbidden():
    client, _store, _clipboard = _make_client()

    response = client.post("/snippets", json={"title": "t", "body": "b", "library_id": "team"})

    assert response.status_code == 403


def test_patch_clears_nullable_fields_and_keeps_absent_ones(seeded):
    client, store, _clipboard = seeded

    response = client.patch("/snippets/deploy-shortcut", json={"shortcut": None, "isFavorite": True})

    assert response.status_code == 200
    payload = response.json()
    assert payload["shortcut"] is None
    assert payload["is_favorite"] is True
    assert payload["title"] == "Ship it"
    assert payload["updated_at"].startswith("2024-03-01")


def test_patch_unknown_snippet_is_not_found(seeded):
    client, _store, _clipboard = seeded

    response = client.patch("/snippets/missing", json={"title": "x"})

    assert response.status_code == 404


def test_delete_read_only_snippet_is_forbidden(seeded):
    client, _store, _clipboard = seeded

    response = client.delete("/snippets/team-note")

    assert response.status_code == 403


def test_delete_returns_removed_snippet(seeded):
    client, store, _clipboard = seeded

    response = client.delete("/snippets/deploy-title")

    assert response.status_code == 200
    assert response.json()["id"] == "deploy-title"
    assert client.delete("/snippets/deploy-title").status_code == 404


def test_copy_records_usage():
    client, _store, clipboard = _make_client([_make_snippet("greet", "Greeting")])

    response = client.post("/snippets/greet/copy")

    assert response.status_code == 200
    assert response.json()["usage_count"] == 1
    assert clipboard.copied == ["echo hello"]


def test_copy_failure_maps_to_bad_gateway():
    client, store, _clipboard = _make_client(
        [_make_snippet("greet", "Greeting")],
        clipboard=_StubClipboard(RuntimeError("clipboard locked")),
    )

    response = client.post("/snippets/greet/copy")

    assert response.status_code == 502


def test_library_selection_round_trip():
    client, _store, _clipboard = _make_client()

    libraries = client.get("/libraries").json()
    assert [library["id"] for library in libraries] == ["personal", "team"]
    assert libraries[1]["is_read_only"] is True

    assert client.get("/libraries/active").json() == {"library_id": "personal"}

    switched = client.put("/libraries/active", json={"library_id": "team"})
    assert switched.status_code == 200
    assert client.get("/libraries/active").json() == {"library_id": "team"}
    assert client.get("/preferences").json()["default_library_id"] == "team"

    assert client.put("/libraries/active", json={"library_id": "nope"}).status_code == 404

    cleared = client.put("/libraries/active", json={"library_id": None})
    assert cleared.json() == {"library_id": None}
