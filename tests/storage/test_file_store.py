import json
from datetime import datetime, timezone

import pytest

from codespark.snippet import LibraryCategory, Snippet, SnippetLibrary
from codespark.storage import FileSnippetStore
from codespark.storage.file_store import STORE_VERSION

BASE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _make_snippet(id: str, **overrides) -> Snippet:
    fields = {
        "id": id,
        "title": f"Snippet {id}",
        "body": "echo hi",
        "tags": ["shell"],
        "library_id": "personal",
        "created_at": BASE_DATE,
        "updated_at": BASE_DATE,
    }
    fields.update(overrides)
    return Snippet(**fields)


@pytest.mark.asyncio
async def test_creates_store_file_on_first_read(tmp_path):
    path = tmp_path / "nested" / "snippets.json"
    store = FileSnippetStore(path)

    assert await store.get_all() == []

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["version"] == STORE_VERSION
    assert document["snippets"] == []
    assert [library["id"] for library in document["libraries"]] == ["personal", "team"]
    assert document["libraries"][1]["isReadOnly"] is True


@pytest.mark.asyncio
async def test_save_upserts_and_survives_reload(tmp_path):
    path = tmp_path / "snippets.json"
    store = FileSnippetStore(path)
    snippet = _make_snippet("a", last_used_at=BASE_DATE)

    await store.save(snippet)
    await store.save(snippet.model_copy(update={"title": "Renamed"}))

    reloaded = FileSnippetStore(path)
    assert await reloaded.get_all() == [snippet.model_copy(update={"title": "Renamed"})]

    record = json.loads(path.read_text(encoding="utf-8"))["snippets"][0]
    assert record["libraryId"] == "personal"
    assert record["usageCount"] == 0
    assert record["lastUsedAt"].startswith("2024-01-01T00:00:00")


@pytest.mark.asyncio
async def test_delete_removes_record_and_ignores_unknown_ids(tmp_path):
    store = FileSnippetStore(tmp_path / "snippets.json")
    await store.save(_make_snippet("a"))
    await store.save(_make_snippet("b"))

    await store.delete("a")
    await store.delete("missing")

    assert [snippet.id for snippet in await store.get_all()] == ["b"]
    assert await store.get_by_id("a") is None


@pytest.mark.asyncio
async def test_returned_snippets_are_copies(tmp_path):
    store = FileSnippetStore(tmp_path / "snippets.json")
    await store.save(_make_snippet("a"))

    fetched = await store.get_by_id("a")
    fetched.tags.append("mutated")

    assert (await store.get_by_id("a")).tags == ["shell"]


@pytest.mark.asyncio
async def test_unreadable_file_is_recreated(tmp_path):
    path = tmp_path / "snippets.json"
    path.write_text("{not json", encoding="utf-8")
    store = FileSnippetStore(path)

    assert await store.get_all() == []
    assert json.loads(path.read_text(encoding="utf-8"))["version"] == STORE_VERSION


@pytest.mark.asyncio
async def test_legacy_document_is_normalized_and_upgraded(tmp_path):
    path = tmp_path / "snippets.json"
    valid = _make_snippet("valid").model_dump(mode="json", by_alias=True)
    valid.pop("lastUsedAt")
    path.write_text(
        json.dumps(
            {
                "snippets": [valid, {"id": "broken"}],
                "libraries": [
                    {"id": "ops", "name": "Ops", "category": "PROJECT", "isReadOnly": False},
                    {"id": 42},
                ],
            }
        ),
        encoding="utf-8",
    )
    store = FileSnippetStore(path)

    snippets = await store.get_all()
    libraries = await store.get_libraries()

    assert [snippet.id for snippet in snippets] == ["valid"]
    assert snippets[0].last_used_at is None
    assert [library.id for library in libraries] == ["personal", "team", "ops"]
    assert json.loads(path.read_text(encoding="utf-8"))["version"] == STORE_VERSION


@pytest.mark.asyncio
async def test_custom_libraries_replace_defaults(tmp_path):
    libraries = [SnippetLibrary(id="docs", name="Docs", category=LibraryCategory.PROJECT, is_read_only=True)]
    store = FileSnippetStore(tmp_path / "snippets.json", libraries=libraries)

    assert await store.get_libraries() == libraries
