from datetime import datetime, timezone

import pytest

from codespark.snippet import ReadOnlyLibraryViolationError, Snippet, SnippetNotFoundError
from codespark.storage import InMemorySnippetStore
from codespark.usecases import DeleteSnippetUseCase

BASE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _make_snippet(id: str, library_id: str = "personal") -> Snippet:
    return Snippet(
        id=id,
        title=f"Snippet {id}",
        body="echo hi",
        library_id=library_id,
        created_at=BASE_DATE,
        updated_at=BASE_DATE,
    )


@pytest.mark.asyncio
async def test_deletes_and_returns_previous_state():
    snippet = _make_snippet("personal-1")
    store = InMemorySnippetStore([snippet])
    use_case = DeleteSnippetUseCase(snippet_gateway=store, library_gateway=store)

    deleted = await use_case.execute("personal-1")

    assert deleted == snippet
    assert await store.get_by_id("personal-1") is None


@pytest.mark.asyncio
async def test_unknown_snippet_raises_not_found():
    store = InMemorySnippetStore()
    use_case = DeleteSnippetUseCase(snippet_gateway=store, library_gateway=store)

    with pytest.raises(SnippetNotFoundError) as excinfo:
        await use_case.execute("missing")

    assert excinfo.value.snippet_id == "missing"


@pytest.mark.asyncio
async def test_read_only_library_snippets_survive_delete():
    store = InMemorySnippetStore([_make_snippet("team-1", library_id="team")])
    use_case = DeleteSnippetUseCase(snippet_gateway=store, library_gateway=store)

    with pytest.raises(ReadOnlyLibraryViolationError):
        await use_case.execute("team-1")

    assert await store.get_by_id("team-1") is not None
