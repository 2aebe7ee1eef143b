"""Redis-backed snippet store."""

from __future__ import annotations

import json
import logging
from typing import Iterable, List

import redis
from pydantic import ValidationError

from ..snippet.model import Snippet, SnippetId, SnippetLibrary, as_utc
from .defaults import default_libraries

logger = logging.getLogger("codespark")


class RedisSnippetStore:
    """Store one JSON record per snippet plus a creation-ordered index.

    Libraries are not stored in Redis; they come from the constructor.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        *,
        prefix: str = "codespark",
        libraries: Iterable[SnippetLibrary] | None = None,
    ) -> None:
        self.redis = redis_client
        self.prefix = prefix
        provided = list(libraries or []) or default_libraries()
        self._libraries = {library.id: library for library in provided}

    @property
    def index_key(self) -> str:
        return f"{self.prefix}:snippets:index"

    async def get_all(self) -> List[Snippet]:
        ids = self.redis.zrange(self.index_key, 0, -1)
        snippets: List[Snippet] = []
        for raw_id in ids:
            snippet_id = raw_id.decode("utf-8") if isinstance(raw_id, bytes) else str(raw_id)
            snippet = self._read_record(snippet_id)
            if snippet is not None:
                snippets.append(snippet)
        return snippets

    async def get_by_id(self, snippet_id: SnippetId) -> Snippet | None:
        return self._read_record(snippet_id)

    async def save(self, snippet: Snippet) -> None:
        payload = json.dumps(
            snippet.model_dump(mode="json", by_alias=True), separators=(",", ":")
        )
        pipe = self.redis.pipeline()
        pipe.set(self._record_key(snippet.id), payload)
        pipe.zadd(self.index_key, {snippet.id: as_utc(snippet.created_at).timestamp()})
        pipe.execute()

    async def delete(self, snippet_id: SnippetId) -> None:
        pipe = self.redis.pipeline()
        pipe.delete(self._record_key(snippet_id))
        pipe.zrem(self.index_key, snippet_id)
        pipe.execute()

    async def get_libraries(self) -> List[SnippetLibrary]:
        return list(self._libraries.values())

    def _record_key(self, snippet_id: SnippetId) -> str:
        return f"{self.prefix}:snippet:{snippet_id}"

    def _read_record(self, snippet_id: SnippetId) -> Snippet | None:
        raw = self.redis.get(self._record_key(snippet_id))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            return Snippet.model_validate_json(raw)
        except ValidationError:
            logger.warning("Ignoring malformed snippet record %s", snippet_id)
            return None


__all__ = ["RedisSnippetStore"]
