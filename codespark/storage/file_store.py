"""JSON-file backed snippet store.

The document layout is::

    {"version": 1, "snippets": [...], "libraries": [...]}

with camelCase keys. The file is created on first access and rebuilt from
scratch when it cannot be parsed.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from ..snippet.model import LibraryId, Snippet, SnippetId, SnippetLibrary
from .defaults import default_libraries

logger = logging.getLogger("codespark")

STORE_VERSION = 1
DEFAULT_FILE_NAME = "snippets.json"


@dataclass(slots=True)
class _StoreDocument:
    snippets: List[Snippet] = field(default_factory=list)
    libraries: List[SnippetLibrary] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": STORE_VERSION,
            "snippets": [snippet.model_dump(mode="json", by_alias=True) for snippet in self.snippets],
            "libraries": [library.model_dump(mode="json", by_alias=True) for library in self.libraries],
        }


class FileSnippetStore:
    """Snippet and library gateway persisted to a single JSON document."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        libraries: Iterable[SnippetLibrary] | None = None,
    ) -> None:
        self.path = Path(path)
        provided = list(libraries or []) or default_libraries()
        self._libraries: Dict[LibraryId, SnippetLibrary] = {library.id: library for library in provided}
        self._cache: _StoreDocument | None = None

    async def get_all(self) -> List[Snippet]:
        document = self._read_store()
        return [snippet.model_copy(deep=True) for snippet in document.snippets]

    async def get_by_id(self, snippet_id: SnippetId) -> Snippet | None:
        document = self._read_store()
        for snippet in document.snippets:
            if snippet.id == snippet_id:
                return snippet.model_copy(deep=True)
        return None

    async def save(self, snippet: Snippet) -> None:
        document = self._read_store()
        snippets = list(document.snippets)
        stored = snippet.model_copy(deep=True)
        for index, existing in enumerate(snippets):
            if existing.id == snippet.id:
                snippets[index] = stored
                break
        else:
            snippets.append(stored)
        self._write_store(_StoreDocument(snippets=snippets, libraries=document.libraries))

    async def delete(self, snippet_id: SnippetId) -> None:
        document = self._read_store()
        snippets = [snippet for snippet in document.snippets if snippet.id != snippet_id]
        if len(snippets) == len(document.snippets):
            return
        self._write_store(_StoreDocument(snippets=snippets, libraries=document.libraries))

    async def get_libraries(self) -> List[SnippetLibrary]:
        self._read_store()
        return list(self._libraries.values())

    def _read_store(self) -> _StoreDocument:
        if self._cache is None:
            self._cache = self._load_store_from_disk()
        return self._cache

    def _load_store_from_disk(self) -> _StoreDocument:
        if not self.path.exists():
            return self._recreate_store()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Failed to read snippet store %s, recreating file: %s", self.path, exc)
            return self._recreate_store()

        if not isinstance(data, dict):
            logger.warning("Snippet store %s has an unexpected layout, recreating file", self.path)
            return self._recreate_store()

        document = _StoreDocument(
            snippets=self._normalize_snippets(data.get("snippets")),
            libraries=self._normalize_libraries(data.get("libraries")),
        )
        if data.get("version") != STORE_VERSION:
            logger.info("Upgrading snippet store %s to version %d", self.path, STORE_VERSION)
            self._write_store(document)
        return document

    def _normalize_snippets(self, records: Any) -> List[Snippet]:
        if not isinstance(records, list):
            return []
        snippets: List[Snippet] = []
        for record in records:
            try:
                snippets.append(Snippet.model_validate(record))
            except ValidationError:
                logger.debug("Skipping malformed snippet record: %r", record)
        return snippets

    def _normalize_libraries(self, records: Any) -> List[SnippetLibrary]:
        if isinstance(records, list):
            for record in records:
                try:
                    library = SnippetLibrary.model_validate(record)
                except ValidationError:
                    logger.debug("Skipping malformed library record: %r", record)
                    continue
                self._libraries[library.id] = library
        return list(self._libraries.values())

    def _recreate_store(self) -> _StoreDocument:
        document = _StoreDocument(libraries=list(self._libraries.values()))
        self._write_store(document)
        return document

    def _write_store(self, document: _StoreDocument) -> None:
        write_text_atomic(self.path, json.dumps(document.to_dict(), indent=2, ensure_ascii=False))
        self._cache = document


def write_text_atomic(path: Path, payload: str) -> None:
    """Write ``payload`` to a sibling temp file and swap it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f"{path.name}.tmp")
    tmp_path.write_text(payload, encoding="utf-8")
    os.replace(tmp_path, path)


__all__ = ["DEFAULT_FILE_NAME", "FileSnippetStore", "STORE_VERSION", "write_text_atomic"]
