"""
In-process document store backend.

Used for local runs (``DOCUMENT_STORE_BACKEND=memory``) and tests. Documents
are held in a flat dict keyed by full document path.
"""

from __future__ import annotations

import copy
import threading
import uuid
from datetime import datetime, timezone
from typing import Any

from db.repositories.errors import DocumentStoreError


def _split_path(path: str) -> list[str]:
    parts = [part for part in path.strip("/").split("/") if part]
    if not parts:
        raise DocumentStoreError("Empty document path.")
    return parts


def _document_path(path: str) -> str:
    parts = _split_path(path)
    if len(parts) % 2 != 0:
        raise DocumentStoreError(f"{path!r} is not a document path.")
    return "/".join(parts)


def _collection_path(path: str) -> str:
    parts = _split_path(path)
    if len(parts) % 2 != 1:
        raise DocumentStoreError(f"{path!r} is not a collection path.")
    return "/".join(parts)


class InMemoryDocumentStore:
    """
    Thread-safe dictionary-backed document store.

    Reads return deep copies so callers cannot mutate stored state.
    """

    def __init__(self, documents: dict[str, dict[str, Any]] | None = None) -> None:
        self._lock = threading.Lock()
        self._documents: dict[str, dict[str, Any]] = {}
        for path, data in (documents or {}).items():
            self.put_document(path, data)

    def put_document(self, path: str, data: dict[str, Any]) -> None:
        """Create or replace the document at *path*."""
        key = _document_path(path)
        with self._lock:
            self._documents[key] = copy.deepcopy(data)

    def get_document(self, path: str) -> dict[str, Any] | None:
        key = _document_path(path)
        with self._lock:
            data = self._documents.get(key)
            return copy.deepcopy(data) if data is not None else None

    def list_documents(self, collection_path: str) -> list[dict[str, Any]]:
        collection = _collection_path(collection_path)
        with self._lock:
            return [
                copy.deepcopy(data)
                for key, data in self._documents.items()
                if key.rsplit("/", 1)[0] == collection
            ]

    def count_documents(self, collection_path: str) -> int:
        collection = _collection_path(collection_path)
        with self._lock:
            return sum(1 for key in self._documents if key.rsplit("/", 1)[0] == collection)

    def create_document(
        self,
        collection_path: str,
        data: dict[str, Any],
        *,
        timestamp_field: str | None = None,
    ) -> str:
        collection = _collection_path(collection_path)
        document_id = uuid.uuid4().hex[:20]
        payload = copy.deepcopy(data)
        if timestamp_field:
            payload[timestamp_field] = datetime.now(timezone.utc)
        with self._lock:
            self._documents[f"{collection}/{document_id}"] = payload
        return document_id
