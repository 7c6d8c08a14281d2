"""
Shared fixtures for the ranking test suite.

The environment is prepared before ``app.main`` is imported, because the
module builds its FastAPI app at import time.
"""

from __future__ import annotations

import os

os.environ.setdefault("APP_MODE", "local")
os.environ.setdefault("RANKING_API_KEY", "test-secret")
os.environ.setdefault("DOCUMENT_STORE_BACKEND", "memory")

from collections.abc import Iterator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.config import RankingSettings  # noqa: E402
from db.repositories.errors import DocumentStoreError  # noqa: E402
from db.repositories.memory_store import InMemoryDocumentStore  # noqa: E402

API_KEY = "test-secret"
SOURCE_PATH = "develop/ZVP3ieLUu9RTLQN8vkIe"


class RecordingStore(InMemoryDocumentStore):
    """In-memory store that records every read and write it serves."""

    def __init__(self, documents: dict[str, dict[str, Any]] | None = None) -> None:
        super().__init__(documents)
        self.calls: list[tuple[str, str]] = []

    def get_document(self, path: str) -> dict[str, Any] | None:
        self.calls.append(("get_document", path))
        return super().get_document(path)

    def list_documents(self, collection_path: str) -> list[dict[str, Any]]:
        self.calls.append(("list_documents", collection_path))
        return super().list_documents(collection_path)

    def count_documents(self, collection_path: str) -> int:
        self.calls.append(("count_documents", collection_path))
        return super().count_documents(collection_path)

    def create_document(
        self,
        collection_path: str,
        data: dict[str, Any],
        *,
        timestamp_field: str | None = None,
    ) -> str:
        self.calls.append(("create_document", collection_path))
        return super().create_document(
            collection_path, data, timestamp_field=timestamp_field
        )


class FaultyStore(RecordingStore):
    """Raises on reads or writes of selected collections."""

    def __init__(
        self,
        documents: dict[str, dict[str, Any]] | None = None,
        *,
        fail_get: bool = False,
        fail_list: set[str] | None = None,
        fail_count: bool = False,
        fail_create: bool = False,
        error: Exception | None = None,
    ) -> None:
        super().__init__(documents)
        self._fail_get = fail_get
        self._fail_list = fail_list or set()
        self._fail_count = fail_count
        self._fail_create = fail_create
        self._error = error or DocumentStoreError("simulated outage")

    def get_document(self, path: str) -> dict[str, Any] | None:
        if self._fail_get:
            self.calls.append(("get_document", path))
            raise self._error
        return super().get_document(path)

    def list_documents(self, collection_path: str) -> list[dict[str, Any]]:
        if collection_path in self._fail_list:
            self.calls.append(("list_documents", collection_path))
            raise self._error
        return super().list_documents(collection_path)

    def count_documents(self, collection_path: str) -> int:
        if self._fail_count:
            self.calls.append(("count_documents", collection_path))
            raise self._error
        return super().count_documents(collection_path)

    def create_document(
        self,
        collection_path: str,
        data: dict[str, Any],
        *,
        timestamp_field: str | None = None,
    ) -> str:
        if self._fail_create:
            self.calls.append(("create_document", collection_path))
            raise self._error
        return super().create_document(
            collection_path, data, timestamp_field=timestamp_field
        )


def seed_example(store: InMemoryDocumentStore) -> None:
    """Alice has shards 3 + 2, Bob has none."""
    store.put_document(
        SOURCE_PATH,
        {
            "characters": [
                {"id": "0000", "name": "Alice", "url": "https://example.com/alice"},
                {"id": "0001", "name": "Bob", "url": "https://example.com/bob"},
            ]
        },
    )
    store.put_document("ratings/0000/shards/0", {"count": 3})
    store.put_document("ratings/0000/shards/1", {"count": 2})


def ranking_documents(store: InMemoryDocumentStore) -> list[dict[str, Any]]:
    return store.list_documents("ranking")


@pytest.fixture()
def store() -> RecordingStore:
    """Store seeded with the two-entity example."""
    seeded = RecordingStore()
    seed_example(seeded)
    return seeded


@pytest.fixture()
def settings() -> RankingSettings:
    return RankingSettings(
        api_key=API_KEY,
        fixed_entity_count=2,
        fetch_concurrency=4,
        aggregation_timeout_seconds=5.0,
    )


@pytest.fixture()
def client_factory(settings: RankingSettings) -> Iterator[Any]:
    """Build a TestClient bound to a given store."""
    from app.api.dependencies import get_document_store, get_settings
    from app.main import app

    def _build(target_store: InMemoryDocumentStore) -> TestClient:
        app.dependency_overrides[get_document_store] = lambda: target_store
        app.dependency_overrides[get_settings] = lambda: settings
        return TestClient(app)

    yield _build
    app.dependency_overrides.clear()


@pytest.fixture()
def client(client_factory: Any, store: RecordingStore) -> TestClient:
    return client_factory(store)
