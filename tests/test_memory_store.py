from __future__ import annotations

import pytest

from db.repositories.errors import DocumentStoreError
from db.repositories.memory_store import InMemoryDocumentStore


class TestInMemoryDocumentStore:
    def test_lists_only_direct_children(self) -> None:
        store = InMemoryDocumentStore(
            {
                "ratings/0000": {"n": 0},
                "ratings/0000/shards/a": {"count": 1},
                "ratings/0001": {"n": 1},
            }
        )
        assert store.count_documents("ratings") == 2
        assert store.list_documents("ratings/0000/shards") == [{"count": 1}]

    def test_reads_are_copies(self) -> None:
        store = InMemoryDocumentStore({"a/b": {"items": [1]}})
        data = store.get_document("a/b")
        assert data is not None
        data["items"].append(2)
        assert store.get_document("a/b") == {"items": [1]}

    def test_rejects_mismatched_paths(self) -> None:
        store = InMemoryDocumentStore()
        with pytest.raises(DocumentStoreError):
            store.get_document("only-a-collection")
        with pytest.raises(DocumentStoreError):
            store.list_documents("a/b")
