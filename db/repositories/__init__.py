"""
Repository layer exports.
"""

from db.repositories.document_store import DocumentStore, FirestoreDocumentStore
from db.repositories.errors import (
    DocumentRepositoryError,
    DocumentStoreError,
    MalformedRecordError,
)
from db.repositories.memory_store import InMemoryDocumentStore
from db.repositories.ranking_repository import RankingRepository
from db.repositories.types import RankingStoreLayout

__all__ = [
    "DocumentStore",
    "FirestoreDocumentStore",
    "InMemoryDocumentStore",
    "RankingRepository",
    "RankingStoreLayout",
    "DocumentRepositoryError",
    "DocumentStoreError",
    "MalformedRecordError",
]
