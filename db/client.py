"""
db/client.py

Document store construction.

Stores are built explicitly and handed to their consumers; nothing here keeps
a process-wide client. The FastAPI app builds one per process in its lifespan
and the CLI builds one per invocation.
"""

from __future__ import annotations

import logging

from google.cloud import firestore

from db.config import DocumentStoreSettings, get_document_store_settings
from db.repositories.document_store import DocumentStore, FirestoreDocumentStore
from db.repositories.memory_store import InMemoryDocumentStore

logger = logging.getLogger(__name__)


def create_firestore_client(settings: DocumentStoreSettings) -> firestore.Client:
    kwargs: dict[str, str] = {}
    if settings.project_id:
        kwargs["project"] = settings.project_id
    if settings.database_id:
        kwargs["database"] = settings.database_id
    return firestore.Client(**kwargs)


def create_document_store(settings: DocumentStoreSettings | None = None) -> DocumentStore:
    """Build the configured document store backend."""
    settings = settings or get_document_store_settings()
    if settings.backend == "memory":
        logger.warning("Using in-memory document store; data is not persisted")
        return InMemoryDocumentStore()

    client = create_firestore_client(settings)
    logger.info(
        "Firestore client created project=%s database=%s",
        client.project,
        settings.database_id or "(default)",
    )
    return FirestoreDocumentStore(client)
