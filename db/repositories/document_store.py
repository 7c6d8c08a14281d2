"""
Document store abstractions for ranking reads and writes.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import firestore

from db.repositories.errors import DocumentStoreError

logger = logging.getLogger(__name__)

# RetryError and credential failures do not subclass GoogleAPICallError.
_CLIENT_ERRORS = (GoogleAPIError, GoogleAuthError)


class DocumentStore(Protocol):
    """
    Minimal document store surface used by the ranking repository.

    Paths are slash-separated, alternating collection and document ids.
    """

    def get_document(self, path: str) -> dict[str, Any] | None:
        ...

    def list_documents(self, collection_path: str) -> list[dict[str, Any]]:
        ...

    def count_documents(self, collection_path: str) -> int:
        ...

    def create_document(
        self,
        collection_path: str,
        data: dict[str, Any],
        *,
        timestamp_field: str | None = None,
    ) -> str:
        ...


class FirestoreDocumentStore:
    """
    Cloud Firestore backend.

    The client is created by the caller and shared by concurrent reads.
    """

    def __init__(self, client: firestore.Client) -> None:
        self._client = client

    def get_document(self, path: str) -> dict[str, Any] | None:
        try:
            snapshot = self._client.document(path).get()
        except _CLIENT_ERRORS as exc:
            raise DocumentStoreError(f"Failed to read document {path!r}.") from exc
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    def list_documents(self, collection_path: str) -> list[dict[str, Any]]:
        try:
            return [
                snapshot.to_dict() or {}
                for snapshot in self._client.collection(collection_path).stream()
            ]
        except _CLIENT_ERRORS as exc:
            raise DocumentStoreError(
                f"Failed to list collection {collection_path!r}."
            ) from exc

    def count_documents(self, collection_path: str) -> int:
        try:
            results = self._client.collection(collection_path).count(alias="total").get()
        except _CLIENT_ERRORS as exc:
            raise DocumentStoreError(
                f"Failed to count collection {collection_path!r}."
            ) from exc
        total = int(results[0][0].value) if results and results[0] else 0
        logger.debug("count_documents collection=%r -> %d", collection_path, total)
        return total

    def create_document(
        self,
        collection_path: str,
        data: dict[str, Any],
        *,
        timestamp_field: str | None = None,
    ) -> str:
        payload = dict(data)
        if timestamp_field:
            payload[timestamp_field] = firestore.SERVER_TIMESTAMP
        reference = self._client.collection(collection_path).document()
        try:
            reference.set(payload)
        except _CLIENT_ERRORS as exc:
            raise DocumentStoreError(
                f"Failed to create document in {collection_path!r}."
            ) from exc
        return reference.id
