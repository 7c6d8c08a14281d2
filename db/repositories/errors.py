"""
Repository-layer exceptions for document store reads and writes.
"""

from __future__ import annotations


class DocumentRepositoryError(Exception):
    """Base exception for document repository failures."""


class DocumentStoreError(DocumentRepositoryError):
    """Raised when the backing document store rejects or fails an operation."""


class MalformedRecordError(DocumentRepositoryError):
    """
    Raised when a stored document does not match its expected shape.

    ``path`` identifies the offending document or collection.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Malformed record at {path!r}: {reason}")
        self.path = path
        self.reason = reason
