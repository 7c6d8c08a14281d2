"""
ranking/errors.py

Failures raised by the ranking pipeline.
"""

from __future__ import annotations


class RankingError(Exception):
    """Base exception for ranking pipeline failures."""


class SourceDocumentNotFoundError(RankingError):
    """
    Raised when the entity list document does not exist.

    Not an internal fault: triggers report it as "not found".
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Source document {path!r} does not exist.")
        self.path = path


class RankingAggregationError(RankingError):
    """
    Raised when the ranking cannot be computed.

    Nothing has been written when this is raised.
    """


class ShardFetchError(RankingAggregationError):
    """Raised when one shard group cannot be read."""

    def __init__(self, group_id: str) -> None:
        super().__init__(f"Failed to read shards for group {group_id!r}.")
        self.group_id = group_id


class AggregationTimeoutError(RankingAggregationError):
    """Raised when shard fetches do not finish within the configured deadline."""


class RankingPersistenceError(RankingError):
    """Raised when the computed ranking cannot be written."""
