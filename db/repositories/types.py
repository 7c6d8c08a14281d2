"""
Typed DTOs used by the ranking repository.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RankingStoreLayout:
    """
    Where ranking inputs are read from and where rankings are written.

    Shard records for group ``<id>`` live in
    ``<shard_root_collection>/<id>/<shard_subcollection>``.
    """

    source_document_path: str = "develop/ZVP3ieLUu9RTLQN8vkIe"
    source_field: str = "characters"
    shard_root_collection: str = "ratings"
    shard_subcollection: str = "shards"
    ranking_collection: str = "ranking"
    timestamp_field: str = "createdAt"

    def shard_collection_path(self, group_id: str) -> str:
        return f"{self.shard_root_collection}/{group_id}/{self.shard_subcollection}"
