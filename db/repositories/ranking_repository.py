"""
db/repositories/ranking_repository.py

Typed reads and writes for the ranking pipeline.

Every document read here is validated against the ``ranking.models``
schemas before it reaches the core; a document that does not match raises
``MalformedRecordError`` naming its path instead of letting missing or
mistyped fields flow into the aggregation.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from db.repositories.document_store import DocumentStore
from db.repositories.errors import MalformedRecordError
from db.repositories.types import RankingStoreLayout
from ranking.models import EntityRecord, RatingEntry, ShardRecord

logger = logging.getLogger(__name__)


class RankingRepository:
    """
    Reads entity lists and shard counters, writes ranking snapshots.

    Parameters
    ----------
    store:
        Backend implementing :class:`DocumentStore`. Shared by concurrent
        shard reads; never mutated by this class except through
        :meth:`save_ranking`.
    layout:
        Collection and document paths. Defaults match the production layout.
    """

    def __init__(
        self,
        store: DocumentStore,
        layout: RankingStoreLayout | None = None,
    ) -> None:
        self._store = store
        self._layout = layout or RankingStoreLayout()

    @property
    def layout(self) -> RankingStoreLayout:
        return self._layout

    def load_entity_records(self) -> list[EntityRecord] | None:
        """
        Return the entity list, or ``None`` when the source document is missing.
        """
        path = self._layout.source_document_path
        document = self._store.get_document(path)
        if document is None:
            logger.info("Source document %r does not exist", path)
            return None

        raw_records = document.get(self._layout.source_field)
        if not isinstance(raw_records, list):
            raise MalformedRecordError(
                path,
                f"field {self._layout.source_field!r} must be a list, "
                f"got {type(raw_records).__name__}",
            )

        records: list[EntityRecord] = []
        for position, raw in enumerate(raw_records):
            records.append(
                _validate(EntityRecord, raw, f"{path}#{self._layout.source_field}[{position}]")
            )
        logger.debug("load_entity_records path=%r -> %d records", path, len(records))
        return records

    def fetch_shards(self, group_id: str) -> list[ShardRecord]:
        """Return every shard record in one shard group (possibly none)."""
        collection_path = self._layout.shard_collection_path(group_id)
        return [
            _validate(ShardRecord, raw, collection_path)
            for raw in self._store.list_documents(collection_path)
        ]

    def count_shard_groups(self) -> int:
        """Count documents in the shard root collection."""
        return self._store.count_documents(self._layout.shard_root_collection)

    def save_ranking(
        self,
        ranking: Sequence[RatingEntry],
        *,
        include_timestamp: bool = True,
    ) -> str:
        """
        Write *ranking* as a new document and return its id.

        Existing ranking documents are never overwritten.
        """
        payload = {"ranking": [entry.model_dump() for entry in ranking]}
        document_id = self._store.create_document(
            self._layout.ranking_collection,
            payload,
            timestamp_field=self._layout.timestamp_field if include_timestamp else None,
        )
        logger.debug(
            "save_ranking collection=%r id=%s entries=%d",
            self._layout.ranking_collection,
            document_id,
            len(ranking),
        )
        return document_id


def _validate(model: type[Any], raw: object, path: str) -> Any:
    if not isinstance(raw, dict):
        raise MalformedRecordError(path, f"expected an object, got {type(raw).__name__}")
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise MalformedRecordError(path, f"{exc.error_count()} validation error(s)") from exc
