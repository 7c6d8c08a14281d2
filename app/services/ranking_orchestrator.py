"""
app/services/ranking_orchestrator.py

Ranking pipeline orchestrator.

Wires RankingRepository -> name dictionary -> ShardAggregator -> composer ->
RankingRepository into one run. Both trigger adapters (HTTP and callable)
go through :class:`RankingOrchestrator`; neither carries its own copy of the
pipeline.

Steps
-----
1. Load the entity list document.
2. Build the id -> name dictionary.
3. Resolve the entity count N (fixed constant or live count query).
4. Aggregate shard groups ``0..N-1`` and sort.
5. Persist the ranking as a brand-new document.

Failure contract
----------------
- Missing source document   -> ``SourceDocumentNotFoundError``, nothing read further
- Any failure in steps 1-4  -> ``RankingAggregationError``, nothing written
- Write failure in step 5   -> ``RankingPersistenceError``

No step is retried.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone

from app.logging_utils import log_event
from db.repositories.ranking_repository import RankingRepository
from ranking.aggregator import ShardAggregator
from ranking.composer import compose_ranking
from ranking.dictionary import build_name_dictionary
from ranking.errors import (
    RankingAggregationError,
    RankingError,
    RankingPersistenceError,
    SourceDocumentNotFoundError,
)
from ranking.models import COUNT_SOURCES, SORT_DIRECTIONS, CountSource, RatingEntry, SortDirection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankingRunResult:
    """
    Structured output of a single orchestrator run.

    Attributes
    ----------
    ranking_id:
        Id of the newly created ranking document.
    entity_count:
        N, the number of entities aggregated.
    sort_direction:
        Direction the ranking was sorted in.
    count_source:
        How N was determined (``"fixed"`` or ``"live"``).
    ranking:
        The persisted entries, in ranking order.
    computed_at:
        UTC timestamp when the run completed.
    """

    ranking_id: str
    entity_count: int
    sort_direction: SortDirection
    count_source: CountSource
    ranking: tuple[RatingEntry, ...]
    computed_at: datetime


class RankingOrchestrator:
    """
    Coordinates one ranking aggregation.

    Parameters
    ----------
    repository:
        Typed access to the document store.
    aggregator:
        Shard fan-out. Defaults to a sequential aggregator reading through
        *repository*.
    sort_direction:
        ``"desc"`` (leaderboard, highest first) or ``"asc"``.
    count_source:
        ``"fixed"`` uses *fixed_entity_count*; ``"live"`` counts the shard root
        collection.
    fixed_entity_count:
        N when *count_source* is ``"fixed"``.
    include_timestamp:
        Stamp the ranking document with a server-assigned creation time.
    """

    def __init__(
        self,
        repository: RankingRepository,
        *,
        aggregator: ShardAggregator | None = None,
        sort_direction: SortDirection = "desc",
        count_source: CountSource = "fixed",
        fixed_entity_count: int = 89,
        include_timestamp: bool = True,
    ) -> None:
        if sort_direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unsupported sort direction {sort_direction!r}.")
        if count_source not in COUNT_SOURCES:
            raise ValueError(f"Unsupported count source {count_source!r}.")
        if fixed_entity_count < 0:
            raise ValueError("fixed_entity_count must be non-negative.")

        self._repository = repository
        self._aggregator = aggregator or ShardAggregator(repository.fetch_shards, max_workers=1)
        self._sort_direction = sort_direction
        self._count_source = count_source
        self._fixed_entity_count = fixed_entity_count
        self._include_timestamp = include_timestamp

    def run(self) -> RankingRunResult:
        """
        Execute the full pipeline and return the persisted result.

        Raises
        ------
        SourceDocumentNotFoundError
            If the entity list document does not exist.
        RankingAggregationError
            If any read or validation fails before the write.
        RankingPersistenceError
            If the ranking document cannot be created.
        """
        run_start = time.monotonic()
        log_event(
            logger,
            logging.INFO,
            "ranking_run_started",
            sort_direction=self._sort_direction,
            count_source=self._count_source,
        )

        ranking = self._compute()
        ranking_id = self._persist(ranking)

        computed_at = datetime.now(tz=timezone.utc)
        log_event(
            logger,
            logging.INFO,
            "ranking_run_completed",
            ranking_id=ranking_id,
            entity_count=len(ranking),
            elapsed_seconds=round(time.monotonic() - run_start, 3),
        )
        return RankingRunResult(
            ranking_id=ranking_id,
            entity_count=len(ranking),
            sort_direction=self._sort_direction,
            count_source=self._count_source,
            ranking=ranking,
            computed_at=computed_at,
        )

    # ------------------------------------------------------------------
    # Internal: steps 1-4
    # ------------------------------------------------------------------

    def _compute(self) -> tuple[RatingEntry, ...]:
        try:
            records = self._repository.load_entity_records()
            if records is None:
                raise SourceDocumentNotFoundError(
                    self._repository.layout.source_document_path
                )

            dictionary = build_name_dictionary(records)
            n = self._resolve_entity_count()
            logger.debug(
                "_compute dictionary_size=%d entity_count=%d", len(dictionary), n
            )

            entries = self._aggregator.aggregate(n, dictionary)
        except RankingError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Ranking aggregation failed: %s", exc, exc_info=True)
            raise RankingAggregationError(f"Failed to aggregate ranking: {exc}") from exc

        return compose_ranking(entries, self._sort_direction)

    def _resolve_entity_count(self) -> int:
        if self._count_source == "fixed":
            return self._fixed_entity_count
        n = self._repository.count_shard_groups()
        logger.info("Live entity count resolved: %d", n)
        return n

    # ------------------------------------------------------------------
    # Internal: step 5
    # ------------------------------------------------------------------

    def _persist(self, ranking: tuple[RatingEntry, ...]) -> str:
        try:
            return self._repository.save_ranking(
                ranking, include_timestamp=self._include_timestamp
            )
        except Exception as exc:  # noqa: BLE001
            logger.error("Ranking persistence failed: %s", exc, exc_info=True)
            raise RankingPersistenceError(f"Failed to persist ranking: {exc}") from exc
