"""
ranking/aggregator.py

Sums sharded counters per entity.

Each entity index ``i`` in ``0..N-1`` maps to shard group
``format_shard_group_id(i)``. Groups are read independently and in parallel;
totals are keyed by index so the order in which reads complete has no effect
on the result.

Failure contract
----------------
- Any failing read aborts the whole aggregation (``ShardFetchError``).
- Exceeding the deadline aborts it (``AggregationTimeoutError``).
- No partial result is ever returned.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Final

from ranking.errors import AggregationTimeoutError, ShardFetchError
from ranking.models import RatingEntry, ShardRecord
from ranking.shard_ids import shard_group_ids

logger = logging.getLogger(__name__)

UNKNOWN_NAME: Final[str] = "Unknown"
"""Display name used for entities missing from the name dictionary."""

ShardFetcher = Callable[[str], Sequence[ShardRecord]]


class ShardAggregator:
    """
    Produces one ``RatingEntry`` per entity index.

    Parameters
    ----------
    fetch_shards:
        Returns every shard record stored under a shard group id. An empty
        sequence means the entity has no votes yet.
    max_workers:
        Upper bound on concurrent reads. ``1`` reads groups one at a time.
    timeout_seconds:
        Deadline for the whole fan-out. ``None`` waits indefinitely.

    Notes
    -----
    On timeout or failure, queued reads are cancelled but reads already in
    flight are not interrupted; their threads finish in the background and
    their results are discarded. Nothing is written for an aborted run.
    """

    def __init__(
        self,
        fetch_shards: ShardFetcher,
        *,
        max_workers: int = 8,
        timeout_seconds: float | None = None,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1.")
        self._fetch_shards = fetch_shards
        self._max_workers = max_workers
        self._timeout_seconds = timeout_seconds

    def aggregate(self, n: int, dictionary: Mapping[str, str]) -> list[RatingEntry]:
        """
        Return entries for indices ``0..n-1`` in index order.

        ``name`` comes from *dictionary*, or ``UNKNOWN_NAME`` when the id is
        absent.
        """
        group_ids = list(shard_group_ids(n))
        if not group_ids:
            return []

        totals = self._collect_totals(group_ids)
        entries = [
            RatingEntry(
                id=group_id,
                name=dictionary.get(group_id, UNKNOWN_NAME),
                rating=totals[index],
            )
            for index, group_id in enumerate(group_ids)
        ]
        logger.debug("aggregate n=%d -> %d entries", n, len(entries))
        return entries

    def _sum_group(self, group_id: str) -> int:
        return sum(shard.count for shard in self._fetch_shards(group_id))

    def _collect_totals(self, group_ids: list[str]) -> dict[int, int]:
        workers = min(self._max_workers, len(group_ids))
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="shard-fetch")
        try:
            futures: dict[Future[int], int] = {
                executor.submit(self._sum_group, group_id): index
                for index, group_id in enumerate(group_ids)
            }
            done, not_done = wait(
                futures,
                timeout=self._timeout_seconds,
                return_when=FIRST_EXCEPTION,
            )

            for future in done:
                exc = future.exception()
                if exc is not None:
                    group_id = group_ids[futures[future]]
                    logger.warning("Shard fetch failed group=%s: %s", group_id, exc)
                    raise ShardFetchError(group_id) from exc

            if not_done:
                raise AggregationTimeoutError(
                    f"{len(not_done)} of {len(group_ids)} shard groups not read "
                    f"within {self._timeout_seconds}s."
                )

            return {futures[future]: future.result() for future in done}
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
