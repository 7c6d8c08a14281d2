"""
app/services/ranking_service.py

Single entry point for ranking aggregation shared by every trigger.

HTTP, callable, scheduler and CLI adapters all call
:func:`run_ranking_aggregation`; only their error-to-response mapping differs.
"""

from __future__ import annotations

from app.config import RankingSettings, get_ranking_settings
from app.services.ranking_orchestrator import RankingOrchestrator, RankingRunResult
from db.repositories.document_store import DocumentStore
from db.repositories.ranking_repository import RankingRepository
from ranking.aggregator import ShardAggregator


def build_ranking_orchestrator(
    store: DocumentStore,
    settings: RankingSettings,
) -> RankingOrchestrator:
    """Wire repository, aggregator and orchestrator from *settings*."""
    repository = RankingRepository(store, settings.store_layout())
    aggregator = ShardAggregator(
        repository.fetch_shards,
        max_workers=settings.fetch_concurrency,
        timeout_seconds=settings.aggregation_timeout_seconds,
    )
    return RankingOrchestrator(
        repository,
        aggregator=aggregator,
        sort_direction=settings.sort_direction,
        count_source=settings.count_source,
        fixed_entity_count=settings.fixed_entity_count,
        include_timestamp=settings.include_timestamp,
    )


def run_ranking_aggregation(
    store: DocumentStore,
    settings: RankingSettings | None = None,
) -> RankingRunResult:
    """
    Compute and persist one ranking snapshot.

    Exceptions from the orchestrator propagate unchanged; callers decide how
    to surface them.
    """
    return build_ranking_orchestrator(store, settings or get_ranking_settings()).run()
