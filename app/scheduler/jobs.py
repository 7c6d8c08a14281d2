"""
app/scheduler/jobs.py

APScheduler-based periodic ranking aggregation.

Schedule (UTC)
--------------
  ranking_aggregation - cron ``RANKING_SCHEDULE_CRON_HOUR`` /
                        ``RANKING_SCHEDULE_CRON_MINUTE`` (default: top of
                        every hour)

Lifecycle
----------
Call ``build_scheduler()`` once to get a configured ``BackgroundScheduler``.
Start it on app boot; shut it down gracefully on app shutdown.
The scheduler is wired into FastAPI via the ``lifespan`` context in main.py
and is only built when ``RANKING_SCHEDULE_ENABLED`` is true.
"""

from __future__ import annotations

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from app.config import RankingSettings, SchedulerSettings
from app.services.ranking_service import run_ranking_aggregation
from db.repositories.document_store import DocumentStore
from ranking.errors import SourceDocumentNotFoundError

logger = logging.getLogger(__name__)


def run_scheduled_ranking(store: DocumentStore, settings: RankingSettings) -> None:
    """
    Run one ranking aggregation. Failures are logged, never raised, so one bad
    run does not unschedule the job.
    """
    logger.info("Scheduler: ranking_aggregation starting")
    try:
        result = run_ranking_aggregation(store, settings)
    except SourceDocumentNotFoundError as exc:
        logger.warning("Scheduler: ranking_aggregation skipped: %s", exc)
        return
    except Exception as exc:  # noqa: BLE001
        logger.warning("Scheduler: ranking_aggregation failed: %s", exc, exc_info=True)
        return

    logger.info(
        "Scheduler: ranking_aggregation complete ranking_id=%s entity_count=%d",
        result.ranking_id,
        result.entity_count,
    )


def build_scheduler(
    store: DocumentStore,
    settings: RankingSettings,
    schedule: SchedulerSettings,
) -> BackgroundScheduler:
    """
    Build and register the periodic ranking job.

    Returns a configured but *not yet started* ``BackgroundScheduler``.
    The caller must call ``.start()`` and ``.shutdown(wait=True)`` at the
    appropriate lifecycle points.
    """
    scheduler = BackgroundScheduler(timezone="UTC")

    scheduler.add_job(
        run_scheduled_ranking,
        trigger="cron",
        hour=schedule.cron_hour,
        minute=schedule.cron_minute,
        args=[store, settings],
        id="ranking_aggregation",
        name="Periodic ranking aggregation",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=600,
    )

    return scheduler
