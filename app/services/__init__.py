"""
app/services package marker.
"""

from app.services.ranking_callable import CallableError, invoke_aggregate_ranking
from app.services.ranking_orchestrator import (
    RankingOrchestrator,
    RankingRunResult,
)
from app.services.ranking_service import build_ranking_orchestrator, run_ranking_aggregation

__all__ = [
    "CallableError",
    "invoke_aggregate_ranking",
    "RankingOrchestrator",
    "RankingRunResult",
    "build_ranking_orchestrator",
    "run_ranking_aggregation",
]
