"""
app/services/ranking_callable.py

Remote-callable flavour of the ranking trigger.

Unlike the HTTP endpoint there is no verb or header handling: the caller
either gets a result payload or an opaque :class:`CallableError`.
"""

from __future__ import annotations

import logging
from typing import Any

from app.config import RankingSettings
from app.failure_codes import CALLABLE_INTERNAL_STATUS, NOT_FOUND_MESSAGE
from app.services.ranking_service import run_ranking_aggregation
from db.repositories.document_store import DocumentStore
from ranking.errors import SourceDocumentNotFoundError

logger = logging.getLogger(__name__)


class CallableError(Exception):
    """
    Opaque failure signal returned to callable clients.

    Carries a status code only; the underlying cause is never attached.
    """

    def __init__(self, status: str = CALLABLE_INTERNAL_STATUS) -> None:
        super().__init__(status)
        self.status = status
        self.message = status


def invoke_aggregate_ranking(
    store: DocumentStore,
    settings: RankingSettings | None = None,
) -> dict[str, Any]:
    """
    Run the aggregation and return the callable result payload.

    A missing source document is reported in the payload, not raised.
    """
    try:
        result = run_ranking_aggregation(store, settings)
    except SourceDocumentNotFoundError as exc:
        logger.info("Callable aggregate_ranking: %s", exc)
        return {"success": False, "message": NOT_FOUND_MESSAGE}
    except Exception:  # noqa: BLE001
        logger.exception("Callable aggregate_ranking failed")
        raise CallableError() from None

    return {
        "success": True,
        "ranking_id": result.ranking_id,
        "entity_count": result.entity_count,
    }
