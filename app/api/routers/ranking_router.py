"""
app/api/routers/ranking_router.py

HTTP trigger for ranking aggregation.

POST only; other verbs are answered with 405 by routing before any
dependency runs. The ``x-api-key`` check runs before the document store is
touched.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_document_store, get_settings, require_api_key
from app.config import RankingSettings
from app.failure_codes import INTERNAL_ERROR_MESSAGE, NOT_FOUND_MESSAGE
from app.schemas.ranking import MessageResponse, RankingAggregationResponse
from app.services.ranking_service import run_ranking_aggregation
from db.repositories.document_store import DocumentStore
from ranking.errors import SourceDocumentNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ranking"])


@router.post(
    "/aggregate-ranking",
    response_model=RankingAggregationResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_api_key)],
    responses={
        403: {"model": MessageResponse},
        404: {"model": MessageResponse},
        405: {"model": MessageResponse},
        500: {"model": MessageResponse},
    },
)
def aggregate_ranking(
    store: DocumentStore = Depends(get_document_store),
    settings: RankingSettings = Depends(get_settings),
) -> RankingAggregationResponse:
    """
    Compute and persist a new ranking snapshot.

    Raises HTTP 404 when the entity list document does not exist.
    Raises HTTP 500 with a generic message for any other failure.
    """
    try:
        result = run_ranking_aggregation(store, settings)
    except SourceDocumentNotFoundError as exc:
        logger.info("aggregate_ranking: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=NOT_FOUND_MESSAGE,
        ) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("aggregate_ranking failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        ) from exc

    logger.info(
        "Ranking aggregated ranking_id=%s entity_count=%d",
        result.ranking_id,
        result.entity_count,
    )
    return RankingAggregationResponse(
        ranking_id=result.ranking_id,
        entity_count=result.entity_count,
    )
