"""
app/api/routers/callable_router.py

Callable-protocol transport for ranking aggregation.

Requests carry ``{"data": ...}``; responses are ``{"result": ...}`` on success
or ``{"error": {"status", "message"}}`` with HTTP 500 on failure. No
shared-secret header is involved.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_document_store, get_settings
from app.config import RankingSettings
from app.schemas.ranking import (
    CallableErrorDetail,
    CallableErrorResponse,
    CallableRequest,
    CallableResponse,
)
from app.services.ranking_callable import CallableError, invoke_aggregate_ranking
from db.repositories.document_store import DocumentStore

router = APIRouter(prefix="/callable", tags=["callable"])


@router.post(
    "/aggregate-ranking",
    response_model=CallableResponse,
    responses={500: {"model": CallableErrorResponse}},
)
def aggregate_ranking_callable(
    body: CallableRequest | None = Body(default=None),
    store: DocumentStore = Depends(get_document_store),
    settings: RankingSettings = Depends(get_settings),
) -> CallableResponse | JSONResponse:
    try:
        result = invoke_aggregate_ranking(store, settings)
    except CallableError as exc:
        payload = CallableErrorResponse(
            error=CallableErrorDetail(status=exc.status, message=exc.message)
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=payload.model_dump(),
        )
    return CallableResponse(result=result)
