"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation and injection.
"""

from __future__ import annotations

import hmac
import logging

from fastapi import Depends, Header, HTTPException, Request, status

from app.config import RankingSettings, get_ranking_settings
from app.failure_codes import FORBIDDEN_MESSAGE
from db.repositories.document_store import DocumentStore

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


def get_settings() -> RankingSettings:
    """
    Ranking settings for the current request. Overridable in tests.
    """

    return get_ranking_settings()


def get_document_store(request: Request) -> DocumentStore:
    """
    Return the document store built for this application in its lifespan.
    """

    store = getattr(request.app.state, "document_store", None)
    if store is None:
        raise RuntimeError("Document store has not been initialised.")
    return store


def require_api_key(
    x_api_key: str | None = Header(default=None, alias=API_KEY_HEADER),
    settings: RankingSettings = Depends(get_settings),
) -> None:
    """
    Reject the request unless the shared-secret header matches the configured key.
    """

    expected = settings.api_key
    if not x_api_key or not expected or not hmac.compare_digest(
        x_api_key.encode("utf-8"), expected.encode("utf-8")
    ):
        logger.warning("Rejected request with missing or invalid %s header", API_KEY_HEADER)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=FORBIDDEN_MESSAGE,
        )
