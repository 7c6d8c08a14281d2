"""
app/schemas/ranking.py

Request and response envelopes for the ranking triggers.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RankingAggregationResponse(BaseModel):
    """
    HTTP success envelope.
    """

    success: bool = True
    ranking_id: str
    entity_count: int = Field(..., ge=0)


class MessageResponse(BaseModel):
    """
    HTTP failure envelope. ``message`` is always generic.
    """

    message: str


class CallableRequest(BaseModel):
    """
    Callable wire request. The ranking trigger takes no arguments, so
    ``data`` is accepted and ignored.
    """

    data: Any = None


class CallableResponse(BaseModel):
    """
    Callable wire success envelope.
    """

    result: dict[str, Any]


class CallableErrorDetail(BaseModel):
    status: str
    message: str


class CallableErrorResponse(BaseModel):
    """
    Callable wire failure envelope.
    """

    error: CallableErrorDetail
