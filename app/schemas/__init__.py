"""
app/schemas package marker.
"""

from app.schemas.ranking import (
    CallableErrorDetail,
    CallableErrorResponse,
    CallableRequest,
    CallableResponse,
    MessageResponse,
    RankingAggregationResponse,
)

__all__ = [
    "CallableErrorDetail",
    "CallableErrorResponse",
    "CallableRequest",
    "CallableResponse",
    "MessageResponse",
    "RankingAggregationResponse",
]
