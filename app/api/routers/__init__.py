"""
app/api/routers package marker.
"""

from app.api.routers.callable_router import router as callable_router
from app.api.routers.ranking_router import router as ranking_router

__all__ = [
    "callable_router",
    "ranking_router",
]
