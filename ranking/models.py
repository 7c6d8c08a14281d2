"""
ranking/models.py

Record shapes read from and written to the document store.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SortDirection = Literal["asc", "desc"]
CountSource = Literal["fixed", "live"]

SORT_DIRECTIONS: frozenset[str] = frozenset({"asc", "desc"})
COUNT_SOURCES: frozenset[str] = frozenset({"fixed", "live"})


class EntityRecord(BaseModel):
    """
    One ranked subject as listed in the source document.

    ``url`` is carried for completeness; the ranking pipeline never reads it.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(min_length=1)
    name: str
    url: str | None = None


class ShardRecord(BaseModel):
    """One partial counter document."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    count: int = Field(strict=True, ge=0)


class RatingEntry(BaseModel):
    """Aggregated total for one entity."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    rating: int = Field(ge=0)
