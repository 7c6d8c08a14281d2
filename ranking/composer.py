"""
ranking/composer.py

Final ordering of aggregated entries.
"""

from __future__ import annotations

from collections.abc import Iterable

from ranking.models import SORT_DIRECTIONS, RatingEntry, SortDirection


def compose_ranking(
    entries: Iterable[RatingEntry],
    direction: SortDirection = "desc",
) -> tuple[RatingEntry, ...]:
    """
    Sort *entries* by ``rating``.

    ``"desc"`` puts the highest rating first, ``"asc"`` the lowest. The sort is
    stable in both directions, so equal ratings keep their input order.
    """
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"Unsupported sort direction {direction!r}.")
    return tuple(
        sorted(entries, key=lambda entry: entry.rating, reverse=direction == "desc")
    )
