"""
tests/test_ranking_composer.py

compose_ranking ordering, length and permutation contracts.
"""

from __future__ import annotations

import pytest

from ranking.composer import compose_ranking
from ranking.models import RatingEntry


def _entries(*ratings: int) -> list[RatingEntry]:
    return [
        RatingEntry(id=f"{index:04d}", name=f"e{index}", rating=rating)
        for index, rating in enumerate(ratings)
    ]


class TestComposeRanking:
    def test_descending_puts_highest_first(self) -> None:
        ranking = compose_ranking(_entries(1, 5, 3), "desc")
        assert [entry.rating for entry in ranking] == [5, 3, 1]

    def test_ascending_puts_lowest_first(self) -> None:
        ranking = compose_ranking(_entries(1, 5, 3), "asc")
        assert [entry.rating for entry in ranking] == [1, 3, 5]

    def test_default_direction_is_descending(self) -> None:
        ranking = compose_ranking(_entries(0, 2))
        assert ranking[0].rating == 2

    @pytest.mark.parametrize("direction", ["asc", "desc"])
    def test_output_is_permutation_of_input(self, direction: str) -> None:
        entries = _entries(4, 4, 0, 9, 1, 4)
        ranking = compose_ranking(entries, direction)  # type: ignore[arg-type]
        assert len(ranking) == len(entries)
        assert sorted(e.id for e in ranking) == sorted(e.id for e in entries)

    @pytest.mark.parametrize("direction", ["asc", "desc"])
    def test_ties_keep_input_order(self, direction: str) -> None:
        entries = _entries(2, 2, 2)
        ranking = compose_ranking(entries, direction)  # type: ignore[arg-type]
        assert [e.id for e in ranking] == ["0000", "0001", "0002"]

    def test_empty_input(self) -> None:
        assert compose_ranking([], "desc") == ()

    def test_result_is_immutable_sequence(self) -> None:
        assert isinstance(compose_ranking(_entries(1), "desc"), tuple)

    def test_unknown_direction_rejected(self) -> None:
        with pytest.raises(ValueError):
            compose_ranking(_entries(1), "sideways")  # type: ignore[arg-type]
