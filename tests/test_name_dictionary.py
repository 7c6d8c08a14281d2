"""
tests/test_name_dictionary.py

Unit tests for build_name_dictionary. Pure Python, no I/O.
"""

from __future__ import annotations

from ranking.dictionary import build_name_dictionary
from ranking.models import EntityRecord


def _record(entity_id: str, name: str) -> EntityRecord:
    return EntityRecord(id=entity_id, name=name, url=f"https://example.com/{entity_id}")


class TestBuildNameDictionary:
    def test_empty_input_gives_empty_mapping(self) -> None:
        assert build_name_dictionary([]) == {}

    def test_maps_every_id_to_its_name(self) -> None:
        records = [_record("0000", "Alice"), _record("0001", "Bob")]
        assert build_name_dictionary(records) == {"0000": "Alice", "0001": "Bob"}

    def test_duplicate_id_keeps_last_occurrence(self) -> None:
        records = [
            _record("0003", "First"),
            _record("0004", "Other"),
            _record("0003", "Second"),
        ]
        dictionary = build_name_dictionary(records)
        assert dictionary["0003"] == "Second"
        assert set(dictionary) == {"0003", "0004"}

    def test_url_is_not_used(self) -> None:
        records = [EntityRecord(id="0000", name="Alice")]
        assert build_name_dictionary(records) == {"0000": "Alice"}

    def test_accepts_any_iterable(self) -> None:
        records = (_record(f"{i:04d}", f"n{i}") for i in range(3))
        assert len(build_name_dictionary(records)) == 3
