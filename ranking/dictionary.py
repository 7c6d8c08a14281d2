"""
ranking/dictionary.py

Id -> display name lookup built from the entity list.
"""

from __future__ import annotations

from collections.abc import Iterable

from ranking.models import EntityRecord


def build_name_dictionary(records: Iterable[EntityRecord]) -> dict[str, str]:
    """
    Map each entity id to its display name.

    Duplicate ids are not an error: the later record overwrites the earlier
    one, so the result reflects the last occurrence in input order.
    """
    dictionary: dict[str, str] = {}
    for record in records:
        dictionary[record.id] = record.name
    return dictionary
