"""
ranking/shard_ids.py

Key format shared with the counter write path.

Each entity's shards live under a shard group whose document id is the
entity index rendered as a zero-padded decimal string, e.g. ``7 -> "0007"``.
Both sides must agree on ``SHARD_ID_WIDTH``; changing it orphans every
existing shard group.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Final

SHARD_ID_WIDTH: Final[int] = 4
"""Minimum number of decimal digits in a shard group id."""


def format_shard_group_id(index: int, *, width: int = SHARD_ID_WIDTH) -> str:
    """
    Render *index* as a shard group id.

    Indices needing more than *width* digits are rendered in full, never
    truncated.
    """
    if index < 0:
        raise ValueError(f"Shard group index must be non-negative, got {index}.")
    return str(index).zfill(width)


def shard_group_ids(n: int, *, width: int = SHARD_ID_WIDTH) -> Iterator[str]:
    """Yield shard group ids for indices ``0..n-1``."""
    if n < 0:
        raise ValueError(f"Entity count must be non-negative, got {n}.")
    for index in range(n):
        yield format_shard_group_id(index, width=width)
