"""
Contiguous fixed-size partitioning shared by the order and e-mail stages.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """
    Split ``items`` into ceil(len/size) lists of ``size`` (the last may be
    shorter). Concatenating the result gives back the original order.
    """

    if size < 1:
        raise ValueError("Batch size must be at least 1.")
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


def batch_count(total: int, size: int) -> int:
    if size < 1:
        raise ValueError("Batch size must be at least 1.")
    return -(-total // size)
