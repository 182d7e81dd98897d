"""Overlap-aware merging of streamed text fragments."""

from __future__ import annotations

from typing import Iterable

from .logging_config import get_logger

logger = get_logger(__name__)


def merge_fragments(first: str, second: str) -> str:
    """
    Concatenate two fragments without repeating their shared overlap.

    The longest suffix of ``first`` that is also a prefix of ``second`` is
    written once. If one fragment contains the other, the longer one is
    returned unchanged.

    Examples:
        merge_fragments("hello wor", "world")  # "hello world"
        merge_fragments("abc", "b")            # "abc"
        merge_fragments("foo", "bar")          # "foobar"
    """
    if not first:
        return second
    if not second:
        return first

    if second in first:
        return first
    if first in second:
        return second

    for overlap in range(min(len(first), len(second)), 0, -1):
        if first[-overlap:] == second[:overlap]:
            logger.debug(f"Merging fragments with overlap of {overlap} chars")
            return first[:-overlap] + second

    return first + second


def merge_stream(fragments: Iterable[str]) -> str:
    """Fold fragments left to right with merge_fragments()."""
    merged = ""
    for fragment in fragments:
        merged = merge_fragments(merged, fragment)
    return merged
