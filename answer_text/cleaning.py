"""
Small, deterministic clean-up helpers for answer text.

Kept conservative like the answer post-processing: markup is removed and
blank lines are normalized, the wording itself is never touched.
"""

from __future__ import annotations

import random
import re
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

# Unterminated trailing tags ("<div") are removed as well.
_HTML_TAG_PATTERN = re.compile(r"<[^>]*>?")
_LINE_BREAK_RUN_PATTERN = re.compile(r"\n{2,}")


def remove_html_tags(text: str) -> str:
    return _HTML_TAG_PATTERN.sub("", text)


def remove_extra_line_breaks(text: str) -> str:
    """Collapse runs of blank lines so paragraphs are separated by exactly one."""
    return _LINE_BREAK_RUN_PATTERN.sub("\n\n", text)


def choose_k(items: Sequence[T], k: int, rng: Optional[random.Random] = None) -> list[T]:
    """
    Randomly pick up to ``k`` items without repetition.

    The input sequence is left untouched. Asking for more items than
    available returns all of them in random order.

    Raises:
        ValueError: If ``k`` is negative.
    """
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    rng = rng or random
    return rng.sample(list(items), min(k, len(items)))
