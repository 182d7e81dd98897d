"""
Footnote Reconciliation for Generated Answers

LLM answers cite their sources with markdown footnote markers ([^1], [^2])
but the numbering they produce is often broken: grouped markers ([^1, ^2]),
the same number repeated everywhere, numbers past the end of the reference
list, or no markers at all. This module rewrites the markers so they line up
with the reference list and appends the matching footnote definitions.

Design:
- Scanning and rewriting are separate: find_markers() tokenizes the text into
  ordered FootnoteMarker occurrences, strip_markers()/renumber_markers()
  rebuild the text from those spans.
- The reconciler never drops a reference: every reference gets a definition
  line, and references nobody cited are listed on a trailing marker line
  prefixed with MARKER_LINE_SYMBOL.

Usage:
    from answer_text.footnotes import reconcile
    from answer_text.models import Reference

    reconcile("Paris is the capital.[^1]", [Reference(exact_quote="Paris ...")])
    # "Paris is the capital.[^1]\\n\\n[^1]: Paris"
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence
from urllib.parse import urlsplit

from .exceptions import InvalidReferenceURLError
from .logging_config import get_logger
from .models import Answer, Reference

logger = get_logger(__name__)

# Prefix of the line that lists citations the answer text did not place.
MARKER_LINE_SYMBOL = "⁜"

_MARKER_PATTERN = re.compile(r"\[\^([0-9]+)]")
# [^1, ^2, ^3] or [^1,^2,^3]
_GROUPED_MARKER_PATTERN = re.compile(r"\[\^([0-9]+)(?:,\s*\^([0-9]+))+]")
_NUMBER_PATTERN = re.compile(r"[0-9]+")

# Anything that is not a letter, number or whitespace. \w also admits "_".
_QUOTE_NOISE_PATTERN = re.compile(r"[^\w\s]|_")
_WHITESPACE_PATTERN = re.compile(r"\s+")

# Characters a URL host may not contain. ":" and brackets are left to urlsplit (IPv6).
_FORBIDDEN_HOST_CHARS = frozenset(" \t\n\r\x00#/<>?@\\^|%")


@dataclass(frozen=True)
class FootnoteMarker:
    """A single [^n] occurrence; start/end are offsets into the scanned text."""
    start: int
    end: int
    label: str

    @property
    def number(self) -> int:
        return int(self.label)


def expand_grouped_markers(text: str) -> str:
    """Rewrite every grouped marker [^1, ^2] as adjacent markers [^1], [^2]."""
    def _expand(match: re.Match) -> str:
        numbers = _NUMBER_PATTERN.findall(match.group())
        return ", ".join(f"[^{number}]" for number in numbers)

    return _GROUPED_MARKER_PATTERN.sub(_expand, text)


def find_markers(text: str) -> list[FootnoteMarker]:
    """Return every single [^n] marker in order of appearance, duplicates included."""
    return [
        FootnoteMarker(start=match.start(), end=match.end(), label=match.group(1))
        for match in _MARKER_PATTERN.finditer(text)
    ]


def _rewrite_markers(
    text: str,
    markers: Sequence[FootnoteMarker],
    replacement: Callable[[int, FootnoteMarker], str],
) -> str:
    parts = []
    cursor = 0
    for index, marker in enumerate(markers):
        parts.append(text[cursor:marker.start])
        parts.append(replacement(index, marker))
        cursor = marker.end
    parts.append(text[cursor:])
    return "".join(parts)


def strip_markers(text: str, markers: Optional[Sequence[FootnoteMarker]] = None) -> str:
    """Remove every single marker from ``text``."""
    if markers is None:
        markers = find_markers(text)
    return _rewrite_markers(text, markers, lambda index, marker: "")


def renumber_markers(text: str, markers: Optional[Sequence[FootnoteMarker]] = None) -> str:
    """Replace markers left to right with [^1], [^2], ... regardless of their number."""
    if markers is None:
        markers = find_markers(text)
    return _rewrite_markers(text, markers, lambda index, marker: f"[^{index + 1}]")


def needs_correction(markers: Sequence[FootnoteMarker], reference_count: int) -> bool:
    """
    Detect degenerate citation numbering that has to be renumbered.

    True when any of these holds, checked in this order:
    (a) one marker per reference, but all markers carry the same number;
    (b) all markers carry the same number and it is past the last reference;
    (c) every marker is past the last reference.
    """
    labels = [marker.label for marker in markers]
    all_identical = all(label == labels[0] for label in labels) if labels else True

    if len(labels) == reference_count and all_identical:
        return True
    if labels and all_identical and int(labels[0]) > reference_count:
        return True
    if labels and all(marker.number > reference_count for marker in markers):
        return True
    return False


def clean_quote(quote: str) -> str:
    """Replace punctuation and symbols with spaces and collapse whitespace runs."""
    return _WHITESPACE_PATTERN.sub(" ", _QUOTE_NOISE_PATTERN.sub(" ", quote))


def reference_hostname(url: str) -> str:
    """
    Hostname of ``url`` without a leading "www.".

    Internationalized hosts come back in their ASCII (punycode) form.

    Raises:
        InvalidReferenceURLError: If ``url`` is not an absolute URL with a
            valid host and port.
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        parts.port  # raises on a non-numeric or out-of-range port
    except ValueError as exc:
        raise InvalidReferenceURLError(url, exc) from exc

    if not parts.scheme or not hostname:
        raise InvalidReferenceURLError(url)

    if any(char in _FORBIDDEN_HOST_CHARS for char in hostname):
        raise InvalidReferenceURLError(url)

    try:
        hostname = hostname.encode("idna").decode("ascii")
    except UnicodeError as exc:
        raise InvalidReferenceURLError(url, exc) from exc

    if hostname.startswith("www."):
        hostname = hostname[len("www."):]
    return hostname


def format_reference(index: int, reference: Reference) -> str:
    """Footnote definition line for the reference at 0-based ``index``."""
    citation = f"[^{index + 1}]: {clean_quote(reference.exact_quote)}"

    url = reference.url
    if not url or not url.startswith("http"):
        return citation

    return f"{citation} [{reference_hostname(url)}]({url})"


def format_references(references: Sequence[Reference]) -> str:
    """Reference block: one definition per reference, separated by blank lines."""
    return "\n\n".join(
        format_reference(index, reference)
        for index, reference in enumerate(references)
    )


def _compose(text: str, reference_block: str, marker_line: Optional[str] = None) -> str:
    sections = [text]
    if marker_line is not None:
        sections.append(f"{MARKER_LINE_SYMBOL}{marker_line}")
    sections.append(reference_block)
    return "\n\n".join(sections).strip()


def reconcile(answer_text: str, references: Optional[Sequence[Reference]]) -> str:
    """
    Align footnote markers in ``answer_text`` with ``references``.

    Args:
        answer_text: Generated answer, may contain [^n] or [^n1, ^n2] markers.
        references: Ordered references; position i backs marker [^i+1].

    Returns:
        Trimmed markdown: the (possibly renumbered) text, an optional
        marker line listing uncited references, and the reference block.
        Without references all markers are stripped and no block is added.

    Raises:
        InvalidReferenceURLError: If an http-prefixed reference URL cannot be parsed.
    """
    references = list(references or [])
    text = expand_grouped_markers(answer_text)

    if not references:
        logger.debug("No references, stripping footnote markers")
        return strip_markers(text).strip()

    markers = find_markers(text)
    reference_count = len(references)

    if not markers:
        logger.debug(f"No footnote markers found, appending all {reference_count} citations")
        citations = "".join(f"[^{number}]" for number in range(1, reference_count + 1))
        return _compose(text, format_references(references), marker_line=citations)

    if needs_correction(markers, reference_count):
        logger.debug(
            f"Renumbering {len(markers)} degenerate footnote markers "
            f"against {reference_count} references"
        )
        return _compose(renumber_markers(text, markers), format_references(references))

    if reference_count > len(markers):
        used = {marker.number for marker in markers}
        unused = "".join(
            f"[^{number}]"
            for number in range(1, reference_count + 1)
            if number not in used
        )
        logger.debug(f"Appending uncited references: {unused}")
        return _compose(text, format_references(references), marker_line=unused)

    return _compose(text, format_references(references))


def build_markdown(answer: Answer) -> str:
    """Reconcile an Answer record; see reconcile()."""
    return reconcile(answer.answer, answer.references)
